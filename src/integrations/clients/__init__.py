"""
Integration clients.

Each client wraps exactly one external service and translates its failures
into the error types of src/error_handler.py.
"""

"""Error taxonomy for the chatbot service and its mapping to HTTP payloads."""
from typing import Any, Dict, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


class ChatbotError(Exception):
    """Base class for errors that carry their own HTTP status and message."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message}


class ClientError(ChatbotError):
    """Bad input from the caller (empty message, malformed body)."""

    status_code = 400


class ConfigurationError(ChatbotError):
    """A required secret or setting is missing. Operator-actionable, never retried."""

    status_code = 500


class DelegateError(ChatbotError):
    """
    The external answer service failed.

    With `upstream_status` set the service answered with a non-success status
    and the raw body is kept in `details` (502). Without it the call itself
    failed (transport, parsing) and surfaces as a plain 500.
    """

    def __init__(self, message: str, *, upstream_status: Optional[int] = None, details: Optional[str] = None):
        super().__init__(message)
        self.upstream_status = upstream_status
        self.details = details

    @property
    def status_code(self) -> int:  # type: ignore[override]
        return 502 if self.upstream_status is not None else 500

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message}
        if self.upstream_status is not None:
            payload["details"] = self.details if self.details is not None else ""
        return payload


class DataError(ChatbotError):
    """Catalog file unreadable or malformed. Recovered inside the catalog store."""


class ErrorHandler:
    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Tuple[int, Dict[str, Any]]:
        if isinstance(exc, ChatbotError):
            if exc.status_code >= 500:
                logger.error("%s: %s (context=%s)", type(exc).__name__, exc.message, context or {})
            else:
                logger.info("%s: %s", type(exc).__name__, exc.message)
            return exc.status_code, exc.to_payload()

        logger.error("Unhandled exception in chat service: %s", exc, exc_info=True)
        return 500, {"error": "An internal error occurred while processing your request. Please try again later."}

"""
Integrations layer.
This package contains all code used to communicate with external systems such as:
- The Gemini generative-language API (answers for messages the catalog cannot handle)

Key rule:
- Chatbot code MUST NOT call external APIs directly.
- The router talks to an answer delegate (src/integrations/clients), selected in ONE place (src/api/main.py).
"""

from .clients.gemini import GeminiDelegate, build_delegate

__all__ = ["GeminiDelegate", "build_delegate"]

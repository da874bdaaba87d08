"""
Gemini answer delegate.

Used by the chat router only when no local catalog match applies. The message
is forwarded as-is (single turn, no history) and the first text part of the
first candidate is returned.

Failures are never retried here: a missing key raises ConfigurationError,
a non-success answer from Gemini raises DelegateError with the upstream
status and raw body, anything else raises DelegateError without a status.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from src.error_handler import ConfigurationError, DelegateError
from src.utils.config_loader import DelegateConfig

logger = logging.getLogger(__name__)

MODEL_NAME = "gemini-2.5-flash"
NO_RESPONSE = "No response."
REQUEST_FAILED = "Gemini request failed."


def extract_reply_text(response: Any) -> str:
    """Text of candidates[0].content.parts[0], or the placeholder when any step is missing."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return NO_RESPONSE
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    if not parts:
        return NO_RESPONSE
    text = getattr(parts[0], "text", None)
    return text or NO_RESPONSE


def _raw_error_body(exc: genai_errors.APIError) -> str:
    details = getattr(exc, "details", None)
    if details is None:
        return str(exc)
    if isinstance(details, str):
        return details
    try:
        return json.dumps(details)
    except (TypeError, ValueError):
        return str(details)


class GeminiDelegate:
    def __init__(
        self,
        model: str = MODEL_NAME,
        api_key_env: str = "GEMINI_API_KEY",
        timeout_seconds: float = 30.0,
    ):
        self.model = model
        self.api_key_env = api_key_env
        self.timeout_seconds = timeout_seconds
        self._clients: Dict[str, genai.Client] = {}

    @classmethod
    def from_config(cls, cfg: DelegateConfig) -> "GeminiDelegate":
        return cls(model=cfg.model, api_key_env=cfg.api_key_env, timeout_seconds=cfg.timeout_seconds)

    def _api_key(self) -> str:
        # Read on every call so a key added to the environment is picked up without a restart.
        api_key = (os.environ.get(self.api_key_env) or "").strip()
        if not api_key:
            raise ConfigurationError(f"Gemini API key missing. Add {self.api_key_env} in .env file.")
        return api_key

    def _client(self, api_key: str) -> genai.Client:
        # One client per key; a rotated key gets a fresh client.
        client = self._clients.get(api_key)
        if client is None:
            client = genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(timeout=int(self.timeout_seconds * 1000)),
            )
            self._clients = {api_key: client}
        return client

    async def answer(self, message: str) -> str:
        client = self._client(self._api_key())

        logger.info("Delegating message to %s: %s", self.model, message[:100])
        try:
            response = await client.aio.models.generate_content(model=self.model, contents=message)
        except genai_errors.APIError as e:
            body = _raw_error_body(e)
            logger.error("Gemini request failed: %s %s", e.code, body)
            raise DelegateError(REQUEST_FAILED, upstream_status=e.code, details=body) from e
        except Exception as e:
            logger.error("Gemini request failed: %s: %s", type(e).__name__, e, exc_info=True)
            raise DelegateError(REQUEST_FAILED) from e

        return extract_reply_text(response)


def build_delegate(cfg: Optional[DelegateConfig] = None) -> GeminiDelegate:
    cfg = cfg or DelegateConfig()
    if cfg.backend != "gemini":
        raise ConfigurationError(f"Unsupported delegate backend: {cfg.backend}")
    return GeminiDelegate.from_config(cfg)

"""
Chat router - Runs local intent matching and falls back to the answer delegate
"""

import logging
from typing import Protocol

from src.chatbot.intent_classifier import ChatReply, IntentClassifier
from src.error_handler import ClientError

logger = logging.getLogger(__name__)

MESSAGE_REQUIRED = "Message is required"


class AnswerDelegate(Protocol):
    async def answer(self, message: str) -> str:
        ...


class ChatRouter:
    def __init__(self, classifier: IntentClassifier, delegate: AnswerDelegate):
        self.classifier = classifier
        self.delegate = delegate

    async def route(self, message: str) -> ChatReply:
        """Answer locally from the catalog when possible, otherwise ask the delegate."""
        if not message or not message.strip():
            raise ClientError(MESSAGE_REQUIRED)

        intent = self.classifier.classify(message)
        logger.info("[Router] intent=%s message='%s'", intent.label, message[:100])
        if intent.is_local:
            return intent.reply

        # The delegate receives the original, untrimmed text.
        text = await self.delegate.answer(message)
        return ChatReply(reply=text)

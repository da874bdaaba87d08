import pytest

from src.chatbot.intent_classifier import IntentClassifier
from src.chatbot.router import MESSAGE_REQUIRED, ChatRouter
from src.error_handler import ClientError, ConfigurationError


class DummyDelegate:
    def __init__(self, text="delegated answer", exc=None):
        self.text = text
        self.exc = exc
        self.calls = []

    async def answer(self, message):
        self.calls.append(message)
        if self.exc is not None:
            raise self.exc
        return self.text


@pytest.mark.asyncio
@pytest.mark.parametrize("message", ["", "   ", "\n\t"])
async def test_empty_message_is_client_error(catalogue, message):
    delegate = DummyDelegate()
    router = ChatRouter(IntentClassifier(catalogue), delegate)
    with pytest.raises(ClientError) as exc_info:
        await router.route(message)
    assert exc_info.value.message == MESSAGE_REQUIRED
    assert exc_info.value.status_code == 400
    assert delegate.calls == []


@pytest.mark.asyncio
async def test_local_match_never_calls_delegate(jacket_catalogue):
    delegate = DummyDelegate()
    router = ChatRouter(IntentClassifier(jacket_catalogue), delegate)
    reply = await router.route("I want a blue jacket")
    assert reply.reply == "Found 1 matching product(s)."
    assert delegate.calls == []


@pytest.mark.asyncio
async def test_unmatched_message_is_delegated_verbatim(jacket_catalogue):
    delegate = DummyDelegate(text="Hello from Gemini")
    router = ChatRouter(IntentClassifier(jacket_catalogue), delegate)
    reply = await router.route("  asdkjalksd  ")
    assert delegate.calls == ["  asdkjalksd  "]
    assert reply.to_payload() == {"reply": "Hello from Gemini"}


@pytest.mark.asyncio
async def test_delegate_errors_propagate(jacket_catalogue):
    err = ConfigurationError("Gemini API key missing. Add GEMINI_API_KEY in .env file.")
    router = ChatRouter(IntentClassifier(jacket_catalogue), DummyDelegate(exc=err))
    with pytest.raises(ConfigurationError):
        await router.route("asdkjalksd")


@pytest.mark.asyncio
async def test_router_does_not_mutate_catalogue(catalogue):
    before = catalogue.all()
    router = ChatRouter(IntentClassifier(catalogue), DummyDelegate())
    await router.route("show products")
    await router.route("sku 001")
    await router.route("duffel")
    assert catalogue.all() == before

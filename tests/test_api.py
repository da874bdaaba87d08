import pytest
from fastapi.testclient import TestClient

from src.api.main import app, get_catalogue, get_router
from src.chatbot.intent_classifier import IntentClassifier
from src.chatbot.router import ChatRouter
from src.error_handler import DelegateError
from src.integrations.clients.gemini import GeminiDelegate


class StaticDelegate:
    def __init__(self, text="General answer", exc=None):
        self.text = text
        self.exc = exc

    async def answer(self, message):
        if self.exc is not None:
            raise self.exc
        return self.text


@pytest.fixture
def make_client(jacket_catalogue):
    def _make(delegate=None, catalogue=None):
        cat = catalogue if catalogue is not None else jacket_catalogue
        router = ChatRouter(IntentClassifier(cat), delegate or StaticDelegate())
        app.dependency_overrides[get_catalogue] = lambda: cat
        app.dependency_overrides[get_router] = lambda: router
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


def test_health(make_client):
    client = make_client()
    assert client.get("/").json()["status"] == "healthy"
    assert client.get("/health").json()["products"] == 1


def test_products_returns_full_records(make_client):
    response = make_client().get("/products")
    assert response.status_code == 200
    assert response.json() == [
        {
            "id": 1,
            "sku": "TXJ001",
            "name": "Blue Jacket",
            "brand": "Acme",
            "category": "Outerwear",
            "price": 49.99,
            "stock": 10,
            "description": "Warm blue jacket",
        }
    ]


def test_products_filter_then_project_names(make_client, catalogue):
    client = make_client(catalogue=catalogue)
    assert client.get("/products", params={"names": "true"}).json() == [
        "Blue Jacket",
        "Rain Shell",
        "Trail Runner",
        "Travel Duffel",
    ]
    assert client.get("/products", params={"q": "outerwear", "names": "true"}).json() == ["Blue Jacket", "Rain Shell"]
    assert [p["id"] for p in client.get("/products", params={"q": "SHOE"}).json()] == [3]


def test_names_flag_must_be_exactly_true(make_client):
    body = make_client().get("/products", params={"names": "yes"}).json()
    assert isinstance(body[0], dict)


def test_chat_requires_message(make_client):
    client = make_client()
    for payload in ({"message": ""}, {"message": "   "}, {}):
        response = client.post("/chat", json=payload)
        assert response.status_code == 400
        assert response.json() == {"error": "Message is required"}


def test_chat_without_body_is_client_error(make_client):
    response = make_client().post("/chat")
    assert response.status_code == 400
    assert response.json() == {"error": "Message is required"}


def test_chat_malformed_message_is_client_error(make_client):
    response = make_client().post("/chat", json={"message": {"nested": True}})
    assert response.status_code == 400
    assert response.json()["error"] == "Malformed request"


def test_chat_list_scenario(make_client):
    response = make_client().post("/chat", json={"message": "show products"})
    assert response.status_code == 200
    assert response.json() == {"reply": "Here are the product names:", "products": ["Blue Jacket"]}


def test_chat_sku_scenario(make_client):
    body = make_client().post("/chat", json={"message": "sku-001"}).json()
    assert body["reply"] == "Found 1 matching product(s)."
    assert [p["id"] for p in body["products"]] == [1]


def test_chat_fuzzy_scenario(make_client):
    body = make_client().post("/chat", json={"message": "I want a blue jacket"}).json()
    assert body["products"][0]["description"] == "Warm blue jacket"


def test_chat_delegated_reply(make_client):
    response = make_client(delegate=StaticDelegate(text="Hi there!")).post("/chat", json={"message": "asdkjalksd"})
    assert response.status_code == 200
    assert response.json() == {"reply": "Hi there!"}


def test_chat_missing_key_scenario(make_client, monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    response = make_client(delegate=GeminiDelegate()).post("/chat", json={"message": "asdkjalksd"})
    assert response.status_code == 500
    assert response.json() == {"error": "Gemini API key missing. Add GEMINI_API_KEY in .env file."}


def test_chat_upstream_failure_is_502(make_client):
    err = DelegateError("Gemini request failed.", upstream_status=429, details='{"error": "quota"}')
    response = make_client(delegate=StaticDelegate(exc=err)).post("/chat", json={"message": "asdkjalksd"})
    assert response.status_code == 502
    assert response.json() == {"error": "Gemini request failed.", "details": '{"error": "quota"}'}


def test_chat_transport_failure_is_500(make_client):
    err = DelegateError("Gemini request failed.")
    response = make_client(delegate=StaticDelegate(exc=err)).post("/chat", json={"message": "asdkjalksd"})
    assert response.status_code == 500
    assert response.json() == {"error": "Gemini request failed."}

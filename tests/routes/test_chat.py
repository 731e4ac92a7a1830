import pytest
from fastapi.testclient import TestClient

from chefmate.errors import GenerationFailure
from chefmate.main import app
from chefmate.routes import chat as chat_routes


client = TestClient(app)

CONTEXT = {"name": "The Brass Anchor", "theme": "Coastal Tavern", "staffSize": 12}


class ReplayClient:
    def __init__(self, reply):
        self.reply = reply
        self.requests = []

    async def converse(
        self, system_prompt, history, user_message, options=None, *, max_history=10
    ):
        self.requests.append(
            {"history": list(history)[-max_history:], "user": user_message}
        )
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


@pytest.fixture
def replay(monkeypatch):
    def install(reply):
        stub = ReplayClient(reply)
        monkeypatch.setattr(chat_routes._advisor, "_completion_client", stub)
        monkeypatch.setattr(chat_routes._advisor, "_history_turns", 10)
        return stub

    return install


def test_chat_returns_categorised_advice(replay):
    stub = replay(
        "Recipe: **Rum Punch**\nIngredients:\n- 2 oz dark rum\nInstructions:\n- Shake and strain"
    )

    response = client.post(
        "/chat",
        json={
            "message": "Suggest a drink for the patio",
            "context": CONTEXT,
            "history": [{"role": "user", "content": "Hi"}, {"role": "assistant", "content": "Hello!"}],
            "responseLength": "detailed",
        },
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["category"] == "cocktails"
    [recommendation] = payload["recommendations"]
    assert recommendation["title"] == "Rum Punch"
    assert recommendation["recipe"]["ingredients"] == ["2 oz dark rum"]
    assert [turn["content"] for turn in stub.requests[0]["history"]] == ["Hi", "Hello!"]
    assert "comprehensive, detailed" in stub.requests[0]["user"]


def test_chat_reports_upstream_failure(replay):
    replay(GenerationFailure("connection reset"))

    response = client.post("/chat", json={"message": "Hello", "context": CONTEXT})

    assert response.status_code == 502
    assert response.json()["detail"].endswith("Please try again.")


def test_chat_requires_message():
    response = client.post("/chat", json={"message": "", "context": CONTEXT})
    assert response.status_code == 422


def test_quick_action_flavor_pairing(replay):
    stub = replay("Halibut loves brown butter, capers and a bright citrus pairing on the side.")

    response = client.post(
        "/quick-actions/flavor-pairing",
        json={"context": CONTEXT, "ingredient": "halibut"},
    )

    assert response.status_code == 200
    assert response.json()["category"] == "flavor-pairing"
    assert "recommendations for halibut." in stub.requests[0]["user"]


def test_unknown_quick_action_is_404(replay):
    replay("unused")
    response = client.post("/quick-actions/wine-list", json={"context": CONTEXT})
    assert response.status_code == 404


def test_health_reports_provider():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["provider"] in {"openai", "xai"}

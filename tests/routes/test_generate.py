import asyncio
import json

import pytest
from fastapi.testclient import TestClient

from chefmate.errors import GenerationFailure
from chefmate.main import app
from chefmate.routes import generate as generate_routes


client = TestClient(app)

CONTEXT = {
    "name": "The Brass Anchor",
    "theme": "Coastal Tavern",
    "categories": ["Appetizers", "Entrees"],
    "staffSize": 12,
    "kitchenCapability": "advanced",
}


class ReplayClient:
    def __init__(self, *replies):
        self.replies = list(replies)
        self.prompts = []

    async def complete(self, system_prompt, user_prompt, options=None):
        self.prompts.append((system_prompt, user_prompt))
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def replay(monkeypatch):
    def install(*replies):
        stub = ReplayClient(*replies)
        monkeypatch.setattr(generate_routes._generator, "_completion_client", stub)
        return stub

    return install


def test_generate_menu_items_returns_normalised_items(replay):
    payload = {
        "items": [
            {
                "name": "Lobster Mac",
                "description": "Cavatappi in a sharp cheddar sauce with butter-poached lobster",
                "category": "Entrees",
                "suggestedPrice": "$34",
                "ingredients": [{"ingredient": "Lobster", "amount": 3, "unit": "oz", "cost": 9}],
            }
        ]
    }
    stub = replay(json.dumps(payload))

    response = client.post(
        "/generate/menu-items",
        json={"context": CONTEXT, "focusCategory": "Entrees", "targetPricePoint": "premium"},
    )

    assert response.status_code == 200
    [item] = response.json()["menu_items"]
    assert item["name"] == "Lobster Mac"
    assert item["suggested_price"] == 34
    assert item["profit_margin"] == 53
    assert item["ingredients"][0]["amount"] == "3"
    assert "exceptional entrees items" in stub.prompts[0][1]


def test_generate_menu_items_falls_back_on_prose(replay):
    replay("I would love to help, but here is a story instead.")

    response = client.post("/generate/menu-items", json={"context": CONTEXT})

    assert response.status_code == 200
    items = response.json()["menu_items"]
    assert len(items) == 4
    assert all(
        "The Brass Anchor" in item["name"] or "The Brass Anchor" in item["description"]
        for item in items
    )


def test_generate_cocktails_falls_back_on_transport_error(replay):
    replay(GenerationFailure("connection refused"))

    response = client.post("/generate/cocktails", json={"context": CONTEXT, "complexity": "simple"})

    assert response.status_code == 200
    cocktails = response.json()["cocktails"]
    assert len(cocktails) == 4
    assert cocktails[-1]["category"] == "mocktail"


def test_generate_pairings(replay):
    payload = {
        "pairings": [
            {
                "menuItem": "Clam Chowder",
                "cocktail": {"name": "Smoke on the Water", "description": "Mezcal and dry vermouth"},
            }
        ]
    }
    replay(json.dumps(payload))

    response = client.post(
        "/generate/paired-menu-cocktails",
        json={"context": CONTEXT, "menuItems": ["Clam Chowder"]},
    )

    assert response.status_code == 200
    [pairing] = response.json()["pairings"]
    assert pairing["menu_item"] == "Clam Chowder"
    assert pairing["cocktail"]["name"] == "Smoke on the Water"


def test_generate_pairings_returns_one_per_item_with_descriptions(replay):
    stub = replay("The bar is closed.")
    names = ["Oysters", "Crudo", "Chowder", "Lobster Roll", "Fish Tacos"]

    response = client.post(
        "/generate/paired-menu-cocktails",
        json={"context": CONTEXT, "menuItems": names, "descriptions": {"Crudo": "Scallop, yuzu"}},
    )

    assert response.status_code == 200
    assert [pairing["menu_item"] for pairing in response.json()["pairings"]] == names
    assert "Crudo (Scallop, yuzu)" in stub.prompts[0][1]


def test_generate_pairings_rejects_blank_items(replay):
    replay()
    response = client.post(
        "/generate/paired-menu-cocktails",
        json={"context": CONTEXT, "menuItems": [" "]},
    )
    assert response.status_code == 400


def test_generate_pairings_requires_menu_items():
    response = client.post(
        "/generate/paired-menu-cocktails",
        json={"context": CONTEXT, "menuItems": []},
    )
    assert response.status_code == 422


def test_generate_menu_items_times_out(monkeypatch):
    async def slow_generate(request):
        await asyncio.sleep(1)

    monkeypatch.setattr(generate_routes, "_GENERATION_TIMEOUT_SECONDS", 0.01)
    monkeypatch.setattr(generate_routes._generator, "generate_menu_items", slow_generate)

    response = client.post("/generate/menu-items", json={"context": CONTEXT})

    assert response.status_code == 504
    assert response.json()["detail"] == "Menu item generation took too long. Please try again."


def test_context_is_required():
    response = client.post("/generate/cocktails", json={"theme": "tiki"})
    assert response.status_code == 422

import asyncio
import json

import pytest

from chefmate.errors import GenerationFailure
from chefmate.services.analyzer import MenuTextAnalyzer
from chefmate.services.llm import ANALYSIS_OPTIONS


def run(coro):
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


MENU_TEXT = """Page 1 of 2
APPETIZERS
Bruschetta - Fresh tomatoes, basil $12
ENTREES
Grilled Salmon - With vegetables $24
"""


def test_model_analysis_is_used_when_available(stub_client):
    reply = {
        "cleanedText": "APPETIZERS\nBruschetta $12",
        "categories": ["Appetizers"],
        "items": [
            {"name": "Bruschetta", "category": "Appetizers", "price": "$12", "description": "Fresh tomatoes"},
            {"name": "Chef's Soup", "price": 8},
            {"price": 3},
        ],
    }
    client = stub_client([json.dumps(reply)])

    analysis = run(MenuTextAnalyzer(client).analyze(MENU_TEXT))

    assert analysis.source == "model"
    assert analysis.cleaned_text == "APPETIZERS\nBruschetta $12"
    assert analysis.extracted_text == MENU_TEXT
    assert analysis.categories == ["Appetizers", "Menu Items"]
    assert [(item.name, item.category, item.price) for item in analysis.items] == [
        ("Bruschetta", "Appetizers", 12.0),
        ("Chef's Soup", "Menu Items", 8),
    ]
    assert analysis.items[0].description == "Fresh tomatoes"
    [call] = client.calls
    assert call["options"] is ANALYSIS_OPTIONS
    assert call["user"] == MENU_TEXT


@pytest.mark.parametrize(
    "reply",
    [
        GenerationFailure("timeout"),
        "The menu has appetizers and entrees.",
        '{"categories": [], "items": []}',
        '["not", "an", "object"]',
    ],
)
def test_heuristic_fallback(stub_client, reply):
    analysis = run(MenuTextAnalyzer(stub_client([reply])).analyze(MENU_TEXT))

    assert analysis.source == "heuristic"
    assert analysis.categories == ["Appetizers", "Entrees"]
    assert [item.name for item in analysis.items] == ["Bruschetta", "Grilled Salmon"]


def test_model_can_be_skipped(stub_client):
    client = stub_client()
    analysis = run(MenuTextAnalyzer(client).analyze(MENU_TEXT, use_model=False))
    assert analysis.source == "heuristic"
    assert client.calls == []


def test_blank_text_is_rejected(stub_client):
    with pytest.raises(ValueError):
        run(MenuTextAnalyzer(stub_client()).analyze("  \n "))

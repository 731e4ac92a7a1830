import asyncio

import pytest

from chefmate.errors import GenerationFailure
from chefmate.schemas import ChatTurn, ResponseLength
from chefmate.services.chef import (
    ChefAdvisor,
    categorize_response,
    extract_recommendations,
    parse_recipe,
)
from chefmate.services.llm import ADVICE_OPTIONS


def run(coro):
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


RECIPE_REPLY = """Here are two ideas for the fall menu.
Recipe: **Maple Glazed Pork Belly**
Ingredients:
- 2 lb pork belly
- 1/2 cup maple syrup
Instructions:
1. Cure overnight
2. Roast at 300F for 3 hours
Recommendation: **Cider Vinaigrette** Whisk reduced cider with mustard and oil."""


@pytest.mark.parametrize(
    ("message", "content", "expected"),
    [
        ("Any new drink ideas?", "Sure.", "cocktails"),
        ("Help me plan", "Consider a signature cocktail.", "cocktails"),
        ("How do I cut labor?", "Cross-train your staff.", "efficiency"),
        ("Plan my week", "You could optimize prep lists.", "efficiency"),
        ("What goes with lamb?", "Mint and pea pair well.", "flavor-pairing"),
        ("New dessert?", "A sticky toffee pudding.", "menu"),
    ],
)
def test_categorize_response(message, content, expected):
    assert categorize_response(message, content) == expected


def test_categorize_response_prefers_cocktails_over_efficiency():
    assert categorize_response("Reduce cocktail cost", "") == "cocktails"


def test_extract_recommendations_reads_recipe_blocks():
    recommendations = extract_recommendations(RECIPE_REPLY)

    assert [rec.title for rec in recommendations] == [
        "Maple Glazed Pork Belly",
        "Cider Vinaigrette",
    ]
    pork = recommendations[0]
    assert pork.recipe.ingredients == ["2 lb pork belly", "1/2 cup maple syrup"]
    assert pork.recipe.instructions == ["Cure overnight", "Roast at 300F for 3 hours"]
    assert recommendations[1].recipe is None
    assert recommendations[1].description == "Whisk reduced cider with mustard and oil."


def test_long_descriptions_are_truncated():
    content = "Recipe: **Long Braise** " + "x" * 250
    [recommendation] = extract_recommendations(content)
    assert recommendation.description == "x" * 200 + "..."


def test_unstructured_prose_becomes_one_recommendation():
    content = "## Focus on *seasonal* produce\nRotate two specials weekly to move perishable stock."
    [recommendation] = extract_recommendations(content)
    assert recommendation.title == "Focus on seasonal produce"
    assert recommendation.description == content
    assert recommendation.recipe is None


def test_short_prose_yields_no_recommendations():
    assert extract_recommendations("Happy to help!") == []


def test_parse_recipe_accepts_method_and_directions():
    recipe = parse_recipe("Ingredients:\n* flour\n* butter\nMethod:\n- rub in\n- chill")
    assert recipe.ingredients == ["flour", "butter"]
    assert recipe.instructions == ["rub in", "chill"]
    assert parse_recipe("Directions: bake until golden").instructions == ["bake until golden"]
    assert parse_recipe("Just serve it warm.") is None


def test_get_advice_sends_profile_history_and_length(context, stub_client):
    client = stub_client([RECIPE_REPLY])
    advisor = ChefAdvisor(client, history_turns=2)
    history = [
        ChatTurn(role="user", content="first"),
        ChatTurn(role="assistant", content="second"),
        ChatTurn(role="user", content="third"),
    ]

    response = run(
        advisor.get_advice(
            "What should we add for autumn?", context, history, ResponseLength.BRIEF
        )
    )

    assert response.content == RECIPE_REPLY
    assert response.category == "menu"
    assert len(response.recommendations) == 2

    [call] = client.calls
    assert call["options"] is ADVICE_OPTIONS
    assert "The Brass Anchor" in call["system"]
    assert [turn["content"] for turn in call["history"]] == ["second", "third"]
    assert call["user"].startswith("What should we add for autumn?")
    assert "brief, concise" in call["user"]


def test_get_advice_propagates_transport_failure(context, stub_client):
    advisor = ChefAdvisor(stub_client([GenerationFailure("boom")]), history_turns=10)
    with pytest.raises(GenerationFailure):
        run(advisor.get_advice("Hello?", context))


def test_quick_actions_use_canned_prompts(context, stub_client):
    client = stub_client(["Pair it with fennel and orange zest for brightness and balance."] * 4)
    advisor = ChefAdvisor(client, history_turns=10)

    run(advisor.quick_action("menu-suggestions", context))
    run(advisor.quick_action("flavor-pairing", context, ingredient="halibut"))
    run(advisor.quick_action("flavor-pairing", context))
    response = run(advisor.quick_action("cocktail-creation", context))

    prompts = [call["user"] for call in client.calls]
    assert prompts[0].startswith("Generate 3-5 innovative menu items")
    assert "recommendations for halibut." in prompts[1]
    assert "recommendations for beef." in prompts[2]
    assert "Coastal Tavern theme" in prompts[3]
    assert response.category == "cocktails"


def test_unknown_quick_action_is_rejected(context, stub_client):
    advisor = ChefAdvisor(stub_client(), history_turns=10)
    with pytest.raises(ValueError):
        run(advisor.quick_action("wine-list", context))

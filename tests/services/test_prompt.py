from chefmate.schemas import (
    CocktailGenerationRequest,
    Complexity,
    MenuGenerationRequest,
    MenuSnapshotItem,
    PricePoint,
    ResponseLength,
)
from chefmate.services.prompt import (
    build_chef_advice_prompt,
    build_cocktail_prompt,
    build_menu_analysis_prompt,
    build_menu_prompt,
    build_pairing_prompt,
    category_guidance,
)


def test_menu_prompt_includes_profile_and_json_instructions(context):
    prompt = build_menu_prompt(MenuGenerationRequest(context=context))
    assert 'Restaurant: "The Brass Anchor"' in prompt.system_prompt
    assert "EXACTLY 4 menu items" in prompt.system_prompt
    assert '"items"' in prompt.system_prompt
    assert "preparationTime" in prompt.system_prompt
    assert "across different categories" in prompt.user_prompt
    assert "Coastal Tavern theme" in prompt.user_prompt
    assert "Portland, Maine" in prompt.user_prompt
    assert prompt.user_prompt.endswith("Return ONLY valid JSON. No additional text or explanations.")


def test_menu_prompt_reflects_optional_request_fields(context):
    request = MenuGenerationRequest(
        context=context,
        focus_category="Desserts",
        current_menu=[
            MenuSnapshotItem(name="Blueberry Pie", category="Desserts"),
            MenuSnapshotItem(name="Lobster Roll", category="Entrees"),
        ],
        specific_requests=["Use local honey"],
        dietary_restrictions=["gluten-free"],
        target_price_point=PricePoint.PREMIUM,
        seasonal_focus="autumn",
        batch_production=True,
        batch_size=24,
    )
    prompt = build_menu_prompt(request)

    assert "exceptional desserts items" in prompt.user_prompt
    assert category_guidance("Desserts") in prompt.user_prompt
    assert "Current Desserts offerings: Blueberry Pie." in prompt.user_prompt
    assert "Use local honey" in prompt.user_prompt
    assert "gluten-free" in prompt.user_prompt
    assert "luxury ingredients" in prompt.user_prompt
    assert "autumn" in prompt.user_prompt
    assert "for 24 servings" in prompt.user_prompt
    assert "Current Menu:\nDesserts: Blueberry Pie" in prompt.system_prompt


def test_category_guidance_falls_back_to_generic_text():
    assert "protein" in category_guidance("Main Courses")
    assert "distinctive techniques" in category_guidance("Raw Bar")


def test_cocktail_prompt_lists_constraints(context):
    request = CocktailGenerationRequest(
        context=context,
        base_spirits=["rum", "mezcal"],
        complexity=Complexity.SIMPLE,
        batchable=True,
        existing_cocktails=["Dark and Stormy"],
    )
    prompt = build_cocktail_prompt(request)
    assert '"cocktails"' in prompt.system_prompt
    assert "exactly 3 unique" in prompt.user_prompt
    assert "rum, mezcal" in prompt.user_prompt
    assert "complexity simple" in prompt.user_prompt
    assert "BATCH PRODUCTION" in prompt.user_prompt
    assert "Dark and Stormy" in prompt.user_prompt


def test_pairing_prompt_names_every_item(context):
    prompt = build_pairing_prompt(["Lobster Roll", "Clam Chowder"], context)
    assert "The Brass Anchor - Coastal Tavern" in prompt.system_prompt
    assert '"pairings"' in prompt.system_prompt
    assert prompt.user_prompt.endswith("Lobster Roll; Clam Chowder")


def test_pairing_prompt_lists_descriptions(context):
    prompt = build_pairing_prompt(
        ["Lobster Roll", "Clam Chowder"], context, {"Clam Chowder": " Smoked bacon, oyster crackers "}
    )
    assert prompt.user_prompt.endswith("Lobster Roll; Clam Chowder (Smoked bacon, oyster crackers)")


def test_analysis_prompt_passes_text_through():
    prompt = build_menu_analysis_prompt("SOUPS\nChowder $9")
    assert "cleanedText" in prompt.system_prompt
    assert prompt.user_prompt == "SOUPS\nChowder $9"


def test_advice_prompt_appends_length_instruction(context):
    brief = build_chef_advice_prompt(context, "How do I cut food cost?", ResponseLength.BRIEF)
    detailed = build_chef_advice_prompt(context, "How do I cut food cost?", ResponseLength.DETAILED)
    assert brief.user_prompt.startswith("How do I cut food cost?\n\nIMPORTANT:")
    assert "brief, concise" in brief.user_prompt
    assert "comprehensive, detailed" in detailed.user_prompt
    assert "RESTAURANT PROFILE" in brief.system_prompt
    assert "Staff Size: 12" in brief.system_prompt

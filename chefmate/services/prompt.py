"""Prompt building helpers for chat-completion payloads."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import List, Mapping, Sequence

from chefmate.schemas import (
    CocktailGenerationRequest,
    MenuGenerationRequest,
    PricePoint,
    ResponseLength,
    RestaurantContext,
)
from chefmate.services.context import build_context_text

__all__ = [
    "COCKTAIL_COUNT",
    "MENU_ITEM_COUNT",
    "PromptRequest",
    "build_chef_advice_prompt",
    "build_cocktail_prompt",
    "build_menu_analysis_prompt",
    "build_menu_prompt",
    "build_pairing_prompt",
    "category_guidance",
    "length_instruction",
    "price_point_guidance",
]

MENU_ITEM_COUNT = 4
COCKTAIL_COUNT = 3


@dataclass(frozen=True)
class PromptRequest:
    """System and user messages for a single completion."""

    system_prompt: str
    user_prompt: str


MENU_EXAMPLE = {
    "items": [
        {
            "name": "Creative name that tells a story",
            "description": "Enticing 2-3 sentence description",
            "category": "entrees",
            "ingredients": [
                {
                    "ingredient": "ingredient name",
                    "amount": "2",
                    "unit": "oz",
                    "cost": 1.5,
                    "notes": "preparation notes",
                }
            ],
            "preparationTime": 25,
            "difficulty": "medium",
            "estimatedCost": 12,
            "suggestedPrice": 28,
            "profitMargin": 57,
            "recipe": {
                "serves": 1,
                "prepInstructions": ["step 1"],
                "cookingInstructions": ["step 1"],
                "platingInstructions": ["step 1"],
                "techniques": ["technique 1"],
            },
            "allergens": ["allergen"],
            "nutritionalHighlights": ["highlight"],
            "winePairings": ["wine"],
            "upsellOpportunities": ["upsell"],
        }
    ]
}

COCKTAIL_EXAMPLE = {
    "cocktails": [
        {
            "name": "Creative, story-telling name",
            "description": "Enticing 1-2 sentence description of flavour and inspiration",
            "category": "signature",
            "ingredients": [
                {"ingredient": "specific spirit", "amount": "2", "unit": "oz", "cost": 3}
            ],
            "instructions": ["Detailed step-by-step instruction"],
            "garnish": "Specific garnish",
            "glassware": "Appropriate glass",
            "estimatedCost": 4,
            "suggestedPrice": 14,
            "profitMargin": 71,
            "preparationTime": 3,
            "batchInstructions": ["batch preparation step"],
            "batchYield": 10,
            "variations": [{"name": "variation name", "changes": ["modification"]}],
            "foodPairings": ["complementary menu item"],
        }
    ]
}

MENU_SYSTEM_TEMPLATE = (
    "You are an expert chef consultant specializing in menu development. Create "
    "innovative, restaurant-specific menu items that align with the establishment's "
    "theme, capabilities and market positioning. Every dish must be original, "
    "commercially viable and executable by the kitchen described below.\n\n"
    "Restaurant profile:\n{context}\n\n"
    "Requirements:\n"
    "- Generate EXACTLY {count} menu items.\n"
    "- Every ingredient must include an exact measurement and an estimated cost.\n"
    "- Recipes must be detailed and actionable for restaurant staff.\n"
    "- Price items so the profit margin meets the restaurant's goals.\n\n"
    "CRITICAL: Respond with valid JSON only, no text outside the JSON structure. "
    'Use an object with an "items" array shaped like this example:\n{example}'
)

COCKTAIL_SYSTEM_TEMPLATE = (
    "You are a world-renowned mixologist and beverage consultant. Create signature "
    "cocktails that complement the restaurant's theme, atmosphere and clientele, "
    "with compelling 1-2 sentence descriptions.\n\n"
    "Restaurant profile:\n{context}\n\n"
    "Cost guidelines:\n"
    "- Premium spirits $1.50-3.00/oz, house spirits $0.75-1.50/oz, liqueurs "
    "$0.50-1.25/oz, fresh juices $0.25-0.50/oz, mixers $0.10-0.30/oz.\n"
    "- Keep total ingredient cost between $2.50 and $6.50 and price at 3.5-4x cost.\n\n"
    "Respond with JSON only. Use an object with a \"cocktails\" array shaped like "
    "this example:\n{example}"
)

PAIRING_SYSTEM_TEMPLATE = (
    "You are a beverage pairing expert. Create cocktails specifically designed to "
    "complement the given menu items.\n\n"
    "Restaurant: {name} - {theme}\n\n"
    'Respond with JSON only: {{"pairings": [{{"menuItem": "item name", '
    '"cocktail": {{...cocktail object...}}}}]}} where each cocktail follows this '
    "shape:\n{example}"
)

ANALYSIS_SYSTEM_PROMPT = (
    "You are an expert menu parser. Parse the provided menu text and return a JSON "
    'object with "cleanedText" (the text without PDF artifacts such as page numbers, '
    'headers and footers), "categories" (menu categories in order) and "items" '
    "(objects with name, category, price and description). Handle price formats "
    "such as $12, 12.00 and $12.95. If no clear categories exist, use \"Menu Items\". "
    "Respond ONLY with valid JSON."
)

ADVISOR_SYSTEM_TEMPLATE = (
    "You are an expert chef consultant specializing in restaurant operations and "
    "culinary development, with decades of experience in menu development, flavour "
    "pairing, kitchen efficiency and restaurant management.\n\n"
    "RESTAURANT PROFILE:\n{profile}\n\n"
    "Provide advice that is tailored to this profile, financially focused, "
    "operationally practical for this kitchen and staff, aware of the local market, "
    "and specific to the challenges and priorities listed. Always give actionable "
    "recommendations with estimated costs, prep times and implementation steps. "
    "When you recommend a dish or drink, introduce it as "
    "\"Recipe: **Title**\" followed by Ingredients: and Instructions: sections."
)

_LENGTH_INSTRUCTIONS = {
    ResponseLength.BRIEF: (
        "IMPORTANT: Provide a brief, concise response. Keep it short and to the "
        "point with only the most essential information."
    ),
    ResponseLength.BALANCED: (
        "IMPORTANT: Provide a balanced response with moderate detail, covering key "
        "points without being overly brief or lengthy."
    ),
    ResponseLength.DETAILED: (
        "IMPORTANT: Provide a comprehensive, detailed response with thorough "
        "explanations, examples, and step-by-step guidance."
    ),
}

_CATEGORY_GUIDANCE = (
    (
        ("appetizer", "starter"),
        "Design shareable, photogenic starters with bold flavours, textural contrast "
        "and natural wine pairings that build anticipation for the meal.",
    ),
    (
        ("entree", "main", "dinner"),
        "Create signature mains that define the restaurant's identity: excellent "
        "protein cookery, seasonal vegetables and flavours that justify the price "
        "and drive repeat visits.",
    ),
    (
        ("dessert", "sweet"),
        "Craft a memorable finale with house-made components, seasonal fruit and "
        "presentations guests want to share.",
    ),
    (
        ("salad",),
        "Reimagine salads as crave-worthy plates with house dressings, creative "
        "proteins and striking compositions.",
    ),
    (
        ("soup",),
        "Develop soups that showcase technique with contrasting temperatures, "
        "unexpected combinations and artful garnishes.",
    ),
)
_DEFAULT_CATEGORY_GUIDANCE = (
    "Focus on distinctive techniques, unexpected flavour combinations and "
    "presentations that set each item apart from conventional offerings."
)

_PRICE_POINT_GUIDANCE = {
    PricePoint.BUDGET: (
        "Focus on value-driven creativity, using affordable ingredients in inventive "
        "ways to deliver exceptional perceived value."
    ),
    PricePoint.MID_RANGE: (
        "Balance cost efficiency with quality to reach healthy profit margins while "
        "delivering clear value."
    ),
    PricePoint.PREMIUM: (
        "Use luxury ingredients and advanced techniques that justify premium pricing "
        "and deliver an extraordinary experience."
    ),
}


def _example_json(example: dict) -> str:
    return json.dumps(example, indent=2)


def _joined(values: Sequence[str]) -> str:
    return ", ".join(value.strip() for value in values if value and value.strip())


def category_guidance(category: str) -> str:
    """Return kitchen guidance for a focus category."""

    lowered = category.lower()
    for keywords, guidance in _CATEGORY_GUIDANCE:
        if any(keyword in lowered for keyword in keywords):
            return guidance
    return _DEFAULT_CATEGORY_GUIDANCE


def price_point_guidance(price_point: PricePoint) -> str:
    return _PRICE_POINT_GUIDANCE[price_point]


def length_instruction(response_length: ResponseLength) -> str:
    return _LENGTH_INSTRUCTIONS[response_length]


def build_menu_prompt(request: MenuGenerationRequest) -> PromptRequest:
    """Return the prompt pair for menu item generation."""

    context = request.context
    system_prompt = MENU_SYSTEM_TEMPLATE.format(
        context=build_context_text(context, request.current_menu),
        count=MENU_ITEM_COUNT,
        example=_example_json(MENU_EXAMPLE),
    )

    lines: List[str] = []
    if request.focus_category:
        lines.append(
            f"Create EXACTLY {MENU_ITEM_COUNT} exceptional "
            f"{request.focus_category.lower()} items for \"{context.name}\". "
            f"{category_guidance(request.focus_category)}"
        )
    else:
        lines.append(
            f"Create EXACTLY {MENU_ITEM_COUNT} innovative menu items across different "
            f"categories for \"{context.name}\"."
        )
    lines.append(f"Each item must reflect the {context.theme} theme.")
    lines.append(f"Work within the kitchen capability: {context.kitchen_capability}.")
    if context.location:
        lines.append(f"Use ingredients available in {context.location}.")

    if request.current_menu:
        current = ", ".join(f"{item.name} ({item.category})" for item in request.current_menu)
        lines.append(
            f"Current menu: {current}. Create items that complement it without "
            "competing directly, filling gaps or elevating the offering."
        )
        if request.focus_category:
            focus = request.focus_category.lower()
            in_category = [
                item.name for item in request.current_menu if focus in item.category.lower()
            ]
            if in_category:
                lines.append(
                    f"Current {request.focus_category} offerings: {', '.join(in_category)}. "
                    "Design items that surpass these in creativity and appeal."
                )
    if request.specific_requests:
        lines.append(f"Incorporate these specific requests: {_joined(request.specific_requests)}.")
    if request.dietary_restrictions:
        lines.append(
            f"Accommodate these dietary needs: {_joined(request.dietary_restrictions)}."
        )
    if request.target_price_point:
        lines.append(price_point_guidance(request.target_price_point))
    if request.seasonal_focus:
        lines.append(f"Highlight {request.seasonal_focus} seasonal ingredients.")
    if request.batch_production:
        lines.append(
            "BATCH PRODUCTION: Include batchInstructions and batchServes in each recipe "
            f"for {request.batch_size or 10} servings, with scaled ingredient amounts."
        )
    lines.append("Return ONLY valid JSON. No additional text or explanations.")

    return PromptRequest(system_prompt=system_prompt, user_prompt="\n".join(lines))


def build_cocktail_prompt(request: CocktailGenerationRequest) -> PromptRequest:
    """Return the prompt pair for signature cocktail generation."""

    context = request.context
    system_prompt = COCKTAIL_SYSTEM_TEMPLATE.format(
        context=build_context_text(context),
        example=_example_json(COCKTAIL_EXAMPLE),
    )

    lines = [
        f"Create exactly {COCKTAIL_COUNT} unique, complete cocktails for "
        f"\"{context.name}\" with ALL required fields.",
        f"Reflect the {context.theme} theme in both names and ingredients.",
    ]
    if request.theme:
        lines.append(f"Additional theme: {request.theme}.")
    if request.base_spirits:
        lines.append(f"Feature these spirits: {_joined(request.base_spirits)}.")
    if request.complexity:
        lines.append(f"Keep complexity {request.complexity.value}.")
    if request.batchable:
        lines.append(
            "BATCH PRODUCTION: Include batchInstructions, batchYield and batchAmount/"
            "batchUnit on each ingredient for 10-cocktail batches."
        )
    if request.seasonality:
        lines.append(f"Focus on {request.seasonality} seasonal flavours.")
    if request.existing_cocktails:
        lines.append(f"Avoid similarity to: {_joined(request.existing_cocktails)}.")
    lines.append("Provide complete JSON only, no partial data.")

    return PromptRequest(system_prompt=system_prompt, user_prompt="\n".join(lines))


def _pairing_entry(name: str, descriptions: Mapping[str, str]) -> str:
    description = (descriptions.get(name) or "").strip()
    return f"{name} ({description})" if description else name


def build_pairing_prompt(
    menu_items: Sequence[str],
    context: RestaurantContext,
    descriptions: Mapping[str, str] | None = None,
) -> PromptRequest:
    """Return the prompt pair for cocktails paired with menu items.

    Items with an entry in ``descriptions`` are listed as ``name (description)``.
    """

    system_prompt = PAIRING_SYSTEM_TEMPLATE.format(
        name=context.name,
        theme=context.theme,
        example=_example_json(COCKTAIL_EXAMPLE["cocktails"][0]),
    )
    user_prompt = (
        "Create one signature cocktail paired with each of these menu items: "
        + "; ".join(_pairing_entry(item, descriptions or {}) for item in menu_items)
    )
    return PromptRequest(system_prompt=system_prompt, user_prompt=user_prompt)


def build_menu_analysis_prompt(text: str) -> PromptRequest:
    return PromptRequest(system_prompt=ANALYSIS_SYSTEM_PROMPT, user_prompt=text)


def build_chef_advice_prompt(
    context: RestaurantContext,
    message: str,
    response_length: ResponseLength = ResponseLength.BALANCED,
) -> PromptRequest:
    """Return the advisor system prompt and the user message with its length hint."""

    system_prompt = ADVISOR_SYSTEM_TEMPLATE.format(profile=build_context_text(context))
    user_prompt = f"{message}\n\n{length_instruction(response_length)}"
    return PromptRequest(system_prompt=system_prompt, user_prompt=user_prompt)

"""Coerce loosely-typed model output into strict menu and cocktail models."""

from __future__ import annotations

import logging
import re
from typing import Any, List, Mapping, Optional, Union

from chefmate.schemas import (
    CocktailIngredient,
    CocktailVariation,
    DetailedIngredient,
    GeneratedCocktail,
    GeneratedMenuItem,
    Recipe,
)

logger = logging.getLogger(__name__)

__all__ = [
    "COCKTAIL_DEFAULTS",
    "MENU_ITEM_DEFAULTS",
    "clean_field",
    "clean_string_list",
    "extract_number",
    "normalize_cocktails",
    "normalize_menu_items",
]

MENU_ITEM_DEFAULTS: dict[str, Any] = {
    "name": "Creative Menu Item",
    "description": "A unique culinary creation",
    "category": "signature",
    "ingredient": "Premium ingredients",
    "amount": "1",
    "preparation_time": 30,
    "difficulty": "medium",
    "estimated_cost": 15,
    "suggested_price": 32,
    "profit_margin": 53,
    "ingredient_cost": 0,
    "serves": 1,
    "prep_instructions": "Prepare ingredients with care",
    "cooking_instructions": "Cook with precision",
    "plating_instructions": "Plate with artistic presentation",
    "techniques": "Professional cooking techniques",
}

COCKTAIL_DEFAULTS: dict[str, Any] = {
    "name": "Creative House Cocktail",
    "description": "A unique craft cocktail featuring premium ingredients",
    "category": "signature",
    "ingredient": "Premium ingredient",
    "amount": "1 oz",
    "ingredient_cost": 2.5,
    "garnish": "Fresh garnish",
    "glassware": "Coupe glass",
    "estimated_cost": 4.25,
    "suggested_price": 16,
    "profit_margin": 73,
    "preparation_time": 5,
    "variation": "Variation",
}

_DEFAULT_COCKTAIL_INGREDIENTS = (
    ("Premium Spirit", "2 oz", 2.5),
    ("Fresh Citrus", "0.75 oz", 0.3),
    ("House Syrup", "0.5 oz", 0.25),
)
_DEFAULT_COCKTAIL_INSTRUCTIONS = (
    "Combine all ingredients in a shaker with ice",
    "Shake vigorously for 10-15 seconds",
    "Double strain into chilled glass",
    "Garnish and serve immediately",
)

_DIFFICULTIES = {"easy", "medium", "hard"}
_COCKTAIL_CATEGORIES = {"signature", "classic", "seasonal", "mocktail"}
_NUMERIC_ONLY = re.compile(r"^\d+(\.\d+)?%?$")
_FIRST_NUMBER = re.compile(r"\d+(?:\.\d+)?")


def clean_field(value: Any) -> Optional[str]:
    """Return a trimmed text value, or ``None`` when it is not usable text.

    Markdown asterisks are removed. Empty strings, purely numeric strings and
    price tokens (leading ``$``) are rejected.
    """

    if not isinstance(value, str):
        return None
    cleaned = value.replace("*", "").strip()
    if not cleaned or cleaned.startswith("$"):
        return None
    if _NUMERIC_ONLY.match(cleaned):
        return None
    return cleaned


def extract_number(value: Any) -> Optional[float]:
    """Return ``value`` as a number, pulling the first number out of strings."""

    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if value == value else None  # NaN
    if not isinstance(value, str):
        return None
    match = _FIRST_NUMBER.search(value)
    if match is None:
        return None
    return float(match.group(0))


def clean_string_list(values: Any) -> List[str]:
    """Clean each entry of a list, dropping unusable ones."""

    if not isinstance(values, list):
        return []
    cleaned = (clean_field(value) for value in values)
    return [value for value in cleaned if value is not None]


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    """Return the first present key (model output mixes camelCase and snake_case)."""

    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _text(data: Mapping[str, Any], default: str, *keys: str) -> str:
    value = clean_field(_pick(data, *keys))
    if value is None:
        logger.debug("Defaulting %s to %r", keys[0], default)
        return default
    return value


def _number(data: Mapping[str, Any], default: float, *keys: str) -> float:
    value = extract_number(_pick(data, *keys))
    if value is None:
        logger.debug("Defaulting %s to %r", keys[0], default)
        return default
    return value


def _amount(value: Any, default: str) -> str:
    """Quantities are legitimately numeric, so they skip the numeric rejection."""

    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return f"{value:g}"
    if isinstance(value, str):
        cleaned = value.replace("*", "").strip()
        if cleaned:
            return cleaned
    return default


def _optional_amount(value: Any) -> Optional[str]:
    amount = _amount(value, "")
    return amount or None


def _candidates(parsed: Any, key: str) -> List[Mapping[str, Any]]:
    if isinstance(parsed, Mapping):
        parsed = parsed.get(key)
    if not isinstance(parsed, list):
        return []
    return [entry for entry in parsed if isinstance(entry, Mapping)]


def _instruction_list(values: Any, default: str) -> List[str]:
    return clean_string_list(values) or [default]


def _menu_ingredients(values: Any) -> List[Union[DetailedIngredient, str]]:
    ingredients: List[Union[DetailedIngredient, str]] = []
    if isinstance(values, list):
        for entry in values:
            if isinstance(entry, Mapping):
                name = clean_field(_pick(entry, "ingredient", "name"))
                if name is None:
                    continue
                ingredients.append(
                    DetailedIngredient(
                        ingredient=name,
                        amount=_amount(entry.get("amount"), MENU_ITEM_DEFAULTS["amount"]),
                        unit=_amount(entry.get("unit"), ""),
                        cost=_number(entry, MENU_ITEM_DEFAULTS["ingredient_cost"], "cost"),
                        notes=clean_field(entry.get("notes")),
                        batch_amount=_optional_amount(_pick(entry, "batchAmount", "batch_amount")),
                        batch_unit=clean_field(_pick(entry, "batchUnit", "batch_unit")),
                    )
                )
            else:
                text = clean_field(entry)
                if text is not None:
                    ingredients.append(text)
    return ingredients or [MENU_ITEM_DEFAULTS["ingredient"]]


def _recipe(data: Any) -> Recipe:
    recipe: Mapping[str, Any] = data if isinstance(data, Mapping) else {}
    batch_instructions = clean_string_list(
        _pick(recipe, "batchInstructions", "batch_instructions")
    )
    return Recipe(
        serves=_number(recipe, MENU_ITEM_DEFAULTS["serves"], "serves"),
        prep_instructions=_instruction_list(
            _pick(recipe, "prepInstructions", "prep_instructions"),
            MENU_ITEM_DEFAULTS["prep_instructions"],
        ),
        cooking_instructions=_instruction_list(
            _pick(recipe, "cookingInstructions", "cooking_instructions"),
            MENU_ITEM_DEFAULTS["cooking_instructions"],
        ),
        plating_instructions=_instruction_list(
            _pick(recipe, "platingInstructions", "plating_instructions"),
            MENU_ITEM_DEFAULTS["plating_instructions"],
        ),
        techniques=_instruction_list(
            recipe.get("techniques"), MENU_ITEM_DEFAULTS["techniques"]
        ),
        batch_instructions=batch_instructions or None,
        batch_serves=extract_number(_pick(recipe, "batchServes", "batch_serves")),
    )


def _normalize_menu_item(item: Mapping[str, Any]) -> GeneratedMenuItem:
    difficulty = item.get("difficulty")
    if isinstance(difficulty, str):
        difficulty = difficulty.strip().lower()
    if difficulty not in _DIFFICULTIES:
        difficulty = MENU_ITEM_DEFAULTS["difficulty"]

    return GeneratedMenuItem(
        name=_text(item, MENU_ITEM_DEFAULTS["name"], "name"),
        description=_text(item, MENU_ITEM_DEFAULTS["description"], "description"),
        category=_text(item, MENU_ITEM_DEFAULTS["category"], "category"),
        ingredients=_menu_ingredients(item.get("ingredients")),
        preparation_time=_number(
            item, MENU_ITEM_DEFAULTS["preparation_time"], "preparationTime", "preparation_time"
        ),
        difficulty=difficulty,
        estimated_cost=_number(
            item, MENU_ITEM_DEFAULTS["estimated_cost"], "estimatedCost", "estimated_cost"
        ),
        suggested_price=_number(
            item, MENU_ITEM_DEFAULTS["suggested_price"], "suggestedPrice", "suggested_price"
        ),
        profit_margin=_number(
            item, MENU_ITEM_DEFAULTS["profit_margin"], "profitMargin", "profit_margin"
        ),
        recipe=_recipe(item.get("recipe")),
        allergens=clean_string_list(item.get("allergens")),
        nutritional_highlights=clean_string_list(
            _pick(item, "nutritionalHighlights", "nutritional_highlights")
        ),
        wine_pairings=clean_string_list(
            _pick(item, "winePairings", "wineParings", "wine_pairings")
        ),
        upsell_opportunities=clean_string_list(
            _pick(item, "upsellOpportunities", "upsell_opportunities")
        ),
    )


def _is_placeholder(name: str, description: str, defaults: Mapping[str, Any]) -> bool:
    return name == defaults["name"] and description == defaults["description"]


def normalize_menu_items(parsed: Any) -> List[GeneratedMenuItem]:
    """Normalise the ``items`` of a parsed payload, dropping placeholder entries."""

    items: List[GeneratedMenuItem] = []
    candidates = _candidates(parsed, "items")
    for candidate in candidates:
        item = _normalize_menu_item(candidate)
        if _is_placeholder(item.name, item.description, MENU_ITEM_DEFAULTS):
            logger.debug("Dropping placeholder menu item")
            continue
        items.append(item)
    logger.info("Normalised %d of %d menu items", len(items), len(candidates))
    return items


def _cocktail_ingredients(values: Any) -> List[CocktailIngredient]:
    ingredients: List[CocktailIngredient] = []
    if isinstance(values, list):
        for entry in values:
            if not isinstance(entry, Mapping):
                continue
            ingredients.append(
                CocktailIngredient(
                    ingredient=_text(entry, COCKTAIL_DEFAULTS["ingredient"], "ingredient", "name"),
                    amount=_amount(entry.get("amount"), COCKTAIL_DEFAULTS["amount"]),
                    cost=_number(entry, COCKTAIL_DEFAULTS["ingredient_cost"], "cost"),
                    unit=clean_field(entry.get("unit")),
                    batch_amount=_optional_amount(_pick(entry, "batchAmount", "batch_amount")),
                    batch_unit=clean_field(_pick(entry, "batchUnit", "batch_unit")),
                )
            )
    if ingredients:
        return ingredients
    return [
        CocktailIngredient(ingredient=name, amount=amount, cost=cost)
        for name, amount, cost in _DEFAULT_COCKTAIL_INGREDIENTS
    ]


def _variations(values: Any) -> Optional[List[CocktailVariation]]:
    if not isinstance(values, list):
        return None
    variations = []
    for entry in values:
        if not isinstance(entry, Mapping):
            continue
        changes = clean_string_list(entry.get("changes"))
        if not changes:
            continue
        variations.append(
            CocktailVariation(
                name=_text(entry, COCKTAIL_DEFAULTS["variation"], "name"),
                changes=changes,
            )
        )
    return variations


def _optional_list(values: Any) -> Optional[List[str]]:
    if not isinstance(values, list):
        return None
    return clean_string_list(values)


def _normalize_cocktail(cocktail: Mapping[str, Any]) -> GeneratedCocktail:
    category = cocktail.get("category")
    if isinstance(category, str):
        category = category.strip().lower()
    if category not in _COCKTAIL_CATEGORIES:
        category = COCKTAIL_DEFAULTS["category"]

    return GeneratedCocktail(
        name=_text(cocktail, COCKTAIL_DEFAULTS["name"], "name"),
        description=_text(cocktail, COCKTAIL_DEFAULTS["description"], "description"),
        category=category,
        ingredients=_cocktail_ingredients(cocktail.get("ingredients")),
        instructions=clean_string_list(cocktail.get("instructions"))
        or list(_DEFAULT_COCKTAIL_INSTRUCTIONS),
        garnish=_text(cocktail, COCKTAIL_DEFAULTS["garnish"], "garnish"),
        glassware=_text(cocktail, COCKTAIL_DEFAULTS["glassware"], "glassware"),
        estimated_cost=_number(
            cocktail, COCKTAIL_DEFAULTS["estimated_cost"], "estimatedCost", "estimated_cost"
        ),
        suggested_price=_number(
            cocktail, COCKTAIL_DEFAULTS["suggested_price"], "suggestedPrice", "suggested_price"
        ),
        profit_margin=_number(
            cocktail, COCKTAIL_DEFAULTS["profit_margin"], "profitMargin", "profit_margin"
        ),
        preparation_time=_number(
            cocktail, COCKTAIL_DEFAULTS["preparation_time"], "preparationTime", "preparation_time"
        ),
        batch_instructions=_optional_list(
            _pick(cocktail, "batchInstructions", "batch_instructions")
        ),
        batch_yield=extract_number(_pick(cocktail, "batchYield", "batch_yield")),
        variations=_variations(cocktail.get("variations")),
        food_pairings=_optional_list(_pick(cocktail, "foodPairings", "food_pairings")),
    )


def normalize_cocktails(parsed: Any) -> List[GeneratedCocktail]:
    """Normalise the ``cocktails`` of a parsed payload, dropping placeholder entries."""

    cocktails: List[GeneratedCocktail] = []
    candidates = _candidates(parsed, "cocktails")
    for candidate in candidates:
        cocktail = _normalize_cocktail(candidate)
        if _is_placeholder(cocktail.name, cocktail.description, COCKTAIL_DEFAULTS):
            logger.debug("Dropping placeholder cocktail")
            continue
        cocktails.append(cocktail)
    logger.info("Normalised %d of %d cocktails", len(cocktails), len(candidates))
    return cocktails

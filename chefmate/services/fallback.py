"""Deterministic canned content used when generation yields nothing usable."""

from __future__ import annotations

from typing import List, Sequence

from chefmate.schemas import (
    CocktailIngredient,
    DetailedIngredient,
    GeneratedCocktail,
    GeneratedMenuItem,
    MenuPairing,
    Recipe,
    RestaurantContext,
)

__all__ = ["fallback_cocktails", "fallback_menu_items", "fallback_pairings"]


def _theme(context: RestaurantContext) -> str:
    return (context.theme or "Classic").strip() or "Classic"


def _name(context: RestaurantContext) -> str:
    return (context.name or "our restaurant").strip() or "our restaurant"


def fallback_menu_items(context: RestaurantContext) -> List[GeneratedMenuItem]:
    """Return four well-formed menu items built from the restaurant profile."""

    name = _name(context)
    theme = _theme(context)
    theme_lower = theme.lower()
    region = context.location or "the local area"
    categories = list(context.categories) or ["Appetizers", "Entrees", "Sides", "Desserts"]

    def category(index: int) -> str:
        return categories[index % len(categories)]

    return [
        GeneratedMenuItem(
            name=f"{name} {theme} Market Board",
            description=(
                f"A shareable board built around seasonal produce from {region}, "
                f"pickled vegetables and house crackers, plated in the {theme_lower} "
                f"style {name} guests know."
            ),
            category=category(0),
            ingredients=[
                DetailedIngredient(ingredient="Seasonal vegetables", amount="6", unit="oz", cost=2.4),
                DetailedIngredient(ingredient="House pickles", amount="3", unit="oz", cost=0.9),
                DetailedIngredient(ingredient="Whipped ricotta", amount="3", unit="oz", cost=1.2),
                DetailedIngredient(ingredient="House crackers", amount="8", unit="pieces", cost=0.6),
            ],
            preparation_time=15,
            difficulty="easy",
            estimated_cost=5.1,
            suggested_price=16,
            profit_margin=68,
            recipe=Recipe(
                serves=2,
                prep_instructions=["Wash, trim and cut vegetables", "Whip ricotta with salt and olive oil"],
                cooking_instructions=["Char half of the vegetables on a hot grill"],
                plating_instructions=["Spread ricotta across the board", "Arrange vegetables, pickles and crackers"],
                techniques=["Quick pickling", "Grilling"],
            ),
            allergens=["Dairy", "Gluten"],
            wine_pairings=["Dry rosé"],
            upsell_opportunities=["Add cured meats"],
        ),
        GeneratedMenuItem(
            name=f"{name} Signature {theme} Plate",
            description=(
                f"The house centrepiece at {name}: a pan-roasted protein over a seasonal "
                f"purée with a bright herb sauce that reflects our {theme_lower} concept."
            ),
            category=category(1),
            ingredients=[
                DetailedIngredient(ingredient="Chicken breast", amount="8", unit="oz", cost=3.2),
                DetailedIngredient(ingredient="Root vegetable purée", amount="4", unit="oz", cost=1.1),
                DetailedIngredient(ingredient="Herb sauce", amount="2", unit="oz", cost=0.8),
                DetailedIngredient(ingredient="Seasonal greens", amount="2", unit="oz", cost=0.9),
            ],
            preparation_time=30,
            difficulty="medium",
            estimated_cost=6.0,
            suggested_price=26,
            profit_margin=77,
            recipe=Recipe(
                serves=1,
                prep_instructions=["Season the protein and rest at room temperature", "Blend herbs, oil and lemon into a sauce"],
                cooking_instructions=["Sear skin-side down until golden", "Finish in a 400°F oven to temperature"],
                plating_instructions=["Swoosh purée across the plate", "Slice protein over the purée and spoon sauce around"],
                techniques=["Pan roasting", "Emulsified sauces"],
            ),
            allergens=[],
            wine_pairings=["Chardonnay"],
            upsell_opportunities=["Side salad", "Wine pairing"],
        ),
        GeneratedMenuItem(
            name=f"{theme} Harvest Grain Bowl",
            description=(
                f"A hearty vegetarian bowl of warm grains, roasted vegetables and a tangy "
                f"dressing, written for {name} with ingredients sourced from {region}."
            ),
            category=category(2),
            ingredients=[
                "6 oz cooked farro",
                "4 oz roasted seasonal vegetables",
                "1 oz toasted seeds",
                "2 tablespoons citrus vinaigrette",
            ],
            preparation_time=20,
            difficulty="easy",
            estimated_cost=3.8,
            suggested_price=15,
            profit_margin=75,
            recipe=Recipe(
                serves=1,
                prep_instructions=["Cook farro in batches and cool", "Cut vegetables into even pieces"],
                cooking_instructions=["Roast vegetables at 425°F until caramelised"],
                plating_instructions=["Layer grains, vegetables and seeds in a bowl", "Dress just before serving"],
                techniques=["Batch grain cooking", "High-heat roasting"],
            ),
            allergens=["Gluten"],
            nutritional_highlights=["Vegetarian", "High fibre"],
        ),
        GeneratedMenuItem(
            name=f"{name} Seasonal Fruit Crisp",
            description=(
                f"Baked seasonal fruit under an oat crumble with vanilla cream, a warm "
                f"finish that suits the {theme_lower} table at {name}."
            ),
            category=category(3),
            ingredients=[
                DetailedIngredient(ingredient="Seasonal fruit", amount="6", unit="oz", cost=1.5),
                DetailedIngredient(ingredient="Oat crumble", amount="2", unit="oz", cost=0.4),
                DetailedIngredient(ingredient="Vanilla cream", amount="2", unit="oz", cost=0.5),
            ],
            preparation_time=25,
            difficulty="easy",
            estimated_cost=2.4,
            suggested_price=10,
            profit_margin=76,
            recipe=Recipe(
                serves=1,
                prep_instructions=["Toss fruit with sugar and lemon", "Rub butter into oats, flour and sugar"],
                cooking_instructions=["Bake at 375°F until bubbling and golden"],
                plating_instructions=["Serve warm in a skillet with a spoon of cream"],
                techniques=["Baking"],
                batch_instructions=["Bake in a hotel pan and portion to order"],
                batch_serves=12,
            ),
            allergens=["Dairy", "Gluten"],
            upsell_opportunities=["Dessert wine", "Coffee"],
        ),
    ]


def fallback_cocktails(context: RestaurantContext) -> List[GeneratedCocktail]:
    """Return four signature cocktails themed on the restaurant profile."""

    name = _name(context)
    theme = _theme(context)
    theme_lower = theme.lower()
    prefix = name.split()[0] if name.split() else theme

    def spec(ingredient: str, amount: str, unit: str, cost: float) -> CocktailIngredient:
        return CocktailIngredient(ingredient=ingredient, amount=amount, unit=unit, cost=cost)

    return [
        GeneratedCocktail(
            name=f"{prefix} {theme} Bourbon Signature",
            description=(
                f"A bourbon sour that captures the warmth of {name}, balancing gentle "
                f"sweetness with bright citrus to suit our {theme_lower} dining room."
            ),
            ingredients=[
                spec("Bourbon", "2", "oz", 3.0),
                spec("Simple syrup", "0.5", "oz", 0.2),
                spec("Lemon juice", "0.5", "oz", 0.1),
            ],
            instructions=["Shake with ice", "Strain into glass"],
            garnish="Lemon twist",
            glassware="Rocks glass",
            estimated_cost=3.3,
            suggested_price=14,
            profit_margin=76,
            preparation_time=3,
        ),
        GeneratedCocktail(
            name=f"{prefix} {theme} Gin Garden",
            description=(
                f"A crisp, botanical highball for {name}: gin, tonic and fresh lime "
                f"that pairs easily with {theme_lower} cooking."
            ),
            ingredients=[
                spec("Gin", "2", "oz", 2.5),
                spec("Tonic water", "4", "oz", 0.3),
                spec("Lime juice", "0.25", "oz", 0.1),
            ],
            instructions=["Build in glass over ice", "Stir gently"],
            garnish="Lime wheel",
            glassware="Highball glass",
            estimated_cost=2.9,
            suggested_price=12,
            profit_margin=76,
            preparation_time=2,
        ),
        GeneratedCocktail(
            name=f"{prefix} {theme} Vodka Splash",
            description=(
                f"Vodka, cranberry and lime shaken bright and clean, a modern pour "
                f"designed for the {theme_lower} atmosphere at {name}."
            ),
            ingredients=[
                spec("Vodka", "2", "oz", 2.0),
                spec("Cranberry juice", "1", "oz", 0.2),
                spec("Lime juice", "0.5", "oz", 0.1),
            ],
            instructions=["Shake with ice", "Strain over fresh ice"],
            garnish="Lime wedge",
            glassware="Rocks glass",
            estimated_cost=2.3,
            suggested_price=11,
            profit_margin=79,
            preparation_time=3,
        ),
        GeneratedCocktail(
            name=f"{prefix} {theme} Zero-Proof Spritz",
            description=(
                f"A sparkling non-alcoholic spritz of citrus, herbs and soda so every "
                f"guest at {name} has a signature glass."
            ),
            category="mocktail",
            ingredients=[
                spec("Fresh grapefruit juice", "2", "oz", 0.4),
                spec("Rosemary syrup", "0.75", "oz", 0.2),
                spec("Soda water", "3", "oz", 0.1),
            ],
            instructions=["Build juice and syrup over ice", "Top with soda and stir once"],
            garnish="Rosemary sprig",
            glassware="Wine glass",
            estimated_cost=0.7,
            suggested_price=7,
            profit_margin=90,
            preparation_time=2,
        ),
    ]


def fallback_pairings(
    menu_items: Sequence[str], context: RestaurantContext
) -> List[MenuPairing]:
    """Cycle the fallback cocktails across the given menu item names."""

    cocktails = fallback_cocktails(context)
    return [
        MenuPairing(menu_item=item, cocktail=cocktails[index % len(cocktails)])
        for index, item in enumerate(menu_items)
    ]

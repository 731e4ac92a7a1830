"""Shared pydantic schemas."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _ClientModel(BaseModel):
    """Request payloads accept both snake_case and the web client's camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PricePoint(str, Enum):
    BUDGET = "budget"
    MID_RANGE = "mid-range"
    PREMIUM = "premium"


class Complexity(str, Enum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    ADVANCED = "advanced"


class ResponseLength(str, Enum):
    BRIEF = "brief"
    BALANCED = "balanced"
    DETAILED = "detailed"


class RestaurantContext(_ClientModel):
    """Snapshot of a restaurant profile used to personalise prompts."""

    name: str
    theme: str
    categories: List[str] = Field(default_factory=list)
    kitchen_capability: str = "intermediate"
    staff_size: int = 5
    additional_context: Optional[str] = None

    # Business context
    establishment_type: Optional[str] = None
    service_style: Optional[str] = None
    target_demographic: Optional[str] = None
    average_ticket_price: Optional[float] = None
    dining_capacity: Optional[int] = None
    operating_hours: Optional[str] = None

    # Location & market
    location: Optional[str] = None
    market_type: Optional[str] = None
    local_ingredients: List[str] = Field(default_factory=list)
    cultural_influences: List[str] = Field(default_factory=list)

    # Kitchen & operations
    kitchen_size: Optional[str] = None
    kitchen_equipment: List[str] = Field(default_factory=list)
    prep_space: Optional[str] = None
    storage_capacity: Optional[str] = None
    delivery_capability: Optional[bool] = None

    # Staff & skills
    chef_experience: Optional[str] = None
    staff_skill_level: Optional[str] = None
    specialized_roles: List[str] = Field(default_factory=list)
    labor_budget: Optional[str] = None

    # Menu & business goals
    current_menu_size: Optional[int] = None
    menu_change_frequency: Optional[str] = None
    profit_margin_goals: Optional[float] = None
    food_cost_goals: Optional[float] = None
    special_dietary_needs: List[str] = Field(default_factory=list)

    # Competition & positioning
    primary_competitors: List[str] = Field(default_factory=list)
    unique_selling_points: List[str] = Field(default_factory=list)
    price_position: Optional[str] = None

    # Challenges & priorities
    current_challenges: List[str] = Field(default_factory=list)
    business_priorities: List[str] = Field(default_factory=list)
    seasonal_considerations: Optional[str] = None


class MenuSnapshotItem(_ClientModel):
    """One line of the restaurant's existing menu."""

    name: str
    category: str
    price: Optional[float] = None


class MenuGenerationRequest(_ClientModel):
    context: RestaurantContext
    specific_requests: List[str] = Field(default_factory=list)
    dietary_restrictions: List[str] = Field(default_factory=list)
    target_price_point: Optional[PricePoint] = None
    seasonal_focus: Optional[str] = None
    focus_category: Optional[str] = None
    current_menu: List[MenuSnapshotItem] = Field(default_factory=list)
    batch_production: bool = False
    batch_size: Optional[int] = Field(default=None, ge=1)


class CocktailGenerationRequest(_ClientModel):
    context: RestaurantContext
    theme: Optional[str] = None
    base_spirits: List[str] = Field(default_factory=list)
    complexity: Optional[Complexity] = None
    batchable: bool = False
    seasonality: Optional[str] = None
    existing_cocktails: List[str] = Field(default_factory=list)


class DetailedIngredient(BaseModel):
    ingredient: str
    amount: str
    unit: str = ""
    cost: float
    notes: Optional[str] = None
    batch_amount: Optional[str] = None
    batch_unit: Optional[str] = None


class Recipe(BaseModel):
    serves: float = 1
    prep_instructions: List[str]
    cooking_instructions: List[str]
    plating_instructions: List[str]
    techniques: List[str]
    batch_instructions: Optional[List[str]] = None
    batch_serves: Optional[float] = None


class GeneratedMenuItem(BaseModel):
    """Normalised menu item ready for the client."""

    name: str
    description: str
    category: str
    ingredients: List[Union[DetailedIngredient, str]]
    preparation_time: float
    difficulty: Literal["easy", "medium", "hard"] = "medium"
    estimated_cost: float
    suggested_price: float
    profit_margin: float = Field(
        description="Percentage reported by the model; advisory only."
    )
    recipe: Recipe
    allergens: List[str] = Field(default_factory=list)
    nutritional_highlights: List[str] = Field(default_factory=list)
    wine_pairings: List[str] = Field(default_factory=list)
    upsell_opportunities: List[str] = Field(default_factory=list)


class CocktailIngredient(BaseModel):
    ingredient: str
    amount: str
    cost: float
    unit: Optional[str] = None
    batch_amount: Optional[str] = None
    batch_unit: Optional[str] = None


class CocktailVariation(BaseModel):
    name: str
    changes: List[str]


class GeneratedCocktail(BaseModel):
    """Normalised cocktail ready for the client."""

    name: str
    description: str
    category: Literal["signature", "classic", "seasonal", "mocktail"] = "signature"
    ingredients: List[CocktailIngredient]
    instructions: List[str]
    garnish: str
    glassware: str
    estimated_cost: float
    suggested_price: float
    profit_margin: float
    preparation_time: float
    batch_instructions: Optional[List[str]] = None
    batch_yield: Optional[float] = None
    variations: Optional[List[CocktailVariation]] = None
    food_pairings: Optional[List[str]] = None


class MenuPairing(BaseModel):
    menu_item: str
    cocktail: GeneratedCocktail


class ParsedMenuItem(BaseModel):
    name: str
    category: str
    price: Optional[float] = None
    description: Optional[str] = None


class ParsedMenu(BaseModel):
    """Heuristic reading of pasted menu text. Always a suggestion."""

    categories: List[str] = Field(default_factory=list)
    items: List[ParsedMenuItem] = Field(default_factory=list)


class MenuTextAnalysis(ParsedMenu):
    extracted_text: str
    cleaned_text: str
    source: Literal["model", "heuristic"]


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChefRecipe(BaseModel):
    ingredients: Optional[List[str]] = None
    instructions: Optional[List[str]] = None


class ChefRecommendation(BaseModel):
    title: str
    description: str
    recipe: Optional[ChefRecipe] = None


class ChefResponse(BaseModel):
    content: str
    category: str
    recommendations: List[ChefRecommendation] = Field(default_factory=list)


# HTTP payloads


class MenuItemsResponse(BaseModel):
    menu_items: List[GeneratedMenuItem]


class CocktailsResponse(BaseModel):
    cocktails: List[GeneratedCocktail]


class PairingRequest(_ClientModel):
    context: RestaurantContext
    menu_items: List[str] = Field(min_length=1)
    # Optional short description per menu item name.
    descriptions: Dict[str, str] = Field(default_factory=dict)


class PairingsResponse(BaseModel):
    pairings: List[MenuPairing]


class MenuTextRequest(_ClientModel):
    text: str
    use_model: bool = True


class ChatRequest(_ClientModel):
    message: str = Field(min_length=1)
    context: RestaurantContext
    history: List[ChatTurn] = Field(default_factory=list)
    response_length: ResponseLength = ResponseLength.BALANCED


class QuickActionRequest(_ClientModel):
    context: RestaurantContext
    ingredient: Optional[str] = None

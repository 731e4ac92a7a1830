"""Conversational chef advisor built on the completion client."""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence

from chefmate.config import get_settings
from chefmate.schemas import (
    ChatTurn,
    ChefRecipe,
    ChefRecommendation,
    ChefResponse,
    ResponseLength,
    RestaurantContext,
)
from chefmate.services.llm import ADVICE_OPTIONS, CompletionClient
from chefmate.services.prompt import build_chef_advice_prompt

logger = logging.getLogger(__name__)

__all__ = [
    "ChefAdvisor",
    "QUICK_ACTIONS",
    "categorize_response",
    "extract_recommendations",
    "parse_recipe",
]

QUICK_ACTIONS = (
    "menu-suggestions",
    "flavor-pairing",
    "efficiency-analysis",
    "cocktail-creation",
)
DEFAULT_PAIRING_INGREDIENT = "beef"

_DESCRIPTION_LIMIT = 200
_TITLE_LIMIT = 50
_MIN_PROSE_LENGTH = 50

_RECOMMENDATION_BLOCK = re.compile(
    r"(?:Recipe|Recommendation):\s*\*\*([^*]+)\*\*\s*(.*?)"
    r"(?=\n\n|\n(?:Recipe|Recommendation):|\Z)",
    re.IGNORECASE | re.DOTALL,
)
_INGREDIENTS_SECTION = re.compile(
    r"Ingredients?:(.*?)(?=Instructions?:|Method:|Directions?:|\Z)",
    re.IGNORECASE | re.DOTALL,
)
_INSTRUCTIONS_SECTION = re.compile(
    r"(?:Instructions?:|Method:|Directions?:)(.*)\Z",
    re.IGNORECASE | re.DOTALL,
)
_BULLET = re.compile(r"^(?:[-•*]|\d+[.)])\s*")

# Checked in order; the first group whose keywords appear wins.
_CATEGORY_RULES = (
    ("cocktails", ("cocktail", "drink", "beverage"), ("cocktail", "drink")),
    ("efficiency", ("efficiency", "cost", "labor"), ("efficiency", "optimize")),
    ("flavor-pairing", ("flavor", "pairing", "ingredient"), ("flavor", "pair")),
)

MENU_SUGGESTIONS_PROMPT = """Generate 3-5 innovative menu items that would complement the existing menu categories. Focus on items that:
1. Match the restaurant's theme and atmosphere
2. Use ingredients that can be efficiently prepared by the current kitchen staff
3. Offer good profit margins
4. Appeal to our guests while maintaining sophistication
5. Can be easily executed during busy periods

For each suggestion, include the item name, description, key ingredients, and brief preparation notes."""

FLAVOR_PAIRINGS_PROMPT = """Provide expert flavor pairing recommendations for {ingredient}. Include:
1. Complementary ingredients that work well together
2. Seasoning and herb combinations
3. Cooking techniques that enhance the flavors
4. Wine or spirit pairings
5. How these pairings can be incorporated into our existing menu categories

Consider our restaurant's style and customer preferences."""

EFFICIENCY_PROMPT = """Analyze our restaurant operations and provide specific recommendations to:
1. Reduce labor costs while maintaining quality
2. Streamline kitchen prep processes
3. Optimize inventory management
4. Improve food cost percentages
5. Enhance staff productivity and workflow

Provide concrete, implementable solutions with estimated cost savings where possible."""

SIGNATURE_COCKTAILS_PROMPT = """Create 2-3 signature cocktail recipes that:
1. Reflect our restaurant's {theme} theme and atmosphere
2. Pair well with the dishes on our menu
3. Use ingredients that are cost-effective and readily available
4. Can be prepared quickly by bartenders of varying skill levels
5. Appeal to our clientele while offering sophistication

Include full recipes with measurements, garnishes, and presentation suggestions."""


def categorize_response(user_message: str, content: str) -> str:
    """Label an exchange as cocktails, efficiency, flavor-pairing or menu."""

    message = user_message.lower()
    response = content.lower()
    for category, message_keywords, response_keywords in _CATEGORY_RULES:
        if any(keyword in message for keyword in message_keywords) or any(
            keyword in response for keyword in response_keywords
        ):
            return category
    return "menu"


def _truncate(text: str, limit: int = _DESCRIPTION_LIMIT) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


def _section_lines(section: str) -> List[str]:
    lines = (_BULLET.sub("", line.strip()).strip() for line in section.splitlines())
    return [line for line in lines if line]


def parse_recipe(description: str) -> Optional[ChefRecipe]:
    """Pull ``Ingredients:`` and ``Instructions:`` lists out of a recommendation."""

    ingredients = None
    instructions = None

    match = _INGREDIENTS_SECTION.search(description)
    if match:
        ingredients = _section_lines(match.group(1))
    match = _INSTRUCTIONS_SECTION.search(description)
    if match:
        instructions = _section_lines(match.group(1))

    if ingredients is None and instructions is None:
        return None
    return ChefRecipe(ingredients=ingredients, instructions=instructions)


def extract_recommendations(content: str) -> List[ChefRecommendation]:
    """Find ``Recipe: **Title**`` blocks in advisor prose.

    Prose without any such block still yields one recommendation, titled from
    its first line, once it is longer than a short acknowledgement.
    """

    recommendations: List[ChefRecommendation] = []
    for match in _RECOMMENDATION_BLOCK.finditer(content):
        title = match.group(1).strip()
        description = match.group(2).strip()
        recommendations.append(
            ChefRecommendation(
                title=title,
                description=_truncate(description),
                recipe=parse_recipe(description),
            )
        )

    if not recommendations and len(content) > _MIN_PROSE_LENGTH:
        first_line = content.split("\n", 1)[0]
        title = re.sub(r"[*#]", "", first_line).strip()[:_TITLE_LIMIT]
        recommendations.append(
            ChefRecommendation(
                title=title or "Chef Recommendation",
                description=_truncate(content),
            )
        )
    return recommendations


class ChefAdvisor:
    """Answer free-form restaurant questions in the context of one profile."""

    def __init__(
        self,
        completion_client: CompletionClient | None = None,
        history_turns: int | None = None,
    ) -> None:
        self._completion_client = completion_client
        self._history_turns = history_turns

    @property
    def completion_client(self) -> CompletionClient:
        if self._completion_client is None:
            self._completion_client = CompletionClient(get_settings().completion_config())
        return self._completion_client

    @property
    def history_turns(self) -> int:
        if self._history_turns is None:
            self._history_turns = get_settings().chat_history_turns
        return self._history_turns

    async def get_advice(
        self,
        message: str,
        context: RestaurantContext,
        history: Sequence[ChatTurn] = (),
        response_length: ResponseLength = ResponseLength.BALANCED,
    ) -> ChefResponse:
        """Ask the model for advice and classify its answer.

        ``GenerationFailure`` from the completion client propagates unchanged.
        """

        prompt = build_chef_advice_prompt(context, message, response_length)
        turns = [{"role": turn.role, "content": turn.content} for turn in history]
        content = await self.completion_client.converse(
            prompt.system_prompt,
            turns,
            prompt.user_prompt,
            ADVICE_OPTIONS,
            max_history=self.history_turns,
        )

        category = categorize_response(message, content)
        recommendations = extract_recommendations(content)
        logger.info(
            "Chef advice category=%s recommendations=%d", category, len(recommendations)
        )
        return ChefResponse(
            content=content, category=category, recommendations=recommendations
        )

    async def menu_suggestions(self, context: RestaurantContext) -> ChefResponse:
        return await self.get_advice(MENU_SUGGESTIONS_PROMPT, context)

    async def flavor_pairings(
        self, context: RestaurantContext, ingredient: str | None = None
    ) -> ChefResponse:
        ingredient = (ingredient or "").strip() or DEFAULT_PAIRING_INGREDIENT
        return await self.get_advice(
            FLAVOR_PAIRINGS_PROMPT.format(ingredient=ingredient), context
        )

    async def efficiency_analysis(self, context: RestaurantContext) -> ChefResponse:
        return await self.get_advice(EFFICIENCY_PROMPT, context)

    async def signature_cocktails(self, context: RestaurantContext) -> ChefResponse:
        return await self.get_advice(
            SIGNATURE_COCKTAILS_PROMPT.format(theme=context.theme), context
        )

    async def quick_action(
        self,
        action: str,
        context: RestaurantContext,
        ingredient: str | None = None,
    ) -> ChefResponse:
        """Dispatch one of ``QUICK_ACTIONS`` by name."""

        if action == "menu-suggestions":
            return await self.menu_suggestions(context)
        if action == "flavor-pairing":
            return await self.flavor_pairings(context, ingredient)
        if action == "efficiency-analysis":
            return await self.efficiency_analysis(context)
        if action == "cocktail-creation":
            return await self.signature_cocktails(context)
        raise ValueError(f"Unknown quick action: {action}")

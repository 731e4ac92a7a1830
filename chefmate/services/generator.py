"""Menu and cocktail generation pipeline."""

from __future__ import annotations

import logging
from typing import Callable, List, Mapping, Sequence, TypeVar

from chefmate.config import get_settings
from chefmate.errors import GenerationFailure, UnparsableResponseError
from chefmate.schemas import (
    CocktailGenerationRequest,
    GeneratedCocktail,
    GeneratedMenuItem,
    MenuGenerationRequest,
    MenuPairing,
    RestaurantContext,
)
from chefmate.services.fallback import (
    fallback_cocktails,
    fallback_menu_items,
    fallback_pairings,
)
from chefmate.services.llm import (
    COCKTAIL_OPTIONS,
    MENU_OPTIONS,
    PAIRING_OPTIONS,
    CompletionClient,
    CompletionOptions,
)
from chefmate.services.normalize import normalize_cocktails, normalize_menu_items
from chefmate.services.prompt import (
    PromptRequest,
    build_cocktail_prompt,
    build_menu_prompt,
    build_pairing_prompt,
)
from chefmate.services.repair import repair_and_parse

logger = logging.getLogger(__name__)

MAX_RESULTS = 4

T = TypeVar("T")


class MenuGenerator:
    """Generate menu items, cocktails and pairings for one restaurant.

    Every public method returns usable content: a failed call, output that
    cannot be repaired, or a payload that normalises to nothing is logged and
    replaced with the deterministic fallback for the same restaurant.
    """

    def __init__(self, completion_client: CompletionClient | None = None) -> None:
        self._completion_client = completion_client

    @property
    def completion_client(self) -> CompletionClient:
        """Lazily build the completion client from application settings."""

        if self._completion_client is None:
            self._completion_client = CompletionClient(get_settings().completion_config())
        return self._completion_client

    async def generate_menu_items(
        self, request: MenuGenerationRequest
    ) -> List[GeneratedMenuItem]:
        prompt = build_menu_prompt(request)
        return await self._run(
            "menu items",
            prompt,
            MENU_OPTIONS,
            normalize_menu_items,
            lambda: fallback_menu_items(request.context),
        )

    async def generate_cocktails(
        self, request: CocktailGenerationRequest
    ) -> List[GeneratedCocktail]:
        prompt = build_cocktail_prompt(request)
        return await self._run(
            "cocktails",
            prompt,
            COCKTAIL_OPTIONS,
            normalize_cocktails,
            lambda: fallback_cocktails(request.context),
        )

    async def generate_pairings(
        self,
        menu_items: Sequence[str],
        context: RestaurantContext,
        descriptions: Mapping[str, str] | None = None,
    ) -> List[MenuPairing]:
        """Pair one generated cocktail with each named menu item.

        Unlike menu items and cocktails the result is not capped: every
        requested item gets a pairing. ``descriptions`` maps item names to a
        short description passed along to the model.
        """

        names = [name.strip() for name in menu_items if name and name.strip()]
        if not names:
            raise ValueError("At least one menu item is required for pairings")

        prompt = build_pairing_prompt(names, context, descriptions)
        return await self._run(
            "pairings",
            prompt,
            PAIRING_OPTIONS,
            lambda parsed: _normalize_pairings(parsed, names),
            lambda: fallback_pairings(names, context),
            limit=None,
        )

    async def _run(
        self,
        label: str,
        prompt: PromptRequest,
        options: CompletionOptions,
        normalize: Callable[[object], List[T]],
        fallback: Callable[[], List[T]],
        limit: int | None = MAX_RESULTS,
    ) -> List[T]:
        try:
            raw_text = await self.completion_client.complete(
                prompt.system_prompt, prompt.user_prompt, options
            )
        except GenerationFailure as exc:
            logger.warning("Completion failed for %s, using fallback: %s", label, exc)
            return fallback()[:limit]

        try:
            parsed = repair_and_parse(raw_text)
        except UnparsableResponseError as exc:
            logger.warning("Unparsable %s response, using fallback: %s", label, exc)
            return fallback()[:limit]

        results = normalize(parsed)
        if not results:
            logger.warning("No usable %s in model output, using fallback", label)
            return fallback()[:limit]
        return results[:limit]


def _normalize_pairings(parsed: object, names: Sequence[str]) -> List[MenuPairing]:
    """Match paired cocktails to the requested menu items.

    Entries whose ``menuItem`` is missing take the name at the same position.
    """

    if not isinstance(parsed, dict):
        return []
    entries = parsed.get("pairings")
    if not isinstance(entries, list):
        return []

    pairings: List[MenuPairing] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            continue
        cocktails = normalize_cocktails({"cocktails": [entry.get("cocktail")]})
        if not cocktails:
            continue
        menu_item = entry.get("menuItem") or entry.get("menu_item")
        if not isinstance(menu_item, str) or not menu_item.strip():
            if index >= len(names):
                continue
            menu_item = names[index]
        pairings.append(MenuPairing(menu_item=menu_item.strip(), cocktail=cocktails[0]))
    return pairings

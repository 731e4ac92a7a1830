"""Model-assisted menu text analysis with a heuristic fallback."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping

from chefmate.config import get_settings
from chefmate.errors import GenerationFailure, UnparsableResponseError
from chefmate.schemas import MenuTextAnalysis, ParsedMenuItem
from chefmate.services.llm import ANALYSIS_OPTIONS, CompletionClient
from chefmate.services.menu_parser import parse_menu_text
from chefmate.services.normalize import clean_field, clean_string_list, extract_number
from chefmate.services.prompt import build_menu_analysis_prompt
from chefmate.services.repair import repair_and_parse

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Menu Items"


class MenuTextAnalyzer:
    """Turn pasted menu text into categories and items."""

    def __init__(self, completion_client: CompletionClient | None = None) -> None:
        self._completion_client = completion_client

    @property
    def completion_client(self) -> CompletionClient:
        if self._completion_client is None:
            self._completion_client = CompletionClient(get_settings().completion_config())
        return self._completion_client

    async def analyze(self, text: str, use_model: bool = True) -> MenuTextAnalysis:
        """Analyse ``text`` with the model, falling back to the line heuristics.

        Raises ``ValueError`` when the text is blank.
        """

        if not text or not text.strip():
            raise ValueError("Menu text is empty")

        if use_model:
            try:
                analysis = await self._analyze_with_model(text)
            except (GenerationFailure, UnparsableResponseError) as exc:
                logger.warning("Menu analysis failed, using heuristic parser: %s", exc)
            else:
                if analysis.categories or analysis.items:
                    return analysis
                logger.warning("Menu analysis returned nothing, using heuristic parser")

        parsed = parse_menu_text(text)
        return MenuTextAnalysis(
            extracted_text=text,
            cleaned_text=text.strip(),
            categories=parsed.categories,
            items=parsed.items,
            source="heuristic",
        )

    async def _analyze_with_model(self, text: str) -> MenuTextAnalysis:
        prompt = build_menu_analysis_prompt(text)
        raw_text = await self.completion_client.complete(
            prompt.system_prompt, prompt.user_prompt, ANALYSIS_OPTIONS
        )
        parsed = repair_and_parse(raw_text)
        if not isinstance(parsed, Mapping):
            raise UnparsableResponseError("Menu analysis is not a JSON object", raw_text)

        categories = clean_string_list(parsed.get("categories"))
        items = _analysis_items(parsed.get("items"))
        for item in items:
            if item.category not in categories:
                categories.append(item.category)

        return MenuTextAnalysis(
            extracted_text=text,
            cleaned_text=clean_field(parsed.get("cleanedText")) or text.strip(),
            categories=categories,
            items=items,
            source="model",
        )


def _analysis_items(values: Any) -> List[ParsedMenuItem]:
    if not isinstance(values, list):
        return []

    items: List[ParsedMenuItem] = []
    for value in values:
        if not isinstance(value, Mapping):
            continue
        name = clean_field(value.get("name"))
        if not name:
            continue
        items.append(
            ParsedMenuItem(
                name=name,
                category=clean_field(value.get("category")) or DEFAULT_CATEGORY,
                price=extract_number(value.get("price")),
                description=clean_field(value.get("description")),
            )
        )
    return items

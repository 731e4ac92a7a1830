"""Line-based heuristics for reading pasted menu text.

The parser never calls a model. It walks the text once, treating short
capitalised lines as category headers and the lines beneath them as items with
an optional trailing price. The output is a suggestion for a human to confirm.
"""

from __future__ import annotations

import logging
import re
import string
from typing import List, Optional, Sequence

from chefmate.schemas import ParsedMenu, ParsedMenuItem

logger = logging.getLogger(__name__)

__all__ = ["COMMON_CATEGORIES", "LEAD_IN_WORDS", "is_category_header", "parse_menu_text"]

COMMON_CATEGORIES = (
    "Appetizers",
    "Starters",
    "Small Plates",
    "Shareables",
    "Salads",
    "Soups",
    "Entrees",
    "Main Courses",
    "Mains",
    "Pasta",
    "Pizza",
    "Burgers",
    "Sandwiches",
    "Wraps",
    "Seafood",
    "Steaks",
    "Chicken",
    "Pork",
    "Beef",
    "Vegetarian",
    "Vegan",
    "Desserts",
    "Sweets",
    "Ice Cream",
    "Pastries",
    "Breakfast",
    "Brunch",
    "Lunch Specials",
    "Dinner Specials",
    "Kids Menu",
    "Sides",
    "Beverages",
    "Hot Drinks",
    "Cold Drinks",
)

LEAD_IN_WORDS = frozenset(
    {
        "with",
        "served",
        "topped",
        "crispy",
        "grilled",
        "fresh",
        "house",
        "made",
        "fried",
        "roasted",
        "seared",
        "smoked",
        "tossed",
        "finished",
    }
)

_HEADER_CHARS = re.compile(r"[A-Za-z\s&-]+")
_CATEGORY_KEYWORDS = re.compile(
    r"appetizer|starter|salad|soup|entree|main|pasta|pizza|dessert|beverage|drink|side"
    r"|steak|rib|chicken|seafood|fish|sandwich|burger|breakfast|brunch|cocktail|wine|beer",
    re.IGNORECASE,
)
_SIMPLE_CATEGORY = re.compile(r"[A-Z][a-z]*(?:[ &-]+[A-Z][a-z]*){0,2}")
_DIVIDER = re.compile(r"^[-=]{3,}")
_TRAILING_DIGITS = re.compile(r"\d\s*$")
_PRICE = re.compile(r"\$?(\d+(?:\.\d{2})?)\s*$")
_DOT_LEADERS = re.compile(r"\.{2,}")
_DESCRIPTION_SEPARATOR = re.compile(r"\s+[-–—]\s+")
_NUMERIC = re.compile(r"^[\d.\s]+$")


def _has_price_indicator(line: str) -> bool:
    return "$" in line or bool(_TRAILING_DIGITS.search(line))


def is_category_header(line: str, next_line: Optional[str] = None) -> bool:
    """Return whether ``line`` reads like a category heading."""

    if _has_price_indicator(line) or "." in line:
        return False

    if line.upper() == line and len(line) > 2 and any(ch.isalpha() for ch in line):
        return True
    if _HEADER_CHARS.fullmatch(line) and (
        _CATEGORY_KEYWORDS.search(line) or len(line) < 30
    ):
        return True
    if next_line is not None and _DIVIDER.match(next_line):
        return True
    return bool(_SIMPLE_CATEGORY.fullmatch(line)) and len(line) < 25


def _category_name(line: str) -> str:
    return string.capwords(line.lower())


def _item_name(line: str) -> Optional[str]:
    name = _PRICE.sub("", line)
    name = _DOT_LEADERS.sub(" ", name).replace("$", " ")
    name = " ".join(name.split())
    name = _DESCRIPTION_SEPARATOR.split(name, maxsplit=1)[0]
    name = name.rstrip(" -–—,:;").strip()

    words = name.split()
    for index, word in enumerate(words):
        if index and word.lower().strip(",;:") in LEAD_IN_WORDS:
            words = words[:index]
            break
    name = " ".join(words).rstrip(",;:")

    if len(name) < 3 or _NUMERIC.match(name):
        return None
    return name


def _item_price(line: str) -> Optional[float]:
    match = _PRICE.search(line)
    return float(match.group(1)) if match else None


def _fallback_categories(text: str) -> List[str]:
    lowered = text.lower()
    return [category for category in COMMON_CATEGORIES if category.lower() in lowered]


def parse_menu_text(text: str) -> ParsedMenu:
    """Split pasted menu text into categories and priced items."""

    lines: Sequence[str] = [line.strip() for line in text.splitlines() if line.strip()]
    categories: List[str] = []
    items: List[ParsedMenuItem] = []
    current_category: Optional[str] = None

    for index, line in enumerate(lines):
        if _DIVIDER.match(line):
            continue

        next_line = lines[index + 1] if index + 1 < len(lines) else None
        if is_category_header(line, next_line):
            current_category = _category_name(line)
            if current_category not in categories:
                categories.append(current_category)
            continue

        if current_category is None:
            continue

        name = _item_name(line)
        if name is None:
            continue
        items.append(
            ParsedMenuItem(name=name, category=current_category, price=_item_price(line))
        )

    if not categories:
        categories = _fallback_categories(text)
        logger.debug("No category headers found; matched %d common names", len(categories))

    return ParsedMenu(categories=categories, items=items)

"""Flatten a restaurant profile into prompt-friendly text."""

from __future__ import annotations

from typing import Dict, List, Sequence

from chefmate.schemas import MenuSnapshotItem, RestaurantContext

__all__ = ["build_context_text", "group_menu_by_category"]


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value)}"
    return f"{value:g}"


def _optional_lines(context: RestaurantContext) -> List[str]:
    """Return the populated optional lines in their fixed order."""

    def joined(values: Sequence[str]) -> str:
        return ", ".join(value for value in values if value and value.strip())

    number = _format_number
    # (label, value, formatter); None or blank values drop the line.
    business = [
        ("Type", context.establishment_type, str),
        ("Service", context.service_style, str),
        ("Target Customers", context.target_demographic, str),
        ("Average Check", context.average_ticket_price, lambda v: f"${number(v)}"),
        ("Capacity", context.dining_capacity, lambda v: f"{v} seats"),
        ("Hours", context.operating_hours, str),
    ]
    market = [
        ("Location", context.location, str),
        ("Market", context.market_type, str),
        ("Local Ingredients", joined(context.local_ingredients), str),
        ("Cultural Influences", joined(context.cultural_influences), str),
    ]
    kitchen = [
        ("Kitchen Size", context.kitchen_size, str),
        ("Equipment", joined(context.kitchen_equipment), str),
        ("Prep Space", context.prep_space, str),
        ("Storage", context.storage_capacity, str),
        ("Delivery Available", context.delivery_capability, lambda v: "Yes" if v else "No"),
        ("Chef Experience", context.chef_experience, str),
        ("Staff Skill", context.staff_skill_level, str),
        ("Specialized Roles", joined(context.specialized_roles), str),
        ("Labor Budget", context.labor_budget, str),
    ]
    goals = [
        ("Current Menu Size", context.current_menu_size, lambda v: f"{v} items"),
        ("Menu Changes", context.menu_change_frequency, str),
        ("Target Profit Margin", context.profit_margin_goals, lambda v: f"{number(v)}%"),
        ("Target Food Cost", context.food_cost_goals, lambda v: f"{number(v)}%"),
        ("Dietary Accommodations", joined(context.special_dietary_needs), str),
    ]
    positioning = [
        ("Competitors", joined(context.primary_competitors), str),
        ("USPs", joined(context.unique_selling_points), str),
        ("Price Position", context.price_position, str),
    ]
    priorities = [
        ("Current Challenges", joined(context.current_challenges), str),
        ("Business Priorities", joined(context.business_priorities), str),
        ("Seasonal Notes", context.seasonal_considerations, str),
        ("Additional Context", context.additional_context, str),
    ]

    lines: List[str] = []
    for group in (business, market):
        lines.extend(_render(group))
    # Kitchen capability and staff size are always present.
    lines.append(f"Kitchen Capability: {context.kitchen_capability}")
    lines.append(f"Staff Size: {context.staff_size}")
    for group in (kitchen, goals, positioning, priorities):
        lines.extend(_render(group))
    return lines


def _render(entries) -> List[str]:
    rendered: List[str] = []
    for label, value, formatter in entries:
        if value is None or value == "":
            continue
        if isinstance(value, str) and not value.strip():
            continue
        rendered.append(f"{label}: {formatter(value)}")
    return rendered


def group_menu_by_category(
    current_menu: Sequence[MenuSnapshotItem],
) -> Dict[str, List[str]]:
    """Group menu item names by category, keeping first-seen order."""

    grouped: Dict[str, List[str]] = {}
    for item in current_menu:
        grouped.setdefault(item.category, []).append(item.name)
    return grouped


def build_context_text(
    context: RestaurantContext,
    current_menu: Sequence[MenuSnapshotItem] | None = None,
) -> str:
    """Return the restaurant profile as one ``Label: value`` line per field."""

    lines = [
        f'Restaurant: "{context.name}"',
        f"Theme/Concept: {context.theme}",
        f"Categories: {', '.join(context.categories) or 'Various'}",
    ]
    lines.extend(_optional_lines(context))

    if current_menu:
        lines.append("")
        lines.append("Current Menu:")
        for category, names in group_menu_by_category(current_menu).items():
            lines.append(f"{category}: {', '.join(names)}")

    return "\n".join(lines)

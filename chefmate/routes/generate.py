"""Menu item, cocktail and pairing generation routes."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, TypeVar

from fastapi import APIRouter, Depends, HTTPException

from chefmate.config import settings
from chefmate.schemas import (
    CocktailGenerationRequest,
    CocktailsResponse,
    MenuGenerationRequest,
    MenuItemsResponse,
    PairingRequest,
    PairingsResponse,
)
from chefmate.services.generator import MenuGenerator

router = APIRouter(prefix="/generate", tags=["generate"])

logger = logging.getLogger(__name__)

_generator = MenuGenerator()

_GENERATION_TIMEOUT_SECONDS = max(3.0, float(settings.generation_timeout_seconds))

T = TypeVar("T")


def get_generator() -> MenuGenerator:
    return _generator


async def _with_timeout(label: str, call: Awaitable[T]) -> T:
    try:
        return await asyncio.wait_for(call, timeout=_GENERATION_TIMEOUT_SECONDS)
    except asyncio.TimeoutError as exc:
        logger.warning(
            "%s generation timed out after %s seconds",
            label,
            _GENERATION_TIMEOUT_SECONDS,
        )
        raise HTTPException(
            status_code=504,
            detail=f"{label} generation took too long. Please try again.",
        ) from exc


@router.post("/menu-items", response_model=MenuItemsResponse)
async def generate_menu_items(
    payload: MenuGenerationRequest,
    generator: MenuGenerator = Depends(get_generator),
) -> MenuItemsResponse:
    items = await _with_timeout("Menu item", generator.generate_menu_items(payload))
    return MenuItemsResponse(menu_items=items)


@router.post("/cocktails", response_model=CocktailsResponse)
async def generate_cocktails(
    payload: CocktailGenerationRequest,
    generator: MenuGenerator = Depends(get_generator),
) -> CocktailsResponse:
    cocktails = await _with_timeout("Cocktail", generator.generate_cocktails(payload))
    return CocktailsResponse(cocktails=cocktails)


@router.post("/paired-menu-cocktails", response_model=PairingsResponse)
async def generate_paired_menu_cocktails(
    payload: PairingRequest,
    generator: MenuGenerator = Depends(get_generator),
) -> PairingsResponse:
    try:
        pairings = await _with_timeout(
            "Pairing",
            generator.generate_pairings(
                payload.menu_items, payload.context, payload.descriptions
            ),
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return PairingsResponse(pairings=pairings)

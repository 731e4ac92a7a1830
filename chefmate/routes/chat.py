"""Chef advisor chat and quick-action routes."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable

from fastapi import APIRouter, Depends, HTTPException

from chefmate.config import settings
from chefmate.errors import GenerationFailure
from chefmate.schemas import ChatRequest, ChefResponse, QuickActionRequest
from chefmate.services.chef import QUICK_ACTIONS, ChefAdvisor

router = APIRouter(tags=["chat"])

logger = logging.getLogger(__name__)

_advisor = ChefAdvisor()

_ADVICE_TIMEOUT_SECONDS = max(3.0, float(settings.generation_timeout_seconds))


def get_advisor() -> ChefAdvisor:
    return _advisor


async def _advise(call: Awaitable[ChefResponse]) -> ChefResponse:
    try:
        return await asyncio.wait_for(call, timeout=_ADVICE_TIMEOUT_SECONDS)
    except asyncio.TimeoutError as exc:
        logger.warning("Chef advice timed out after %s seconds", _ADVICE_TIMEOUT_SECONDS)
        raise HTTPException(
            status_code=504,
            detail="The chef took too long to answer. Please try again.",
        ) from exc
    except GenerationFailure as exc:
        logger.warning("Chef advice failed: %s", exc)
        raise HTTPException(
            status_code=502,
            detail="The chef is unavailable right now. Please try again.",
        ) from exc


@router.post("/chat", response_model=ChefResponse)
async def chat(
    payload: ChatRequest,
    advisor: ChefAdvisor = Depends(get_advisor),
) -> ChefResponse:
    return await _advise(
        advisor.get_advice(
            payload.message,
            payload.context,
            payload.history,
            payload.response_length,
        )
    )


@router.post("/quick-actions/{action}", response_model=ChefResponse)
async def quick_action(
    action: str,
    payload: QuickActionRequest,
    advisor: ChefAdvisor = Depends(get_advisor),
) -> ChefResponse:
    if action not in QUICK_ACTIONS:
        raise HTTPException(status_code=404, detail=f"Unknown quick action: {action}")
    return await _advise(
        advisor.quick_action(action, payload.context, ingredient=payload.ingredient)
    )

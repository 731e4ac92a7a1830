"""Pasted menu text routes."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException

from chefmate.config import settings
from chefmate.schemas import MenuTextAnalysis, MenuTextRequest, ParsedMenu
from chefmate.services.analyzer import MenuTextAnalyzer
from chefmate.services.menu_parser import parse_menu_text

router = APIRouter(prefix="/menu", tags=["menu"])

logger = logging.getLogger(__name__)

_analyzer = MenuTextAnalyzer()

_MENU_ANALYSIS_TIMEOUT_SECONDS = max(3.0, float(settings.generation_timeout_seconds))


def get_analyzer() -> MenuTextAnalyzer:
    return _analyzer


@router.post("/parse", response_model=ParsedMenu)
async def parse_menu(payload: MenuTextRequest) -> ParsedMenu:
    if not payload.text.strip():
        raise HTTPException(status_code=400, detail="Menu text is required")
    return parse_menu_text(payload.text)


@router.post("/analyze", response_model=MenuTextAnalysis)
async def analyze_menu(
    payload: MenuTextRequest,
    analyzer: MenuTextAnalyzer = Depends(get_analyzer),
) -> MenuTextAnalysis:
    try:
        return await asyncio.wait_for(
            analyzer.analyze(payload.text, use_model=payload.use_model),
            timeout=_MENU_ANALYSIS_TIMEOUT_SECONDS,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except asyncio.TimeoutError as exc:
        logger.warning(
            "Menu analysis timed out after %s seconds", _MENU_ANALYSIS_TIMEOUT_SECONDS
        )
        raise HTTPException(
            status_code=504,
            detail="Menu analysis took too long. Please try again.",
        ) from exc

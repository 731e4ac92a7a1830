"""Application routes."""

from fastapi import APIRouter

from . import chat, generate, menu

router = APIRouter()
router.include_router(generate.router)
router.include_router(menu.router)
router.include_router(chat.router)

__all__ = ["router"]

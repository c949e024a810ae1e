"""
Top‑level API router.

This router aggregates the domain routers under a unified prefix
(``settings.api_prefix``, applied in ``main.py``).
"""

from fastapi import APIRouter

from .endpoints import contacts, health

router = APIRouter()

router.include_router(health.router, tags=["health"])
router.include_router(contacts.router, prefix="/contacts", tags=["contacts"])

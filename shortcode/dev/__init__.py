"""Introspection routes for local debugging, they expose generator internals."""

from fastapi import APIRouter

from . import generators, state

router = APIRouter(prefix="/dev-tools", tags=["dev-tools"])

router.include_router(generators.router)
router.include_router(state.router)

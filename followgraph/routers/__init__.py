"""API routers for the followgraph backend."""
from fastapi import APIRouter

from . import apikeys, follows, health, users


def get_api_router() -> APIRouter:
    """Return the root API router."""

    api_router = APIRouter()
    api_router.include_router(health.router)
    api_router.include_router(users.router)
    api_router.include_router(follows.router)
    api_router.include_router(apikeys.router)
    return api_router

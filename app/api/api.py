"""
API router aggregation
Combines all API route handlers into a single router
Reference: https://fastapi.tiangolo.com/tutorial/bigger-applications/
"""
from fastapi import APIRouter

from app.api.routes import task


def build_api_router(prefix: str) -> APIRouter:
    """
    Create the router mounted under the API base path (e.g. /api)

    Args:
        prefix: API base path from settings
    """
    api_router = APIRouter(prefix=prefix)

    # Include route modules
    # Each route module is added as a sub-router
    api_router.include_router(task.router)
    return api_router

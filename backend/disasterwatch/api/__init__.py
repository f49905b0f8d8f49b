"""
API Routes for the DisasterWatch gateway
"""

from fastapi import APIRouter

from .proxy import router as proxy_router

# Main API router
api_router = APIRouter()

api_router.include_router(
    proxy_router,
    tags=["Proxy Gateway"]
)

__all__ = ["api_router"]

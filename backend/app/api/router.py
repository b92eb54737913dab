"""
API router aggregator.
Includes all route modules.
"""
from fastapi import APIRouter
from app.api import health, interpret

api_router = APIRouter()

# Include route modules
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(interpret.router, prefix="/interpret", tags=["interpret"])

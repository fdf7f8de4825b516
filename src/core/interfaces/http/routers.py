"""API router configuration."""

from fastapi import APIRouter

from src.modules.listings.interfaces.router import router as listings_router

api_router = APIRouter()

# News & Events listings
api_router.include_router(listings_router)

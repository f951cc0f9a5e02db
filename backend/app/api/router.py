from fastapi import APIRouter

from app.api.routes import health, markets

api_router = APIRouter()
api_router.include_router(health.router, tags=["health"])
api_router.include_router(markets.router, prefix="/markets", tags=["markets"])

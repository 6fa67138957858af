"""API router that aggregates all endpoint routers."""

from fastapi import APIRouter

from gateway.api.endpoints import air_quality, cities, health, weather

api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(weather.router)
api_router.include_router(air_quality.router)
api_router.include_router(cities.router)

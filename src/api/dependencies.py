"""Process-wide planner service and the app lifespan that tears it down."""
from src.api.planner_service import TripPlannerService
from src.core.config import ApiSettings
from fastapi import FastAPI
from contextlib import asynccontextmanager
from typing import AsyncGenerator
from functools import lru_cache


@lru_cache(maxsize=1)
def get_planner_service() -> TripPlannerService:
    """Return the shared planner service.

    Settings are read once from the environment. A missing gateway key does not
    fail here; it is reported on each generation request instead.
    """
    settings = ApiSettings.from_env()
    return TripPlannerService(settings)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Close the gateway's HTTP client on shutdown, if a service was ever built."""
    try:
        yield
    finally:
        if get_planner_service.cache_info().currsize:
            service = get_planner_service()
            await service.close()
            get_planner_service.cache_clear()

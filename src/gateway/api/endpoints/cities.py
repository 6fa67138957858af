"""City search endpoints."""

from fastapi import APIRouter

from gateway.core.deps import Locations
from gateway.schemas.common import ErrorBody
from gateway.schemas.location import CitySuggestion

router = APIRouter(prefix="/cities", tags=["cities"], responses={500: {"model": ErrorBody}})


@router.get("/search/{query}", response_model=list[CitySuggestion])
async def search_cities(query: str, locations: Locations) -> list[CitySuggestion]:
    """Up to five city suggestions for a partial name."""
    return await locations.search(query)

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from app.core.news_client import get_api_key, get_news_fetcher
from schemas.params import SourcesParams
from schemas.sources import SourcesResponse
from services.endpoint import SourcesEndpoint
from services.news_fetcher import NewsFetcherService

router = APIRouter(tags=["sources"])


@router.get("/sources", response_model=SourcesResponse)
async def list_sources(
    category: str | None = Query(default=None, min_length=1),
    language: str | None = Query(default=None, min_length=1),
    country: str | None = Query(default=None, min_length=1),
    api_key: str = Depends(get_api_key),
    fetcher: NewsFetcherService = Depends(get_news_fetcher),
) -> SourcesResponse:
    params = SourcesParams(category=category, language=language, country=country)
    sources = await fetcher.fetch_sources(SourcesEndpoint(api_key=api_key, params=params))
    return SourcesResponse(sources=sources)

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query

from app.core.news_client import get_api_key, get_news_fetcher
from schemas.news import ArticlesResponse
from schemas.params import EverythingParams, Paging, SortOrder, TopHeadlinesParams
from services.endpoint import EverythingEndpoint, TopHeadlinesEndpoint
from services.news_fetcher import NewsFetcherService

router = APIRouter(tags=["news"])


def _split_csv(value: str | None) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


@router.get("/top-headlines", response_model=ArticlesResponse)
async def top_headlines(
    country: str | None = Query(default=None, min_length=1),
    category: str | None = Query(default=None, min_length=1),
    sources: str | None = Query(default=None),
    q: str | None = Query(default=None),
    page_size: int = Query(default=20, ge=1, le=100),
    page: int = Query(default=1, ge=1),
    api_key: str = Depends(get_api_key),
    fetcher: NewsFetcherService = Depends(get_news_fetcher),
) -> ArticlesResponse:
    params = TopHeadlinesParams(
        country=country,
        category=category,
        sources=_split_csv(sources),
        search_term=q,
        paging=Paging(page_size=page_size, page_number=page),
    )
    envelope = await fetcher.fetch(TopHeadlinesEndpoint(api_key=api_key, params=params))
    return ArticlesResponse(
        total_results=envelope.total_results,
        articles=envelope.articles or [],
    )


@router.get("/everything", response_model=ArticlesResponse)
async def everything(
    q: str | None = Query(default=None),
    q_in_title: str | None = Query(default=None),
    sources: str | None = Query(default=None),
    domains: str | None = Query(default=None),
    exclude_domains: str | None = Query(default=None),
    min_date: date | None = Query(default=None, alias="from"),
    max_date: date | None = Query(default=None, alias="to"),
    language: str | None = Query(default=None, min_length=1),
    sort_by: SortOrder | None = Query(default=None),
    page_size: int = Query(default=20, ge=1, le=100),
    page: int = Query(default=1, ge=1),
    api_key: str = Depends(get_api_key),
    fetcher: NewsFetcherService = Depends(get_news_fetcher),
) -> ArticlesResponse:
    params = EverythingParams(
        search_term=q,
        title_search_term=q_in_title,
        sources=_split_csv(sources),
        domains=_split_csv(domains),
        excluded_domains=_split_csv(exclude_domains),
        min_date=min_date,
        max_date=max_date,
        language=language,
        sort_order=sort_by,
        paging=Paging(page_size=page_size, page_number=page),
    )
    envelope = await fetcher.fetch(EverythingEndpoint(api_key=api_key, params=params))
    return ArticlesResponse(
        total_results=envelope.total_results,
        articles=envelope.articles or [],
    )

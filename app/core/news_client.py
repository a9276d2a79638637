from __future__ import annotations

from fastapi import HTTPException

from app.core.config import Settings, get_settings
from services.news_fetcher import HttpxTransport, NewsFetcherService


def build_news_fetcher(settings: Settings) -> NewsFetcherService:
    return NewsFetcherService(
        HttpxTransport(timeout=settings.request_timeout),
        base_url=settings.base_url,
        decoder_options=settings.decoder_options,
    )


def get_news_fetcher() -> NewsFetcherService:
    return build_news_fetcher(get_settings())


def get_api_key() -> str:
    api_key = get_settings().api_key
    if not api_key:
        raise HTTPException(status_code=500, detail="News API key is not configured.")
    return api_key

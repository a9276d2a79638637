from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from schemas.news import Article
from schemas.sources import Source
from services.endpoint import (
    DEFAULT_BASE_URL,
    ArticleEndpoint,
    Endpoint,
    RequestDescriptor,
    SourcesEndpoint,
    resolve_request,
)
from services.envelope_decoder import DecoderOptions, Envelope, decode_envelope
from services.errors import EnvelopeDecodeError, NewsAPIError, NewsTransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    content: bytes


class NewsTransport(Protocol):
    async def send(self, request: RequestDescriptor) -> TransportResponse:
        ...


class HttpxTransport:
    """Send News API requests with ``httpx``; HTTP error statuses are returned, not raised."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    async def send(self, request: RequestDescriptor) -> TransportResponse:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.request(
                    request.method,
                    request.url,
                    params=list(request.params),
                    headers=dict(request.headers),
                )
        except httpx.HTTPError as exc:
            raise NewsTransportError(f"Failed to reach News API: {request.path}") from exc

        return TransportResponse(status_code=response.status_code, content=response.content)


class NewsFetcherService:
    """Fetch sources and articles from the News API.

    Every call issues exactly one request: no retries, no caching and no
    automatic paging. Transport failures propagate unchanged; remote errors
    surface as ``NewsAPIError`` subclasses and unparseable responses as
    ``EnvelopeDecodeError``.
    """

    def __init__(
        self,
        transport: NewsTransport | None = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        decoder_options: DecoderOptions | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._transport = transport or HttpxTransport(timeout=timeout)
        self._base_url = base_url
        self._decoder_options = decoder_options or DecoderOptions()

    async def fetch(self, endpoint: Endpoint) -> Envelope:
        request = resolve_request(endpoint, self._base_url)
        logger.info("Requesting %s...", request.path)

        try:
            response = await self._transport.send(request)
        except asyncio.CancelledError:
            logger.info("Request for %s cancelled.", request.path)
            raise
        except Exception as exc:
            logger.warning("Request for %s failed with error: %s", request.path, exc)
            raise

        try:
            envelope = decode_envelope(response.content, self._decoder_options)
        except NewsAPIError as exc:
            logger.warning("Request for %s failed with error: %s", request.path, exc.describe())
            raise
        except EnvelopeDecodeError as exc:
            logger.warning(
                "Request for %s returned an unparseable response (HTTP %s): %s",
                request.path,
                response.status_code,
                exc,
            )
            raise

        logger.info("Request for %s finished successfully.", request.path)
        return envelope

    async def fetch_sources(self, endpoint: SourcesEndpoint) -> list[Source]:
        envelope = await self.fetch(endpoint)
        return envelope.sources or []

    async def fetch_articles(self, endpoint: ArticleEndpoint) -> list[Article]:
        envelope = await self.fetch(endpoint)
        return envelope.articles or []

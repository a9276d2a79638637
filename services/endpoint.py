from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import ClassVar

import httpx

from schemas.params import EverythingParams, QueryParams, SourcesParams, TopHeadlinesParams

DEFAULT_BASE_URL = "https://newsapi.org/v2"


@dataclass(frozen=True)
class SourcesEndpoint:
    api_key: str
    params: SourcesParams = field(default_factory=SourcesParams)

    path: ClassVar[str] = "sources"


@dataclass(frozen=True)
class TopHeadlinesEndpoint:
    api_key: str
    params: TopHeadlinesParams = field(default_factory=TopHeadlinesParams)

    path: ClassVar[str] = "top-headlines"


@dataclass(frozen=True)
class EverythingEndpoint:
    api_key: str
    params: EverythingParams = field(default_factory=EverythingParams)

    path: ClassVar[str] = "everything"


Endpoint = SourcesEndpoint | TopHeadlinesEndpoint | EverythingEndpoint
ArticleEndpoint = TopHeadlinesEndpoint | EverythingEndpoint


@dataclass(frozen=True)
class RequestDescriptor:
    method: str
    url: str
    params: tuple[tuple[str, str], ...]
    headers: Mapping[str, str]
    path: str

    @property
    def full_url(self) -> str:
        return str(httpx.URL(self.url, params=list(self.params)))


def query_params(endpoint: Endpoint) -> QueryParams:
    return endpoint.params


def resolve_request(endpoint: Endpoint, base_url: str = DEFAULT_BASE_URL) -> RequestDescriptor:
    """Build the GET request for an endpoint; performs no I/O and no key validation."""
    return RequestDescriptor(
        method="GET",
        url=f"{base_url.rstrip('/')}/{endpoint.path}",
        params=tuple(query_params(endpoint).build_query_items()),
        headers={
            "Authorization": f"Bearer {endpoint.api_key}",
            "Accept": "application/json",
        },
        path=endpoint.path,
    )

from __future__ import annotations

from abc import abstractmethod
from datetime import date, datetime, timezone
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from schemas.sources import Source
from schemas.taxonomy import Category, Country, Language

DEFAULT_PAGE_SIZE = 20
DEFAULT_PAGE_NUMBER = 1

QueryItems = list[tuple[str, str]]


class SortOrder(str, Enum):
    publication = "publishedAt"
    relevancy = "relevancy"
    popularity = "popularity"


class Paging(BaseModel):
    """Page size (1-100) and 1-based page number of a paged request."""

    model_config = ConfigDict(frozen=True)

    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=100)
    page_number: int = Field(default=DEFAULT_PAGE_NUMBER, ge=1)

    def build_query_items(self) -> QueryItems:
        items: QueryItems = []
        if self.page_size != DEFAULT_PAGE_SIZE:
            items.append(("pageSize", str(self.page_size)))
        if self.page_number > DEFAULT_PAGE_NUMBER:
            items.append(("page", str(self.page_number)))
        return items


def _search_term(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _format_date(value: date) -> str:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        value = value.date()
    return value.strftime("%Y-%m-%d")


def _source_ids(value: Any) -> Any:
    if isinstance(value, (str, Source)):
        value = [value]
    if isinstance(value, (list, tuple)):
        return tuple(item.id if isinstance(item, Source) else item for item in value)
    return value


SourceIds = Annotated[tuple[str, ...], BeforeValidator(_source_ids)]


class QueryParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    @abstractmethod
    def build_query_items(self) -> QueryItems:
        ...


class SourcesParams(QueryParams):
    category: Category | None = None
    language: Language | None = None
    country: Country | None = None

    def build_query_items(self) -> QueryItems:
        items: QueryItems = []
        if self.category is not None:
            items.append(("category", self.category.slug))
        if self.language is not None:
            items.append(("language", self.language.code))
        if self.country is not None:
            items.append(("country", self.country.code))
        return items


class TopHeadlinesParams(QueryParams):
    country: Country | None = None
    category: Category | None = None
    sources: SourceIds = ()
    search_term: str | None = None
    paging: Paging = Field(default_factory=Paging)

    def build_query_items(self) -> QueryItems:
        items: QueryItems = []
        if self.country is not None:
            items.append(("country", self.country.code))
        if self.category is not None:
            items.append(("category", self.category.slug))
        if self.sources:
            items.append(("sources", ",".join(self.sources)))
        search_term = _search_term(self.search_term)
        if search_term:
            items.append(("q", search_term))
        items.extend(self.paging.build_query_items())
        return items


class EverythingParams(QueryParams):
    search_term: str | None = None
    title_search_term: str | None = None
    sources: SourceIds = ()
    domains: tuple[str, ...] = ()
    excluded_domains: tuple[str, ...] = ()
    min_date: datetime | date | None = None
    max_date: datetime | date | None = None
    language: Language | None = None
    sort_order: SortOrder | None = None
    paging: Paging = Field(default_factory=Paging)

    def build_query_items(self) -> QueryItems:
        items: QueryItems = []
        search_term = _search_term(self.search_term)
        if search_term:
            items.append(("q", search_term))
        title_search_term = _search_term(self.title_search_term)
        if title_search_term:
            items.append(("qInTitle", title_search_term))
        if self.sources:
            items.append(("sources", ",".join(self.sources)))
        if self.domains:
            items.append(("domains", ",".join(self.domains)))
        if self.excluded_domains:
            items.append(("excludeDomains", ",".join(self.excluded_domains)))
        if self.min_date is not None:
            items.append(("from", _format_date(self.min_date)))
        if self.max_date is not None:
            items.append(("to", _format_date(self.max_date)))
        if self.language is not None:
            items.append(("language", self.language.code))
        if self.sort_order is not None:
            items.append(("sortBy", self.sort_order.value))
        items.extend(self.paging.build_query_items())
        return items

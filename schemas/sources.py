from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, Field

from schemas.base import IdentityModel, OptionalUrl, TextOrEmpty
from schemas.taxonomy import Category, Country, Language


class Source(IdentityModel):
    """A News API source, identified by its ``id``."""

    id: str
    name: str
    overview: TextOrEmpty = Field(default="", alias="description")
    url: OptionalUrl = None
    category: Category
    language: Language
    country: Country

    def identity(self) -> str:
        return self.id


def group_by_category(sources: Iterable[Source]) -> dict[Category, list[Source]]:
    grouped: dict[Category, list[Source]] = {}
    for source in sources:
        grouped.setdefault(source.category, []).append(source)
    return grouped


class SourcesResponse(BaseModel):
    sources: list[Source]

from __future__ import annotations

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)

from schemas.base import IdentityModel, OptionalUrl, PublicationDate, TextOrEmpty, WebUrl


class Article(IdentityModel):
    """A news article. Two articles are the same article when their URLs match."""

    author: str | None = None
    title: str
    overview: TextOrEmpty = Field(default="", alias="description")
    url: WebUrl
    image_url: OptionalUrl = Field(default=None, alias="urlToImage")
    publication_date: PublicationDate = Field(default=None, alias="publishedAt")
    source_id: str = Field(default="", exclude=True)

    @model_validator(mode="before")
    @classmethod
    def _flatten_source_ref(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "source_id" in data:
            return data
        if "source" not in data:
            raise ValueError("Article is missing its source reference.")
        source_ref = data["source"]
        if not isinstance(source_ref, dict):
            raise ValueError("Article source reference must be an object.")
        flattened = {key: value for key, value in data.items() if key != "source"}
        flattened["source_id"] = source_ref.get("id") or ""
        return flattened

    @model_serializer(mode="wrap")
    def _nest_source_ref(
        self,
        handler: SerializerFunctionWrapHandler,
        info: SerializationInfo,
    ) -> dict[str, Any]:
        data = handler(self)
        if info.by_alias:
            data["source"] = {"id": self.source_id}
        else:
            data["source_id"] = self.source_id
        return data

    def identity(self) -> str:
        return str(self.url)


class ArticlesResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_results: int | None = Field(default=None, alias="totalResults")
    articles: list[Article]

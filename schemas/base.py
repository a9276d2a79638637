from __future__ import annotations

import logging
from abc import abstractmethod
from datetime import datetime, timezone
from functools import total_ordering
from typing import Annotated, Any

from pydantic import (
    AnyUrl,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    UrlConstraints,
    ValidationError,
    ValidatorFunctionWrapHandler,
    WrapValidator,
)

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
_MILLISECOND_TIMESTAMP_LENGTH = 24


def strip_timestamp_milliseconds(value: str) -> str:
    """Drop the ``.SSS`` part of a 24 character ``...SS.SSSZ`` timestamp."""
    if len(value) != _MILLISECOND_TIMESTAMP_LENGTH:
        return value
    return value[:-5] + value[-1:]


def parse_timestamp(value: str) -> datetime:
    """Parse a News API timestamp, falling back to the epoch when unparseable."""
    try:
        return datetime.strptime(strip_timestamp_milliseconds(value), _TIMESTAMP_FORMAT)
    except ValueError:
        logger.debug("Unable to parse timestamp: %s", value)
        return EPOCH


def known_publication_date(value: Any) -> Any:
    """Normalize a raw ``publishedAt`` value; the epoch or earlier means unknown."""
    if value is None:
        return None
    if isinstance(value, str):
        value = parse_timestamp(value)
    if not isinstance(value, datetime):
        logger.debug("Ignoring non-timestamp publication date: %r", value)
        return None
    aware = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if aware <= EPOCH:
        return None
    return value


def optional_url(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
    try:
        return handler(value)
    except ValidationError:
        logger.debug("Ignoring malformed URL: %r", value)
        return None


def empty_if_none(value: Any) -> Any:
    return "" if value is None else value


# No length cap, unlike HttpUrl.
WebUrl = Annotated[AnyUrl, UrlConstraints(allowed_schemes=["http", "https"])]
OptionalUrl = Annotated[WebUrl | None, WrapValidator(optional_url)]
TextOrEmpty = Annotated[str, BeforeValidator(empty_if_none)]
PublicationDate = Annotated[datetime | None, BeforeValidator(known_publication_date)]


@total_ordering
class IdentityModel(BaseModel):
    """Immutable model compared, hashed and ordered by a single identity key."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @abstractmethod
    def identity(self) -> str:
        ...

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.identity() == other.identity()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.identity() < other.identity()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.identity()))

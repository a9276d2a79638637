from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from schemas.news import Article
from schemas.sources import Source
from services.errors import ElementDecodeError, EnvelopeDecodeError, map_error

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResponseStatus(str, Enum):
    ok = "ok"
    error = "error"


class StrictScope(str, Enum):
    envelope = "envelope"
    collection = "collection"


@dataclass(frozen=True)
class DecoderOptions:
    """Controls how per-element decode failures inside result arrays are handled.

    In non-strict mode malformed sources or articles are logged and skipped.
    When the matching ``fail_on_*`` flag is set, the first malformed element
    either aborts the whole envelope (``StrictScope.envelope``) or empties
    only the affected collection (``StrictScope.collection``).
    """

    fail_on_source_failure: bool = False
    fail_on_article_failure: bool = False
    strict_scope: StrictScope = StrictScope.envelope


@dataclass(frozen=True)
class Envelope:
    status: ResponseStatus
    total_results: int | None = None
    sources: list[Source] | None = None
    articles: list[Article] | None = None


@dataclass(frozen=True)
class DecodeResult(Generic[T]):
    items: list[T] = field(default_factory=list)
    failures: list[tuple[int, Exception]] = field(default_factory=list)


def decode_collection(
    items: Iterable[Any],
    decode: Callable[[Any], T],
    *,
    strict: bool = False,
    label: str = "element",
) -> DecodeResult[T]:
    """Decode every element independently, collecting successes and failures."""
    decoded: list[T] = []
    failures: list[tuple[int, Exception]] = []
    for index, item in enumerate(items):
        try:
            decoded.append(decode(item))
        except ValidationError as exc:
            if strict:
                raise ElementDecodeError(label, index, exc) from exc
            logger.warning("Failed decoding %s from JSON at index %s: %s", label, index, exc)
            failures.append((index, exc))
    return DecodeResult(items=decoded, failures=failures)


def _load(payload: bytes | str | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(payload, (bytes, bytearray, str)):
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise EnvelopeDecodeError("Response body is not valid JSON.") from exc
    else:
        data = payload
    if not isinstance(data, Mapping):
        raise EnvelopeDecodeError("Response envelope must be a JSON object.")
    return data


def _optional_string(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise EnvelopeDecodeError(f"Envelope field '{key}' must be a string.")
    return value


def _optional_int(data: Mapping[str, Any], key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise EnvelopeDecodeError(f"Envelope field '{key}' must be an integer.")
    return value


def _decode_array(
    data: Mapping[str, Any],
    key: str,
    decode: Callable[[Any], T],
    *,
    strict: bool,
    scope: StrictScope,
    label: str,
) -> list[T] | None:
    if key not in data:
        return None
    items = data[key]
    if not isinstance(items, list):
        raise EnvelopeDecodeError(f"Envelope field '{key}' must be an array.")
    try:
        return decode_collection(items, decode, strict=strict, label=label).items
    except ElementDecodeError as exc:
        if scope is StrictScope.envelope:
            raise
        logger.warning("Discarding all %s after strict decode failure: %s", key, exc)
        return []


def decode_envelope(
    payload: bytes | str | Mapping[str, Any],
    options: DecoderOptions | None = None,
) -> Envelope:
    """Decode a News API response envelope.

    Raises ``EnvelopeDecodeError`` when the payload is structurally invalid and
    the mapped ``NewsAPIError`` when the envelope reports ``status: error``.
    """
    options = options or DecoderOptions()
    data = _load(payload)

    raw_status = data.get("status")
    try:
        status = ResponseStatus(raw_status)
    except ValueError as exc:
        raise EnvelopeDecodeError(f"Unrecognized response status: {raw_status!r}") from exc

    if status is ResponseStatus.error:
        raise map_error(_optional_string(data, "code"), _optional_string(data, "message"))

    return Envelope(
        status=status,
        total_results=_optional_int(data, "totalResults"),
        sources=_decode_array(
            data,
            "sources",
            Source.model_validate,
            strict=options.fail_on_source_failure,
            scope=options.strict_scope,
            label="source",
        ),
        articles=_decode_array(
            data,
            "articles",
            Article.model_validate,
            strict=options.fail_on_article_failure,
            scope=options.strict_scope,
            label="article",
        ),
    )

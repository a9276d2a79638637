from __future__ import annotations

import locale
from typing import Any

from pydantic import Field, model_serializer, model_validator

from schemas.base import IdentityModel

_LANGUAGE_NAMES = {
    "ar": "Arabic",
    "de": "German",
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "he": "Hebrew",
    "it": "Italian",
    "nl": "Dutch",
    "no": "Norwegian",
    "pt": "Portuguese",
    "ru": "Russian",
    "se": "Northern Sami",
    "zh": "Chinese",
}

_COUNTRY_NAMES = {
    "ae": "United Arab Emirates",
    "ar": "Argentina",
    "at": "Austria",
    "au": "Australia",
    "be": "Belgium",
    "bg": "Bulgaria",
    "br": "Brazil",
    "ca": "Canada",
    "ch": "Switzerland",
    "cn": "China",
    "co": "Colombia",
    "cu": "Cuba",
    "cz": "Czechia",
    "de": "Germany",
    "eg": "Egypt",
    "fr": "France",
    "gb": "United Kingdom",
    "gr": "Greece",
    "hk": "Hong Kong",
    "hu": "Hungary",
    "id": "Indonesia",
    "ie": "Ireland",
    "il": "Israel",
    "in": "India",
    "it": "Italy",
    "jp": "Japan",
    "kr": "South Korea",
    "lt": "Lithuania",
    "lv": "Latvia",
    "ma": "Morocco",
    "mx": "Mexico",
    "my": "Malaysia",
    "ng": "Nigeria",
    "nl": "Netherlands",
    "no": "Norway",
    "nz": "New Zealand",
    "ph": "Philippines",
    "pl": "Poland",
    "pt": "Portugal",
    "ro": "Romania",
    "rs": "Serbia",
    "ru": "Russia",
    "sa": "Saudi Arabia",
    "se": "Sweden",
    "sg": "Singapore",
    "si": "Slovenia",
    "sk": "Slovakia",
    "th": "Thailand",
    "tr": "Turkey",
    "tw": "Taiwan",
    "ua": "Ukraine",
    "us": "United States",
    "ve": "Venezuela",
    "za": "South Africa",
}

# Offset from an ASCII capital letter to its regional indicator symbol.
_REGIONAL_INDICATOR_OFFSET = 127397


def _split_locale(value: str) -> tuple[str, str]:
    tag = value.split(".", 1)[0].split("@", 1)[0].replace("-", "_")
    language, _, region = tag.partition("_")
    return language, region


class Category(IdentityModel):
    """News category identified by its slug, e.g. ``business``."""

    slug: str = Field(min_length=1)

    @model_validator(mode="before")
    @classmethod
    def _from_slug(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"slug": data}
        return data

    @model_serializer
    def _serialize(self) -> str:
        return self.slug

    def identity(self) -> str:
        return self.slug

    @property
    def name(self) -> str:
        words = [
            "&" if word == "and" else word.capitalize()
            for word in self.slug.split("-")
            if word
        ]
        return " ".join(words)

    def __str__(self) -> str:
        return self.name


class Language(IdentityModel):
    """Language identified by its two-letter ISO 639-1 code."""

    code: str = Field(min_length=1)

    @model_validator(mode="before")
    @classmethod
    def _from_code(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"code": data}
        return data

    @model_serializer
    def _serialize(self) -> str:
        return self.code

    def identity(self) -> str:
        return self.code

    @property
    def name(self) -> str:
        return _LANGUAGE_NAMES.get(self.code, self.code)

    @classmethod
    def from_locale(cls, value: str) -> Language | None:
        language, _ = _split_locale(value)
        if len(language) < 2 or not language.isalpha():
            return None
        return cls(code=language[:2].lower())

    @classmethod
    def current(cls) -> Language | None:
        tag = locale.getlocale()[0]
        return cls.from_locale(tag) if tag else None

    def __str__(self) -> str:
        return self.name


class Country(IdentityModel):
    """Country identified by its two-letter ISO 3166-1 alpha-2 code."""

    code: str = Field(min_length=1)

    @model_validator(mode="before")
    @classmethod
    def _from_code(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"code": data}
        return data

    @model_serializer
    def _serialize(self) -> str:
        return self.code

    def identity(self) -> str:
        return self.code

    @property
    def name(self) -> str:
        return _COUNTRY_NAMES.get(self.code, self.code)

    @property
    def flag(self) -> str:
        if self.code == "zh":
            return "\U0001F1E8\U0001F1F3"
        return "".join(
            chr(_REGIONAL_INDICATOR_OFFSET + ord(letter))
            for letter in self.code.upper()
            if "A" <= letter <= "Z"
        )

    @classmethod
    def from_locale(cls, value: str) -> Country | None:
        _, region = _split_locale(value)
        if len(region) < 2 or not region.isalpha():
            return None
        return cls(code=region[:2].lower())

    @classmethod
    def current(cls) -> Country | None:
        tag = locale.getlocale()[0]
        return cls.from_locale(tag) if tag else None

    def __str__(self) -> str:
        return self.name


BUSINESS = Category(slug="business")
ENTERTAINMENT = Category(slug="entertainment")
GENERAL = Category(slug="general")
HEALTH = Category(slug="health")
SCIENCE = Category(slug="science")
SPORTS = Category(slug="sports")
TECHNOLOGY = Category(slug="technology")

AVAILABLE_CATEGORIES: list[Category] = sorted(
    [BUSINESS, ENTERTAINMENT, GENERAL, HEALTH, SCIENCE, SPORTS, TECHNOLOGY],
    key=lambda item: item.name,
)

# "ud" is served by the API but has no known display name.
AVAILABLE_LANGUAGES: list[Language] = sorted(
    [Language(code=code) for code in [*_LANGUAGE_NAMES, "ud"]],
    key=lambda item: item.name,
)

AVAILABLE_COUNTRIES: list[Country] = sorted(
    [Country(code=code) for code in _COUNTRY_NAMES],
    key=lambda item: item.name,
)

from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from services.endpoint import DEFAULT_BASE_URL
from services.envelope_decoder import DecoderOptions, StrictScope

Environment = Literal["development", "production", "staging", "test"]


def _resolve_env_files() -> tuple[str, ...]:
    env = os.getenv("NEWSAPI_ENVIRONMENT", "development").lower()
    if env in {"prod", "production"}:
        return (".env", ".env.prod")
    if env in {"dev", "development"}:
        return (".env", ".env.dev")
    if env in {"test", "testing"}:
        return (".env", ".env.test")
    return (".env",)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="NEWSAPI_",
        env_file=_resolve_env_files(),
        env_nested_delimiter="__",
        extra="ignore",
    )

    environment: Environment = "development"
    project_name: str = "News API Client"
    api_v1_prefix: str = "/api/v1"
    log_level: str = "INFO"
    log_json: bool = False
    rate_limit: str = "60/minute"
    allowed_hosts: list[str] = ["*"]
    cors_origins: list[str] = []
    enable_docs: bool = True

    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = 30.0
    fail_on_source_decoding_failure: bool = False
    fail_on_article_decoding_failure: bool = False
    strict_decoding_scope: StrictScope = StrictScope.envelope

    @property
    def decoder_options(self) -> DecoderOptions:
        return DecoderOptions(
            fail_on_source_failure=self.fail_on_source_decoding_failure,
            fail_on_article_failure=self.fail_on_article_decoding_failure,
            strict_scope=self.strict_decoding_scope,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()

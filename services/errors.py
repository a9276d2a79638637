from __future__ import annotations

from typing import ClassVar

HELP_ANCHOR = "https://newsapi.org/docs/errors"


class NewsClientError(RuntimeError):
    """Base class of every failure raised by the News API client."""


class NewsTransportError(NewsClientError):
    """Raised when the News API cannot be reached."""


class EnvelopeDecodeError(NewsClientError):
    """Raised when a News API response is structurally unparseable."""


class ElementDecodeError(EnvelopeDecodeError):
    """Raised in strict mode when a single source or article fails to decode."""

    def __init__(self, label: str, index: int, error: Exception) -> None:
        super().__init__(f"Failed decoding {label} at index {index}: {error}")
        self.label = label
        self.index = index
        self.error = error


class NewsAPIError(NewsClientError):
    """An error reported by the News API in an ``error`` status response."""

    code: ClassVar[str] = ""
    description: ClassVar[str] = ""
    recovery_suggestion: ClassVar[str | None] = None
    http_status: ClassVar[int] = 400
    help_anchor: ClassVar[str] = HELP_ANCHOR

    def __init__(self, message: str = "") -> None:
        super().__init__(self.description)
        self.message = message

    @property
    def error_code(self) -> str:
        return self.code

    @property
    def failure_reason(self) -> str | None:
        return None

    def describe(self) -> str:
        lines = [self.description, self.failure_reason, self.recovery_suggestion]
        lines.append(f"See {self.help_anchor}")
        return "\n".join(line for line in lines if line)


class _MessageCarryingError(NewsAPIError):
    @property
    def failure_reason(self) -> str | None:
        return self.message or None


class ApiKeyDisabledError(NewsAPIError):
    code = "apiKeyDisabled"
    description = "Your API key has been disabled."
    http_status = 401


class ApiKeyExhaustedError(NewsAPIError):
    code = "apiKeyExhausted"
    description = "Your API key has no more requests available."
    http_status = 401


class ApiKeyInvalidError(NewsAPIError):
    code = "apiKeyInvalid"
    description = "Your API key hasn't been entered correctly. Double check it and try again."
    http_status = 401


class ApiKeyMissingError(NewsAPIError):
    code = "apiKeyMissing"
    description = "Your API key is missing from the request."
    recovery_suggestion = "Append the API key and try again."
    http_status = 401


class ParameterInvalidError(_MessageCarryingError):
    code = "parameterInvalid"
    description = "You've included a parameter in your request which is currently not supported."


class ParametersMissingError(_MessageCarryingError):
    code = "parametersMissing"
    description = "Required parameters are missing from the request and it cannot be completed."


class RateLimitedError(NewsAPIError):
    code = "rateLimited"
    description = "You have been rate limited."
    recovery_suggestion = "Back off for a while before trying the request again."
    http_status = 429


class TooManySourcesError(NewsAPIError):
    code = "sourcesTooMany"
    description = "You have requested too many sources in a single request."
    recovery_suggestion = "Try splitting the request into two smaller requests."


class SourceDoesNotExistError(NewsAPIError):
    code = "sourceDoesNotExist"
    description = "You have requested a source which does not exist."


class UnexpectedError(_MessageCarryingError):
    code = "unexpectedError"
    recovery_suggestion = "Try the request again shortly."
    http_status = 500

    def __init__(self, code: str, message: str = "") -> None:
        self.remote_code = code
        super().__init__(message)

    @property
    def error_code(self) -> str:
        return self.remote_code

    @property
    def description(self) -> str:  # type: ignore[override]
        return f"An unexpected error occurred (error code {self.remote_code})"


_ERRORS_BY_CODE: dict[str, type[NewsAPIError]] = {
    error.code: error
    for error in (
        ApiKeyDisabledError,
        ApiKeyExhaustedError,
        ApiKeyInvalidError,
        ApiKeyMissingError,
        ParameterInvalidError,
        ParametersMissingError,
        RateLimitedError,
        TooManySourcesError,
        SourceDoesNotExistError,
    )
}


def map_error(code: str, message: str) -> NewsAPIError:
    """Translate a News API error code and message into a typed error."""
    error_type = _ERRORS_BY_CODE.get(code)
    if error_type is None:
        return UnexpectedError(code, message)
    return error_type(message)

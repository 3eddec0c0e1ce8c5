"""Custom exception hierarchy for the workout generation client."""

from __future__ import annotations


class GenerationError(Exception):
    """Base exception for all generation_client errors."""


class GenerationAPIError(GenerationError):
    """The language-model provider returned an error or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GenerationRateLimitError(GenerationAPIError):
    """HTTP 429 — too many requests."""

    def __init__(self, message: str = "Rate limited by the language-model provider") -> None:
        super().__init__(message, status_code=429)


class EmptyResponseError(GenerationError):
    """The provider answered with no content."""

    def __init__(self, message: str = "Empty response from AI") -> None:
        super().__init__(message)


class MalformedResponseError(GenerationError):
    """The response content holds no parseable JSON object."""


class WorkoutValidationError(GenerationError):
    """The generated workout violates field constraints.

    ``issues`` lists every ``(path, message)`` pair; the exception message
    joins them all.
    """

    def __init__(self, issues: list[tuple[str, str]]) -> None:
        self.issues = issues
        details = "; ".join(f"{path}: {message}" for path, message in issues)
        super().__init__(f"Invalid workout data: {details}")

"""Language-model workout generation client."""

from generation_client.client import GenerationClient, GenerationResult, parse_response
from generation_client.exceptions import (
    EmptyResponseError,
    GenerationAPIError,
    GenerationError,
    GenerationRateLimitError,
    MalformedResponseError,
    WorkoutValidationError,
)
from generation_client.prompts import is_prompt_valid, sanitize_prompt
from generation_client.validation import validate_generated_workout

__all__ = [
    "EmptyResponseError",
    "GenerationAPIError",
    "GenerationClient",
    "GenerationError",
    "GenerationRateLimitError",
    "GenerationResult",
    "MalformedResponseError",
    "WorkoutValidationError",
    "is_prompt_valid",
    "parse_response",
    "sanitize_prompt",
    "validate_generated_workout",
]

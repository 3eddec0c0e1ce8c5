"""High-level workout generation client.

Wraps a single chat-completion call: prompt in, validated Workout out.
Provider failures are mapped onto the generation_client exception
hierarchy.  No call is ever retried.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any

import openai
from openai import AsyncOpenAI

from generation_client.exceptions import (
    EmptyResponseError,
    GenerationAPIError,
    GenerationError,
    GenerationRateLimitError,
    MalformedResponseError,
)
from generation_client.prompts import (
    SYSTEM_PROMPT,
    build_generate_prompt,
    build_refine_prompt,
    is_prompt_valid,
    sanitize_prompt,
)
from generation_client.validation import validate_generated_workout
from workout_engine.models.enums import SportType
from workout_engine.models.workout import Workout, new_workout_id, utc_now_iso
from workout_engine.serialization.state import segment_to_dict

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 2000

_JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


@dataclass(frozen=True)
class GenerationResult:
    workout: Workout
    interpretation: str


def parse_response(content: str | None) -> dict[str, Any]:
    """Extract the JSON object embedded in a model reply.

    Raises:
        EmptyResponseError: No content.
        MalformedResponseError: No decodable JSON object.
    """
    if not content:
        raise EmptyResponseError()
    match = _JSON_OBJECT_RE.search(content)
    if match is None:
        raise MalformedResponseError("No valid JSON found in response")
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(f"Invalid JSON in response: {exc}") from exc
    if not isinstance(data, dict):
        raise MalformedResponseError("Invalid workout structure in response")
    return data


def workout_payload(workout: Workout) -> dict[str, Any]:
    """The slice of a workout sent for refinement (segments without ids)."""
    return {
        "name": workout.name,
        "description": workout.description,
        "segments": [segment_to_dict(s, include_id=False) for s in workout.segments],
    }


class GenerationClient:
    """Facade for language-model workout generation.

    Usage:
        client = GenerationClient(api_key="sk-...")
        result = await client.generate("1 hour sweet spot", ftp=250)
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = client or AsyncOpenAI(api_key=api_key, max_retries=0)

    async def generate(
        self,
        prompt: str,
        ftp: int,
        existing: Workout | None = None,
    ) -> GenerationResult:
        """Generate a new workout, or refine *existing* when given.

        Refinement keeps the existing workout's id, author, sport type, tags
        and creation time.  Every returned segment has a fresh id.

        Raises:
            GenerationError: Bad prompt, provider failure, empty or
                malformed reply, or a reply that fails validation.
        """
        request = sanitize_prompt(prompt)
        if not is_prompt_valid(request):
            raise GenerationError("Please describe the workout you want")

        if existing is None:
            user_prompt = build_generate_prompt(request, ftp)
        else:
            user_prompt = build_refine_prompt(request, workout_payload(existing), ftp)

        content = await self._complete(user_prompt)
        spec = validate_generated_workout(parse_response(content))

        now = utc_now_iso()
        workout = Workout(
            id=existing.id if existing else new_workout_id(),
            name=spec.name,
            description=spec.description,
            author=existing.author if existing else "",
            sport_type=existing.sport_type if existing else SportType.BIKE,
            segments=tuple(spec.to_segments()),
            tags=existing.tags if existing else (),
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        verb = "Modified" if existing else "Created"
        logger.info("%s workout %r with %d segments", verb, workout.name, len(workout.segments))
        return GenerationResult(workout=workout, interpretation=f"{verb} workout: {spec.name}")

    async def _complete(self, user_prompt: str) -> str | None:
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except openai.RateLimitError as exc:
            raise GenerationRateLimitError() from exc
        except openai.APIStatusError as exc:
            raise GenerationAPIError(
                f"Provider returned HTTP {exc.status_code}: {exc.message}",
                status_code=exc.status_code,
            ) from exc
        except openai.APIError as exc:
            raise GenerationAPIError(f"Provider request failed: {exc}") from exc

        if not response.choices:
            return None
        return response.choices[0].message.content

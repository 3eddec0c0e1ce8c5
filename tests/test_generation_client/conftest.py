"""Fixtures with realistic model replies for generation tests."""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest


def chat_response(content: str | None) -> SimpleNamespace:
    """Shape of an openai chat completion with a single choice."""
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def generated_data() -> dict:
    """A well-formed generated workout as the model returns it."""
    return {
        "name": "Sweet Spot Builder",
        "description": "3 x 10 min at sweet spot",
        "segments": [
            {"type": "warmup", "duration": 600, "powerLow": 0.4, "powerHigh": 0.7},
            {
                "type": "intervals",
                "repeat": 3,
                "onDuration": 600,
                "offDuration": 300,
                "onPower": 0.9,
                "offPower": 0.55,
                "cadence": 90,
            },
            {"type": "cooldown", "duration": 300, "powerLow": 0.4, "powerHigh": 0.6},
        ],
    }


@pytest.fixture
def mock_openai(generated_data):
    """AsyncOpenAI stand-in whose completion returns *generated_data* wrapped in prose."""
    mock = MagicMock()
    reply = f"Here is your workout:\n```json\n{json.dumps(generated_data)}\n```"
    mock.chat.completions.create = AsyncMock(return_value=chat_response(reply))
    return mock

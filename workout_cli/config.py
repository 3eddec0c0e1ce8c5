"""Environment-variable-based configuration for the workout CLI."""

from __future__ import annotations

import os
from pathlib import Path

OPENAI_API_KEY: str = os.environ.get("OPENAI_API_KEY", "")
WORKOUT_MODEL: str = os.environ.get("WORKOUT_MODEL", "gpt-4o")
WORKOUT_FTP: int | None = int(os.environ["WORKOUT_FTP"]) if os.environ.get("WORKOUT_FTP") else None
STATE_DIR: Path = Path(os.environ.get("WORKOUT_STATE_DIR", "~/.workout-builder")).expanduser()
LOG_LEVEL: str = os.environ.get("WORKOUT_LOG_LEVEL", "WARNING").upper()

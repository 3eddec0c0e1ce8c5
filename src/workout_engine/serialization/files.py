"""File-level .zwo import/export: cheap pre-flight checks plus disk I/O."""

from __future__ import annotations

import logging
from pathlib import Path

from workout_engine.formatting import workout_filename
from workout_engine.models.workout import Workout
from workout_engine.serialization.zwo import to_zwo
from workout_engine.serialization.zwo_import import (
    ImportErrorKind,
    ImportFailure,
    ImportResult,
    from_zwo,
)

logger = logging.getLogger(__name__)

MAX_FILE_SIZE_BYTES = 1024 * 1024  # 1 MiB
SUPPORTED_EXTENSIONS = (".zwo",)


def validate_zwo_file(filename: str, size_bytes: int) -> str | None:
    """Pre-import gate.  Returns a human-readable error, or None if acceptable."""
    if not filename.lower().endswith(SUPPORTED_EXTENSIONS):
        return "Please select a .zwo file"
    if size_bytes > MAX_FILE_SIZE_BYTES:
        return "File is too large. Maximum size is 1MB"
    return None


def import_zwo_file(path: Path | str) -> ImportResult:
    """Validate, read (UTF-8) and parse a ``.zwo`` file."""
    path = Path(path)
    try:
        size = path.stat().st_size
    except OSError as exc:
        return ImportFailure(
            kind=ImportErrorKind.PARSE_FAILURE,
            message=f"Failed to read file: {exc}",
        )

    error = validate_zwo_file(path.name, size)
    if error:
        logger.info("Rejected %s: %s", path, error)
        return ImportFailure(kind=ImportErrorKind.FILE_REJECTED, message=error)

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return ImportFailure(
            kind=ImportErrorKind.PARSE_FAILURE,
            message=f"Failed to read file: {exc}",
        )
    return from_zwo(content)


def export_zwo_file(workout: Workout, directory: Path | str) -> Path:
    """Write the workout as ``<slug>.zwo`` into *directory* and return the path."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / workout_filename(workout.name)
    path.write_text(to_zwo(workout), encoding="utf-8")
    logger.info("Exported workout %r to %s", workout.name, path)
    return path

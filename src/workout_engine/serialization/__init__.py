"""Serialization module — .zwo codec and plain-data state shapes."""

from workout_engine.serialization.files import (
    MAX_FILE_SIZE_BYTES,
    export_zwo_file,
    import_zwo_file,
    validate_zwo_file,
)
from workout_engine.serialization.zwo import to_zwo
from workout_engine.serialization.zwo_import import (
    ImportErrorKind,
    ImportFailure,
    ImportResult,
    ImportSuccess,
    from_zwo,
)

__all__ = [
    "ImportErrorKind",
    "ImportFailure",
    "ImportResult",
    "ImportSuccess",
    "MAX_FILE_SIZE_BYTES",
    "export_zwo_file",
    "from_zwo",
    "import_zwo_file",
    "to_zwo",
    "validate_zwo_file",
]

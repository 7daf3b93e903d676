"""Shared utility functions."""
import re
from datetime import datetime, timezone

_UNSAFE_FILENAME_CHARS = re.compile(r"[\s/\\]+")


def now_iso() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def normalize_identifier(value: str) -> str:
    """Lower-case *value* and make it safe to use inside a file name."""
    return _UNSAFE_FILENAME_CHARS.sub("_", value.strip().lower())

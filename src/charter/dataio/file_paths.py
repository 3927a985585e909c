"""Helpers for constructing output file paths."""

import re
from pathlib import Path

# Allow only alphanumerics, underscore, dot, and dash.
_PREFIX_RE = re.compile(r"[^A-Za-z0-9_.-]+")


def _sanitize_prefix(name: str) -> str:
    """
    Sanitize an artifact prefix for use in a file name.

    - Replace disallowed characters with '_'.
    - Strip leading/trailing underscores.
    - Fall back to 'histogram' if nothing remains.
    """
    cleaned = _PREFIX_RE.sub("_", name).strip("_")
    return cleaned or "histogram"


def histogram_path(directory: Path, index: int, prefix: str = "histogram") -> Path:
    """
    Deterministic image path for the record with the given index.

    Example: "histogram_000042.png"
    """
    if index < 0:
        raise ValueError(f"index must be non-negative, got {index}")
    return directory / f"{_sanitize_prefix(prefix)}_{index:06d}.png"

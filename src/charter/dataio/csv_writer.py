"""CSV writing helpers for received records."""

import csv
import os
from pathlib import Path
from typing import Any, Sequence, TextIO


def _open_for_append(path: Path, create: bool) -> TextIO:
    if create:
        path.parent.mkdir(parents=True, exist_ok=True)
        return path.open("a", newline="", encoding="utf-8")
    # No O_CREAT: a file removed after startup is reported, not recreated.
    try:
        fd = os.open(path, os.O_WRONLY | os.O_APPEND)
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"CSV file {path} does not exist (pass --create to create it)") from exc
    return open(fd, "a", newline="", encoding="utf-8")


def append_row(path: Path, row: Sequence[Any], *, create: bool = False) -> None:
    """
    Append one row to a CSV file.

    The file must already exist unless ``create`` is set, in which case it
    (and its parent directories) are created as needed. A missing file
    without ``create`` raises :class:`FileNotFoundError`.
    """
    with _open_for_append(path, create) as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(row)

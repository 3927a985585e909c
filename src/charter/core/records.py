"""Fixed-arity records built from a decoded payload."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Sequence

import numpy as np

from .errors import ParseError

FIELD_COUNT = 11

# Wire integers: optional minus, ASCII digits only.
_INTEGER_RE = re.compile(r"-?[0-9]+")


def _take_fields(text: str) -> list[str]:
    return text.split()[:FIELD_COUNT]


@dataclass(frozen=True, slots=True)
class Record:
    """One sample from the device: exactly ``FIELD_COUNT`` text fields."""

    fields: tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.fields) != FIELD_COUNT:
            raise ValueError(f"Record needs {FIELD_COUNT} fields, got {len(self.fields)}")

    @classmethod
    def from_tokens(cls, tokens: Sequence[str]) -> Record:
        """Place up to ``FIELD_COUNT`` tokens and fill the rest with ``""``."""
        taken = list(tokens[:FIELD_COUNT])
        taken.extend([""] * (FIELD_COUNT - len(taken)))
        return cls(tuple(taken))

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return FIELD_COUNT

    def __getitem__(self, index: int) -> str:
        return self.fields[index]


@dataclass(frozen=True, slots=True)
class NumericRecord:
    """Integer variant of :class:`Record` used for rendering."""

    values: np.ndarray

    def __post_init__(self) -> None:
        if self.values.shape != (FIELD_COUNT,):
            raise ValueError(f"NumericRecord needs shape ({FIELD_COUNT},), got {self.values.shape}")

    def __len__(self) -> int:
        return FIELD_COUNT

    def __getitem__(self, index: int) -> int:
        return int(self.values[index])

    def tolist(self) -> list[int]:
        return [int(v) for v in self.values]


def parse_record(text: str) -> Record:
    """Split ``text`` into a text :class:`Record`. Never fails."""
    return Record.from_tokens(_take_fields(text))


def parse_numeric_record(text: str) -> NumericRecord:
    """
    Split ``text`` into a :class:`NumericRecord`.

    Missing positions default to 0. Raises :class:`ParseError` if any of the
    taken tokens is not an integer; no partial record is produced.
    """
    values = np.zeros(FIELD_COUNT, dtype=np.int64)
    for index, token in enumerate(_take_fields(text)):
        if not _INTEGER_RE.fullmatch(token):
            raise ParseError(f"Field {index} is not an integer: {token!r}")
        try:
            values[index] = int(token)
        except (ValueError, OverflowError) as exc:
            raise ParseError(f"Field {index} is not an integer: {token!r}") from exc
    return NumericRecord(values)


__all__ = ["FIELD_COUNT", "Record", "NumericRecord", "parse_record", "parse_numeric_record"]

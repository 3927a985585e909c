from __future__ import annotations

import numpy as np
import pytest

from charter.core.errors import ParseError
from charter.core.records import FIELD_COUNT, NumericRecord, Record, parse_numeric_record, parse_record


def test_field_count_is_eleven() -> None:
    assert FIELD_COUNT == 11


def test_short_payload_is_padded_with_empty_fields() -> None:
    record = parse_record("Hello")
    assert list(record) == ["Hello", "", "", "", "", "", "", "", "", "", ""]
    assert len(record) == FIELD_COUNT


def test_long_payload_keeps_first_eleven_fields() -> None:
    tokens = [str(i) for i in range(15)]
    record = parse_record(" ".join(tokens))
    assert list(record) == tokens[:11]
    assert record[10] == "10"


def test_any_whitespace_separates_fields() -> None:
    assert list(parse_record("a\tb  c\nd"))[:5] == ["a", "b", "c", "d", ""]


def test_record_rejects_wrong_arity() -> None:
    with pytest.raises(ValueError):
        Record(("a", "b"))


def test_numeric_record_defaults_to_zero() -> None:
    record = parse_numeric_record("5 -3 12")
    assert record.tolist() == [5, -3, 12, 0, 0, 0, 0, 0, 0, 0, 0]
    assert record.values.dtype == np.int64


def test_numeric_record_ignores_extra_tokens() -> None:
    record = parse_numeric_record(" ".join(str(i) for i in range(11)) + " not-a-number")
    assert record.tolist() == list(range(11))


def test_numeric_record_rejects_non_integer_field() -> None:
    with pytest.raises(ParseError):
        parse_numeric_record("1 2 x 4")


def test_numeric_record_rejects_wrong_shape() -> None:
    with pytest.raises(ValueError):
        NumericRecord(np.zeros(3, dtype=np.int64))


@pytest.mark.parametrize("token", ["+5", "1_000", "١٢", "--1", "-"])
def test_numeric_record_accepts_only_ascii_wire_integers(token: str) -> None:
    with pytest.raises(ParseError):
        parse_numeric_record(f"1 {token} 3")

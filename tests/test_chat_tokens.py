"""Unit tests for action token encoding."""
from __future__ import annotations

import pytest

from sheet_bot.chat.tokens import (
    BACK_TO_COLUMNS,
    MAX_TOKEN_BYTES,
    DecodedToken,
    column_token,
    decode_token,
    ensure_token_fits,
    token_size,
    value_token,
)
from sheet_bot.errors import OptionTooLargeError


@pytest.mark.parametrize(
    "column, value",
    [
        ("City", "New York"),
        ("City", "a_b"),
        ("first_name", "__x__"),
        ("Note", "50% off, (really)! & more?"),
        ("Город", "Санкт-Петербург"),
        ("City", "slash/and+plus"),
    ],
)
def test_value_token_round_trip(column, value):
    token = value_token(column, value)
    assert decode_token(token) == DecodedToken(kind="value", column=column, value=value)


def test_value_part_never_contains_raw_underscore():
    token = value_token("City", "a_b_c")
    assert token == "value_City_a%5Fb%5Fc"


def test_column_token_round_trip():
    assert decode_token(column_token("Due_date")) == DecodedToken(kind="column", column="Due_date")


def test_back_token():
    assert decode_token(BACK_TO_COLUMNS) == DecodedToken(kind="back")


@pytest.mark.parametrize("data", ["", "column_", "value_", "value_City_", "value_City", "other"])
def test_decode_rejects_unknown_or_malformed(data):
    assert decode_token(data) is None


def test_token_size_boundary():
    prefix = value_token("C", "")
    exact = value_token("C", "x" * (MAX_TOKEN_BYTES - len(prefix)))
    over = value_token("C", "x" * (MAX_TOKEN_BYTES - len(prefix) + 1))

    assert token_size(exact) == 64
    assert ensure_token_fits(exact) == exact

    assert token_size(over) == 65
    with pytest.raises(OptionTooLargeError) as exc:
        ensure_token_fits(over)
    assert exc.value.size == 65
    assert exc.value.limit == 64


def test_token_size_counts_utf8_bytes():
    assert token_size("я") == 2

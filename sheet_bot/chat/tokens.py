"""Action tokens carried in Telegram callback data.

Formats:
    column_<header>
    value_<header>_<encoded value>
    back_to_columns

Values are percent-encoded with `_` escaped as well, so the value part never
contains a raw `_` and a token splits unambiguously on its last underscore.
"""
from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote, unquote

from ..errors import OptionTooLargeError

# Telegram rejects callback_data longer than 64 bytes.
MAX_TOKEN_BYTES = 64

COLUMN_PREFIX = "column_"
VALUE_PREFIX = "value_"
BACK_TO_COLUMNS = "back_to_columns"


@dataclass(frozen=True)
class DecodedToken:
    kind: str  # "column", "value" or "back"
    column: str | None = None
    value: str | None = None


def encode_value(value: str) -> str:
    return quote(value, safe="").replace("_", "%5F")


def column_token(column: str) -> str:
    return f"{COLUMN_PREFIX}{column}"


def value_token(column: str, value: str) -> str:
    return f"{VALUE_PREFIX}{column}_{encode_value(value)}"


def token_size(token: str) -> int:
    return len(token.encode("utf-8"))


def ensure_token_fits(token: str, limit: int = MAX_TOKEN_BYTES) -> str:
    size = token_size(token)
    if size > limit:
        raise OptionTooLargeError(token, size, limit)
    return token


def decode_token(token: str) -> DecodedToken | None:
    """Parse callback data back into its parts, or None if it isn't ours."""
    if token == BACK_TO_COLUMNS:
        return DecodedToken(kind="back")
    if token.startswith(VALUE_PREFIX):
        body = token[len(VALUE_PREFIX):]
        column, sep, encoded = body.rpartition("_")
        if sep and column and encoded:
            return DecodedToken(kind="value", column=column, value=unquote(encoded))
        return None
    if token.startswith(COLUMN_PREFIX):
        column = token[len(COLUMN_PREFIX):]
        if column:
            return DecodedToken(kind="column", column=column)
    return None

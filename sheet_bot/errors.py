from __future__ import annotations


class SheetBotError(Exception):
    """Base class for errors raised by sheet_bot."""


class ConfigurationError(SheetBotError):
    """Required configuration is missing or invalid. Fatal at startup."""


class SourceUnavailableError(SheetBotError):
    """The spreadsheet could not be reached or rejected our credentials."""


class ColumnNotFoundError(SheetBotError):
    def __init__(self, column: str):
        super().__init__(f"column not found: {column!r}")
        self.column = column


class OptionTooLargeError(SheetBotError):
    """An action token does not fit in Telegram's callback data."""

    def __init__(self, token: str, size: int, limit: int):
        super().__init__(f"action token is {size} bytes (limit {limit})")
        self.token = token
        self.size = size
        self.limit = limit


class OutputTooLargeError(SheetBotError):
    def __init__(self, length: int, limit: int):
        super().__init__(f"message is {length} characters (limit {limit})")
        self.length = length
        self.limit = limit

"""Reusable rendering pieces for chat screens."""
from __future__ import annotations

from dataclasses import dataclass, field

from telegram.helpers import escape_markdown

from ..errors import OutputTooLargeError
from .tokens import ensure_token_fits

# Telegram's limit for a text message.
MAX_MESSAGE_CHARS = 4096
MAX_LABEL_CHARS = 30
# User-supplied column names and values quoted back in message texts.
MAX_QUOTED_CHARS = 100
ELLIPSIS = "..."


# ═══════════════════════════════════════════════════════════════════════════════
# TEXTS
# ═══════════════════════════════════════════════════════════════════════════════

WELCOME_TEXT = (
    "Welcome! I am a bot for browsing a Google Sheet.\n\n"
    "Use the /columns command to pick a column and look up data."
)
LOADING_COLUMNS_TEXT = "Loading the column list..."
LOADING_VALUES_TEXT = 'Loading values for column "{column}"...'
LOADING_ROW_TEXT = 'Looking up "{value}"...'

COLUMN_PROMPT_TEXT = "Choose a column to view:"
REFRESHED_PROMPT_TEXT = "Column list reloaded. Choose a column to view:"
NO_COLUMNS_TEXT = "No columns were found in the sheet, or it is empty."
VALUE_PROMPT_TEXT = 'Choose a value from column "{column}":'
NO_FILLED_CELLS_TEXT = 'Column "{column}" has no filled cells.'
NO_BUTTONS_TEXT = "Could not build buttons. The values in this column may be too long."
ROW_FOUND_TEXT = '*Found information for "{value}":*'
ROW_NOT_FOUND_TEXT = 'Could not find information for "{value}".'
BACK_LABEL = "‹ Back to columns"

ACCESS_ERROR_TEXT = (
    "Could not read the spreadsheet. Check the sheet's access settings and try again."
)
COLUMN_NOT_FOUND_TEXT = (
    'Column "{column}" was not found. Use /columns to see the available columns.'
)
INTERNAL_ERROR_TEXT = "An internal error occurred. Please try again later."
UNRECOGNIZED_TEXT = "Please use the /columns command to get started."
OUTPUT_TOO_LARGE_TEXT = "The result contains {count} entries and is too large to display."


# ═══════════════════════════════════════════════════════════════════════════════
# SCREEN MODEL
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Option:
    label: str
    token: str


@dataclass
class Screen:
    """One rendered interaction unit: text plus selectable options."""

    text: str
    options: list[Option] = field(default_factory=list)
    markdown: bool = False
    columns: int = 2
    # Number of entries the text lists; used when the text must be summarized.
    item_count: int | None = None
    screen_id: str | None = None

    def keyboard_rows(self) -> list[list[Option]]:
        width = max(1, self.columns)
        return [self.options[i:i + width] for i in range(0, len(self.options), width)]


def make_option(label: str, token: str) -> Option:
    """Build an option, raising OptionTooLargeError if the token can't be sent."""
    return Option(label=label, token=ensure_token_fits(token))


def truncate_label(text: str, limit: int = MAX_LABEL_CHARS) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS


def quoted(text: str | None) -> str:
    return truncate_label(str(text or ""), MAX_QUOTED_CHARS)


def md(text: str) -> str:
    """Escape text for Telegram MarkdownV2, inside or outside an entity."""
    return escape_markdown(str(text), version=2)


def format_row(value: str, row: dict[str, str]) -> str:
    lines = [ROW_FOUND_TEXT.format(value=md(quoted(value))), ""]
    lines.extend(f"*{md(header)}:* {md(cell)}" for header, cell in row.items())
    return "\n".join(lines)


def ensure_message_fits(text: str, limit: int = MAX_MESSAGE_CHARS) -> str:
    if len(text) > limit:
        raise OutputTooLargeError(len(text), limit)
    return text


def summarize_oversized(screen: Screen) -> Screen:
    """Replace an oversized screen's text with a count of what it listed."""
    count = screen.item_count if screen.item_count is not None else len(screen.options)
    return Screen(
        text=OUTPUT_TOO_LARGE_TEXT.format(count=count),
        options=list(screen.options),
        markdown=False,
        columns=screen.columns,
        item_count=screen.item_count,
        screen_id=screen.screen_id,
    )

"""Turn incoming actions into screen requests."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .state import NavigationContext
from .tokens import decode_token

COMMANDS = {
    "start": "welcome",
    "columns": "column_list",
    "refresh": "refresh",
}


class InputKind(str, Enum):
    COMMAND = "command"
    COLUMN_NAME_GUESS = "column_name_guess"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class UserInput:
    kind: InputKind
    payload: str = ""


@dataclass(frozen=True)
class ScreenRequest:
    screen_id: str
    context: NavigationContext


def classify_text(text: str | None) -> UserInput:
    """Classify free text from a message.

    - `/start`, `/columns@MyBot` ... -> COMMAND with the bare command name
    - any other `/something` or blank text -> UNRECOGNIZED
    - everything else -> COLUMN_NAME_GUESS with the trimmed text
    """
    s = str(text or "").strip()
    if not s:
        return UserInput(InputKind.UNRECOGNIZED)
    if s.startswith("/"):
        name = s[1:].split(maxsplit=1)[0] if len(s) > 1 else ""
        name = name.split("@", 1)[0].lower()
        if name in COMMANDS:
            return UserInput(InputKind.COMMAND, name)
        return UserInput(InputKind.UNRECOGNIZED, s)
    return UserInput(InputKind.COLUMN_NAME_GUESS, s)


class Navigator:
    """Map user input to the screen that answers it.

    States and the screens that render them:
    - Idle: "welcome", "unrecognized"
    - ColumnList: "column_list", "refresh"
    - ValueList: "value_list"
    - RowDetail: "row_detail"

    RowDetail goes back to ColumnList through its "back" option; ValueList
    has no way back besides the /columns command.
    """

    SCREEN_LABELS = {
        "welcome": "Idle",
        "unrecognized": "Idle",
        "column_list": "ColumnList",
        "refresh": "ColumnList",
        "value_list": "ValueList",
        "row_detail": "RowDetail",
    }

    def for_command(self, name: str, chat_id: int | None = None) -> ScreenRequest:
        screen_id = COMMANDS.get(name.lower(), "unrecognized")
        return ScreenRequest(screen_id, NavigationContext(chat_id=chat_id))

    def for_text(self, text: str | None, chat_id: int | None = None) -> ScreenRequest:
        user_input = classify_text(text)
        ctx = NavigationContext(chat_id=chat_id)
        if user_input.kind is InputKind.COMMAND:
            return self.for_command(user_input.payload, chat_id=chat_id)
        if user_input.kind is InputKind.COLUMN_NAME_GUESS:
            ctx.remember(column=user_input.payload)
            return ScreenRequest("value_list", ctx)
        return ScreenRequest("unrecognized", ctx)

    def for_callback(self, data: str | None, chat_id: int | None = None) -> ScreenRequest | None:
        decoded = decode_token(str(data or ""))
        if decoded is None:
            return None
        ctx = NavigationContext(column=decoded.column, value=decoded.value, chat_id=chat_id)
        if decoded.kind == "back":
            return ScreenRequest("column_list", ctx)
        if decoded.kind == "column":
            return ScreenRequest("value_list", ctx)
        return ScreenRequest("row_detail", ctx)

    def state_of(self, screen_id: str) -> str:
        return self.SCREEN_LABELS.get(screen_id, screen_id)

"""Unit tests for input classification and request resolution."""
from __future__ import annotations

import pytest

from sheet_bot.chat.navigator import InputKind, Navigator, UserInput, classify_text
from sheet_bot.chat.tokens import BACK_TO_COLUMNS, column_token, value_token


@pytest.mark.parametrize(
    "text, expected",
    [
        ("/start", UserInput(InputKind.COMMAND, "start")),
        ("/columns", UserInput(InputKind.COMMAND, "columns")),
        ("/Columns@SheetBot extra", UserInput(InputKind.COMMAND, "columns")),
        ("/refresh", UserInput(InputKind.COMMAND, "refresh")),
        ("/help", UserInput(InputKind.UNRECOGNIZED, "/help")),
        ("/", UserInput(InputKind.UNRECOGNIZED, "/")),
        ("   ", UserInput(InputKind.UNRECOGNIZED)),
        (None, UserInput(InputKind.UNRECOGNIZED)),
        ("  City ", UserInput(InputKind.COLUMN_NAME_GUESS, "City")),
    ],
)
def test_classify_text(text, expected):
    assert classify_text(text) == expected


def test_commands_map_to_screens():
    nav = Navigator()
    assert nav.for_command("start").screen_id == "welcome"
    assert nav.for_command("columns").screen_id == "column_list"
    assert nav.for_command("refresh").screen_id == "refresh"
    assert nav.for_command("nope").screen_id == "unrecognized"


def test_free_text_is_a_column_guess():
    req = Navigator().for_text("City", chat_id=7)
    assert req.screen_id == "value_list"
    assert req.context.column == "City"
    assert req.context.chat_id == 7


def test_free_text_command_and_unknown():
    nav = Navigator()
    assert nav.for_text("/columns").screen_id == "column_list"
    assert nav.for_text("/whatever").screen_id == "unrecognized"


def test_callbacks_resolve_to_screens():
    nav = Navigator()

    req = nav.for_callback(column_token("City"))
    assert (req.screen_id, req.context.column, req.context.value) == ("value_list", "City", None)

    req = nav.for_callback(value_token("City", "New_York"))
    assert (req.screen_id, req.context.column, req.context.value) == ("row_detail", "City", "New_York")

    req = nav.for_callback(BACK_TO_COLUMNS)
    assert (req.screen_id, req.context.column) == ("column_list", None)

    assert nav.for_callback("garbage") is None
    assert nav.for_callback(None) is None


def test_state_labels():
    nav = Navigator()
    assert nav.state_of("welcome") == "Idle"
    assert nav.state_of("column_list") == "ColumnList"
    assert nav.state_of("value_list") == "ValueList"
    assert nav.state_of("row_detail") == "RowDetail"
    assert nav.state_of("other") == "other"

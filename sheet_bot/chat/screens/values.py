"""Value list screen: unique values of one column."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...errors import OptionTooLargeError
from ..components import (
    NO_BUTTONS_TEXT,
    NO_FILLED_CELLS_TEXT,
    VALUE_PROMPT_TEXT,
    Option,
    Screen,
    make_option,
    quoted,
    truncate_label,
)
from ..router import register_screen
from ..tokens import value_token

if TYPE_CHECKING:
    from ..router import Router
    from ..state import NavigationContext

logger = logging.getLogger(__name__)


def value_options(column: str, values: list[str]) -> list[Option]:
    """One option per value; values whose token is too long are skipped.

    The label is truncated for display but the token always carries the
    full value.
    """
    options: list[Option] = []
    for value in values:
        try:
            options.append(make_option(truncate_label(value), value_token(column, value)))
        except OptionTooLargeError as e:
            logger.warning(
                "Callback data for value %r in column %r is too long (%d bytes). Skipping button.",
                value,
                column,
                e.size,
            )
    return options


@register_screen("value_list")
async def show_value_list(router: Router, ctx: NavigationContext) -> Screen:
    column = ctx.column or ""
    values = await router.call(router.repo.get_unique_values, column)
    if not values:
        return Screen(text=NO_FILLED_CELLS_TEXT.format(column=quoted(column)))

    options = value_options(column, values)
    if not options:
        return Screen(text=NO_BUTTONS_TEXT, item_count=len(values))
    return Screen(
        text=VALUE_PROMPT_TEXT.format(column=quoted(column)),
        options=options,
        columns=router.keyboard_columns,
        item_count=len(values),
    )

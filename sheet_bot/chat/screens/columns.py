"""Column list screen."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...errors import OptionTooLargeError
from ..components import (
    COLUMN_PROMPT_TEXT,
    NO_COLUMNS_TEXT,
    REFRESHED_PROMPT_TEXT,
    Option,
    Screen,
    make_option,
)
from ..router import register_screen
from ..tokens import column_token

if TYPE_CHECKING:
    from ..router import Router
    from ..state import NavigationContext

logger = logging.getLogger(__name__)


def column_options(headers: list[str]) -> list[Option]:
    options: list[Option] = []
    for header in headers:
        try:
            options.append(make_option(header, column_token(header)))
        except OptionTooLargeError as e:
            logger.warning("Skipping column %r: token is %d bytes", header, e.size)
    return options


def render_column_list(router: Router, headers: list[str], prompt: str) -> Screen:
    if not headers:
        return Screen(text=NO_COLUMNS_TEXT)
    return Screen(
        text=prompt,
        options=column_options(headers),
        columns=router.keyboard_columns,
        item_count=len(headers),
    )


@register_screen("column_list")
async def show_column_list(router: Router, ctx: NavigationContext) -> Screen:
    """List every header as a button.

    Also the target of the "back" option on the row detail screen.
    """
    headers = await router.call(router.repo.get_headers)
    return render_column_list(router, headers, COLUMN_PROMPT_TEXT)


@register_screen("refresh")
async def show_refreshed_column_list(router: Router, ctx: NavigationContext) -> Screen:
    headers = await router.call(router.repo.reload)
    logger.info("Header cache reloaded: %d column(s) (%s)", len(headers), ctx.describe())
    return render_column_list(router, headers, REFRESHED_PROMPT_TEXT)

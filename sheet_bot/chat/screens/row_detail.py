"""Row detail screen."""
from __future__ import annotations

from typing import TYPE_CHECKING

from ..components import BACK_LABEL, ROW_NOT_FOUND_TEXT, Screen, format_row, make_option, quoted
from ..router import register_screen
from ..tokens import BACK_TO_COLUMNS

if TYPE_CHECKING:
    from ..router import Router
    from ..state import NavigationContext


@register_screen("row_detail")
async def show_row_detail(router: Router, ctx: NavigationContext) -> Screen:
    column = ctx.column or ""
    value = ctx.value or ""
    row = await router.call(router.repo.find_row, column, value)
    if row is None:
        return Screen(text=ROW_NOT_FOUND_TEXT.format(value=quoted(value)))
    return Screen(
        text=format_row(value, row),
        options=[make_option(BACK_LABEL, BACK_TO_COLUMNS)],
        markdown=True,
        columns=1,
        item_count=len(row),
    )

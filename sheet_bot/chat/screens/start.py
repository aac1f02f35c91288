"""Welcome and fallback screens. No sheet access."""
from __future__ import annotations

from typing import TYPE_CHECKING

from ..components import UNRECOGNIZED_TEXT, WELCOME_TEXT, Screen
from ..router import register_screen

if TYPE_CHECKING:
    from ..router import Router
    from ..state import NavigationContext


@register_screen("welcome")
async def show_welcome(router: Router, ctx: NavigationContext) -> Screen:
    return Screen(text=WELCOME_TEXT)


@register_screen("unrecognized")
async def show_unrecognized(router: Router, ctx: NavigationContext) -> Screen:
    return Screen(text=UNRECOGNIZED_TEXT)

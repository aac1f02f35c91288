"""Screen registry and the transition function for the chat."""
from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from ..errors import ColumnNotFoundError, OutputTooLargeError, SourceUnavailableError
from .components import (
    ACCESS_ERROR_TEXT,
    COLUMN_NOT_FOUND_TEXT,
    INTERNAL_ERROR_TEXT,
    LOADING_COLUMNS_TEXT,
    LOADING_ROW_TEXT,
    LOADING_VALUES_TEXT,
    Screen,
    ensure_message_fits,
    quoted,
    summarize_oversized,
)
from .navigator import Navigator, ScreenRequest
from .state import NavigationContext

if TYPE_CHECKING:
    from ..repositories import SheetRepository

logger = logging.getLogger(__name__)

ScreenFn = Callable[["Router", NavigationContext], Awaitable[Screen]]


class Router:
    """Dispatch screen requests to registered screen functions.

    Every recoverable failure is turned into a readable screen here, so a
    single interaction can never take the bot down.
    """

    def __init__(
        self,
        repo: SheetRepository,
        nav: Navigator | None = None,
        *,
        keyboard_columns: int = 2,
    ):
        """Initialize router with dependencies.

        Args:
            repo: Spreadsheet repository shared by all interactions
            nav: Navigator used to resolve incoming actions
            keyboard_columns: Buttons per keyboard row
        """
        self.repo = repo
        self.nav = nav or Navigator()
        self.keyboard_columns = keyboard_columns

    async def call(self, fn: Callable[..., Any], *args: Any) -> Any:
        """Run a blocking repository call without stalling the event loop."""
        return await asyncio.to_thread(fn, *args)

    async def show(self, screen_id: str, ctx: NavigationContext | None = None) -> Screen:
        ctx = ctx or NavigationContext()
        screen_fn = SCREENS.get(screen_id)
        if screen_fn is None:
            logger.warning("Unknown screen %r (%s)", screen_id, ctx.describe())
            screen_id = "unrecognized"
            screen_fn = SCREENS[screen_id]

        try:
            screen = await screen_fn(self, ctx)
        except SourceUnavailableError as e:
            logger.error("Spreadsheet unavailable on %s (%s): %s", screen_id, ctx.describe(), e)
            screen = Screen(text=ACCESS_ERROR_TEXT, screen_id="error")
        except ColumnNotFoundError as e:
            logger.info("Unknown column on %s (%s)", screen_id, ctx.describe())
            screen = Screen(text=COLUMN_NOT_FOUND_TEXT.format(column=quoted(e.column)), screen_id="error")
        except Exception:
            logger.exception("Screen %s failed (%s)", screen_id, ctx.describe())
            screen = Screen(text=INTERNAL_ERROR_TEXT, screen_id="error")

        # Every screen, error notices included, must fit in one message.
        screen.screen_id = screen.screen_id or screen_id
        try:
            ensure_message_fits(screen.text)
        except OutputTooLargeError as e:
            logger.warning(
                "Screen %s too large (%s): %d > %d chars, sending a summary",
                screen_id,
                ctx.describe(),
                e.length,
                e.limit,
            )
            screen = summarize_oversized(screen)
        return screen

    async def handle(self, request: ScreenRequest) -> Screen:
        logger.debug(
            "-> %s [%s] (%s)",
            request.screen_id,
            self.nav.state_of(request.screen_id),
            request.context.describe(),
        )
        return await self.show(request.screen_id, request.context)

    @staticmethod
    def loading_text(request: ScreenRequest) -> str | None:
        """Interim text shown while a screen that reads the sheet loads."""
        ctx = request.context
        if request.screen_id in {"column_list", "refresh"}:
            return LOADING_COLUMNS_TEXT
        if request.screen_id == "value_list":
            return LOADING_VALUES_TEXT.format(column=quoted(ctx.column))
        if request.screen_id == "row_detail":
            return LOADING_ROW_TEXT.format(value=quoted(ctx.value))
        return None


# Screen registry - maps screen IDs to handler coroutines.
# Populated by the modules in `screens`.
SCREENS: dict[str, ScreenFn] = {}


def register_screen(screen_id: str):
    """Decorator to register a screen function.

    Usage:
        @register_screen("column_list")
        async def show_column_list(router: Router, ctx: NavigationContext) -> Screen:
            ...
    """
    def decorator(fn: ScreenFn):
        SCREENS[screen_id] = fn
        return fn
    return decorator

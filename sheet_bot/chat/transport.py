"""python-telegram-bot glue: handlers and Screen rendering."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.constants import ParseMode
from telegram.error import TelegramError
from telegram.ext import (
    Application,
    ApplicationBuilder,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from ..repositories import SheetRepository
from ..sources import GoogleSheetSource
from .components import INTERNAL_ERROR_TEXT, Screen
from .navigator import COMMANDS, Navigator, ScreenRequest
from .router import Router

if TYPE_CHECKING:
    from telegram import Chat, Message

    from ..settings import Settings

logger = logging.getLogger(__name__)

ROUTER_KEY = "router"


def reply_markup_for(screen: Screen) -> InlineKeyboardMarkup | None:
    if not screen.options:
        return None
    return InlineKeyboardMarkup(
        [
            [InlineKeyboardButton(opt.label, callback_data=opt.token) for opt in row]
            for row in screen.keyboard_rows()
        ]
    )


def _parse_mode(screen: Screen) -> str | None:
    return ParseMode.MARKDOWN_V2 if screen.markdown else None


async def send_screen(chat: Chat, screen: Screen) -> None:
    await chat.send_message(
        screen.text,
        parse_mode=_parse_mode(screen),
        reply_markup=reply_markup_for(screen),
    )


async def edit_screen(message: Message, screen: Screen) -> None:
    await message.edit_text(
        screen.text,
        parse_mode=_parse_mode(screen),
        reply_markup=reply_markup_for(screen),
    )


def _router(context: ContextTypes.DEFAULT_TYPE) -> Router:
    return context.application.bot_data[ROUTER_KEY]


def _chat_id(update: Update) -> int | None:
    chat = update.effective_chat
    return chat.id if chat is not None else None


async def _answer_in_chat(chat: Chat, router: Router, request: ScreenRequest) -> None:
    """Send an interim loading message (if any), then the screen as a new message."""
    loading = router.loading_text(request)
    if loading:
        await chat.send_message(loading)
    screen = await router.handle(request)
    await send_screen(chat, screen)


def command_handler(name: str):
    async def _handle(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        chat = update.effective_chat
        if chat is None:
            return
        router = _router(context)
        await _answer_in_chat(chat, router, router.nav.for_command(name, chat_id=chat.id))

    _handle.__name__ = f"{name}_command"
    return _handle


async def on_text(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Free text and unknown commands."""
    message = update.effective_message
    chat = update.effective_chat
    if message is None or chat is None:
        return
    router = _router(context)
    await _answer_in_chat(chat, router, router.nav.for_text(message.text, chat_id=chat.id))


async def on_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    query = update.callback_query
    if query is None:
        return
    await query.answer()

    router = _router(context)
    request = router.nav.for_callback(query.data, chat_id=_chat_id(update))
    if request is None:
        logger.warning("Ignoring unknown callback data %r", query.data)
        return

    message = query.message
    chat = update.effective_chat
    if message is None or chat is None:
        return

    if request.screen_id == "column_list":
        # Back: drop the row detail and send the column list fresh.
        try:
            await message.delete()
        except TelegramError as e:
            logger.warning("Could not delete message %s: %s", message.message_id, e)
        await _answer_in_chat(chat, router, request)
        return

    loading = router.loading_text(request)
    if loading:
        await message.edit_text(loading)
    screen = await router.handle(request)
    await edit_screen(message, screen)


async def on_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    logger.error("Error while handling update %r", update, exc_info=context.error)
    if isinstance(update, Update) and update.effective_chat is not None:
        try:
            await update.effective_chat.send_message(INTERNAL_ERROR_TEXT)
        except TelegramError as e:
            logger.error("Could not send error notice: %s", e)


def create_router(settings: Settings, repo: SheetRepository | None = None) -> Router:
    repo = repo or SheetRepository(GoogleSheetSource.from_settings(settings))
    return Router(repo, Navigator(), keyboard_columns=settings.SHEET_BOT_KEYBOARD_COLUMNS)


def create_app(settings: Settings, router: Router | None = None) -> Application:
    """Build the Telegram application with every handler registered."""
    router = router or create_router(settings)
    application = (
        ApplicationBuilder()
        .token(str(settings.TELEGRAM_BOT_TOKEN))
        .concurrent_updates(settings.SHEET_BOT_CONCURRENT_UPDATES)
        .build()
    )
    application.bot_data[ROUTER_KEY] = router

    for name in COMMANDS:
        application.add_handler(CommandHandler(name, command_handler(name)))
    application.add_handler(CallbackQueryHandler(on_callback))
    application.add_handler(MessageHandler(filters.TEXT, on_text))
    application.add_error_handler(on_error)
    return application

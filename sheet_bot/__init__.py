"""Telegram bot for browsing a Google Spreadsheet through inline buttons."""

__version__ = "0.1.0"

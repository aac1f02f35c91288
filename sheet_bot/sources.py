"""Remote tabular sources read by the repository.

A source returns the raw cell grid of one worksheet: the first row holds the
headers, every following row holds data. Everything else (header handling,
trimming, lookups) lives in `repositories`.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Protocol

import gspread
import requests
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account

from .errors import SourceUnavailableError
from .settings import Settings

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]
TOKEN_URI = "https://oauth2.googleapis.com/token"


class SheetSource(Protocol):
    name: str

    def fetch_values(self) -> list[list[str]]: ...


class MemorySource:
    """Source backed by an in-process grid (tests, CLI dry runs)."""

    name = "memory"

    def __init__(self, values: Sequence[Sequence[Any]] | None = None):
        self.values = [list(r) for r in (values or [])]
        self.fetch_count = 0

    @classmethod
    def from_records(cls, headers: Sequence[str], records: Sequence[dict[str, Any]]) -> MemorySource:
        grid: list[list[Any]] = [list(headers)]
        for rec in records:
            grid.append([rec.get(h, "") for h in headers])
        return cls(grid)

    def fetch_values(self) -> list[list[str]]:
        self.fetch_count += 1
        return [["" if c is None else str(c) for c in row] for row in self.values]


class GoogleSheetSource:
    """Read one worksheet of a Google Spreadsheet with a service account.

    The gspread client is built lazily on first fetch, so a bad private key
    surfaces as `SourceUnavailableError` during an interaction instead of at
    import time.
    """

    name = "google"

    def __init__(
        self,
        sheet_id: str,
        service_account_email: str,
        private_key: str,
        *,
        worksheet_index: int = 0,
    ):
        self.sheet_id = sheet_id
        self.service_account_email = service_account_email
        self.private_key = private_key
        self.worksheet_index = worksheet_index
        self._client: gspread.Client | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> GoogleSheetSource:
        return cls(
            sheet_id=str(settings.GOOGLE_SHEET_ID),
            service_account_email=str(settings.GOOGLE_SERVICE_ACCOUNT_EMAIL),
            private_key=str(settings.GOOGLE_PRIVATE_KEY),
            worksheet_index=settings.SHEET_BOT_WORKSHEET_INDEX,
        )

    def _build_creds(self) -> service_account.Credentials:
        info = {
            "type": "service_account",
            "client_email": self.service_account_email,
            "private_key": self.private_key,
            "token_uri": TOKEN_URI,
        }
        return service_account.Credentials.from_service_account_info(info, scopes=SCOPES)

    def _get_client(self) -> gspread.Client:
        if self._client is None:
            self._client = gspread.authorize(self._build_creds())
        return self._client

    def fetch_values(self) -> list[list[str]]:
        try:
            spreadsheet = self._get_client().open_by_key(self.sheet_id)
            worksheet = spreadsheet.get_worksheet(self.worksheet_index)
            if worksheet is None:
                raise gspread.exceptions.WorksheetNotFound(str(self.worksheet_index))
            values = worksheet.get_all_values()
        except (
            gspread.exceptions.GSpreadException,
            GoogleAuthError,
            requests.exceptions.RequestException,
            ValueError,
        ) as exc:
            logger.warning(
                "Spreadsheet %s (worksheet %s) unavailable: %s",
                self.sheet_id,
                self.worksheet_index,
                exc,
            )
            raise SourceUnavailableError(str(exc) or exc.__class__.__name__) from exc
        logger.debug("Fetched %d row(s) from spreadsheet %s", len(values), self.sheet_id)
        return values

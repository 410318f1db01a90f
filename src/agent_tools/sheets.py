"""Google Sheets row appender authenticated with a service account."""

from __future__ import annotations

import asyncio
import base64
import binascii
import json
import logging
import threading
from collections.abc import Mapping, Sequence
from typing import Any

from google.oauth2 import service_account
from googleapiclient.discovery import build

from agent_tools.errors import ConfigurationError, CredentialsError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

SHEET_COLUMNS: tuple[str, ...] = (
    "Album Title",
    "Album URL",
    "Image 1",
    "Image 2",
    "Image 3",
    "Image 4",
    "Image 5",
    "Image 6",
    "Image 7",
    "Image 8",
)

# Columns A..J, one per entry in SHEET_COLUMNS
SHEET_COLUMN_RANGE = "A:J"


def cell_value(value: Any) -> str:
    """Render one cell as text: null is empty, lists and objects become JSON."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def build_row(row: Mapping[str, Any]) -> list[str]:
    """Map a row object onto the fixed column order.

    Missing or null values become empty strings; keys outside the schema
    are ignored.
    """
    return [cell_value(row.get(column)) for column in SHEET_COLUMNS]


def decode_service_account(encoded: str) -> dict[str, Any]:
    """Decode a base64-encoded service-account JSON document.

    Args:
        encoded: Base64 text of the service-account key file

    Returns:
        The parsed service-account info

    Raises:
        CredentialsError: If the value is not valid base64 or not a JSON object
    """
    try:
        raw = base64.b64decode(encoded.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise CredentialsError(f"GSA_BASE64 is not valid base64: {e}") from e

    try:
        info = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CredentialsError(f"GSA_BASE64 does not decode to JSON: {e}") from e

    if not isinstance(info, dict):
        raise CredentialsError("GSA_BASE64 does not decode to a JSON object")

    return info


class SheetsAppender:
    """Append rows to one tab of a spreadsheet.

    The API client is created on the first append and reused afterwards. If
    creating it fails, the next append tries again.
    """

    def __init__(self, sheet_id: str | None, sheet_name: str = "Sheet1", credentials_b64: str | None = None) -> None:
        self.sheet_id = sheet_id
        self.sheet_name = sheet_name
        self.credentials_b64 = credentials_b64

        self._service: Any = None
        self._lock = threading.Lock()

    @property
    def range(self) -> str:
        return f"{self.sheet_name}!{SHEET_COLUMN_RANGE}"

    def _build_service(self) -> Any:
        if not self.credentials_b64:
            raise ConfigurationError("GSA_BASE64 is not configured")

        info = decode_service_account(self.credentials_b64)
        try:
            credentials = service_account.Credentials.from_service_account_info(info, scopes=SCOPES)
        except (KeyError, ValueError) as e:
            raise CredentialsError(f"Invalid service account credentials: {e}") from e

        logger.info(f"Initialized Google Sheets client for {info.get('client_email', 'service account')}")
        return build("sheets", "v4", credentials=credentials, cache_discovery=False)

    def get_service(self) -> Any:
        """Return the Sheets API client, creating it on first use."""
        with self._lock:
            if self._service is None:
                self._service = self._build_service()
            return self._service

    def append_values(self, values: list[list[str]]) -> dict[str, Any]:
        """Append already-ordered row values in a single API call.

        The sheet and the credential are checked even for an empty batch;
        only the API request is skipped when there is nothing to write.
        """
        if not self.sheet_id:
            raise ConfigurationError("SHEET_ID is not configured")

        service = self.get_service()
        if not values:
            return {}

        return (
            service.spreadsheets()
            .values()
            .append(
                spreadsheetId=self.sheet_id,
                range=self.range,
                valueInputOption="USER_ENTERED",
                insertDataOption="INSERT_ROWS",
                body={"values": values},
            )
            .execute()
        )

    async def append_rows(self, rows: Sequence[Mapping[str, Any]]) -> int:
        """Append row objects to the sheet.

        Args:
            rows: Row objects keyed by column name, appended in order

        Returns:
            Number of rows appended

        Raises:
            ConfigurationError: If the sheet or the credential is not configured
            CredentialsError: If the credential cannot be decoded
            googleapiclient.errors.HttpError: If the API rejects the append
        """
        values = [build_row(row) for row in rows]

        # googleapiclient is blocking, run it in the thread pool
        loop = asyncio.get_event_loop()
        await loop.run_in_executor(None, lambda: self.append_values(values))

        logger.debug(f"Appended {len(values)} row(s) to {self.range}")
        return len(values)

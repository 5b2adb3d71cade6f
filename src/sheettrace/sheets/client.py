"""Google Sheets API client."""

import logging
from typing import Any

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..config import settings
from ..trace.models import CellRef
from .models import FormulaGrid, NoteUpdate, UpdateResult

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


def _formula_text(value: Any) -> str:
    """Keep formula strings, blank everything else (plain values, numbers)."""
    if isinstance(value, str) and value.startswith("="):
        return value
    return ""


class GoogleSheetsClient:
    """Client for interacting with Google Sheets API."""

    def __init__(self):
        self._service = None
        self._credentials = None

    def _get_credentials(self) -> Credentials:
        """Get or refresh OAuth2 credentials."""
        creds = None

        if settings.google_token_path.exists():
            creds = Credentials.from_authorized_user_file(str(settings.google_token_path), SCOPES)

        if not creds or not creds.valid:
            if creds and creds.expired and creds.refresh_token:
                creds.refresh(Request())
            else:
                if not settings.google_credentials_path.exists():
                    raise FileNotFoundError(
                        f"Google credentials file not found at {settings.google_credentials_path}. "
                        "Please download it from Google Cloud Console."
                    )
                flow = InstalledAppFlow.from_client_secrets_file(
                    str(settings.google_credentials_path), SCOPES
                )
                creds = flow.run_local_server(port=0)

            # Save credentials for next run
            settings.google_token_path.parent.mkdir(parents=True, exist_ok=True)
            with open(settings.google_token_path, "w") as token:
                token.write(creds.to_json())

        return creds

    @property
    def service(self):
        """Get or create the Sheets API service."""
        if self._service is None:
            self._credentials = self._get_credentials()
            self._service = build("sheets", "v4", credentials=self._credentials)
        return self._service

    def get_spreadsheet_info(self, spreadsheet_id: str) -> dict:
        """Get basic information about a spreadsheet."""
        try:
            result = self.service.spreadsheets().get(spreadsheetId=spreadsheet_id).execute()
            return {
                "id": result["spreadsheetId"],
                "title": result["properties"]["title"],
                "sheets": [
                    {
                        "id": sheet["properties"]["sheetId"],
                        "title": sheet["properties"]["title"],
                        "row_count": sheet["properties"]["gridProperties"]["rowCount"],
                        "col_count": sheet["properties"]["gridProperties"]["columnCount"],
                    }
                    for sheet in result.get("sheets", [])
                ],
            }
        except HttpError as e:
            raise RuntimeError(f"Failed to get spreadsheet info: {e}")

    def get_sheet_id(self, spreadsheet_id: str, sheet_name: str) -> int:
        """Look up the numeric sheet id for a sheet title."""
        info = self.get_spreadsheet_info(spreadsheet_id)
        for sheet in info["sheets"]:
            if sheet["title"] == sheet_name:
                return sheet["id"]
        raise ValueError(f"Sheet '{sheet_name}' not found in spreadsheet {spreadsheet_id}")

    def read_formula_grid(self, spreadsheet_id: str, sheet_name: str) -> FormulaGrid:
        """
        Read the formulas of a sheet's data range, starting at A1.

        Trailing empty cells are omitted by the API, so rows may be ragged.
        """
        # Quotes inside a sheet name are doubled in A1 notation
        escaped_name = sheet_name.replace("'", "''")
        range_notation = f"'{escaped_name}'"
        try:
            result = (
                self.service.spreadsheets()
                .values()
                .get(
                    spreadsheetId=spreadsheet_id,
                    range=range_notation,
                    valueRenderOption="FORMULA",
                )
                .execute()
            )
        except HttpError as e:
            raise RuntimeError(f"Failed to read formulas from '{sheet_name}': {e}")

        formulas = [
            [_formula_text(value) for value in row]
            for row in result.get("values", [])
        ]
        grid = FormulaGrid(
            spreadsheet_id=spreadsheet_id,
            sheet_name=sheet_name,
            range_notation=range_notation,
            formulas=formulas,
        )

        logger.info(
            f"Read sheet '{sheet_name}' - dimensions: "
            f"{grid.row_count}x{grid.col_count}, {grid.formula_count} formulas"
        )
        return grid

    def set_note(
        self,
        spreadsheet_id: str,
        sheet_name: str,
        cell: str,
        note: str,
    ) -> UpdateResult:
        """Replace the note attached to a single cell."""
        update = NoteUpdate(sheet_name=sheet_name, cell=cell, note=note)
        ref = CellRef.parse(cell)

        try:
            sheet_id = self.get_sheet_id(spreadsheet_id, sheet_name)
        except (RuntimeError, ValueError) as e:
            return UpdateResult(
                success=False,
                spreadsheet_id=spreadsheet_id,
                errors=[str(e)],
            )

        body = {
            "requests": [
                {
                    "updateCells": {
                        "range": {
                            "sheetId": sheet_id,
                            "startRowIndex": ref.row_index,
                            "endRowIndex": ref.row_index + 1,
                            "startColumnIndex": ref.col_index,
                            "endColumnIndex": ref.col_index + 1,
                        },
                        "rows": [{"values": [{"note": update.note}]}],
                        "fields": "note",
                    }
                }
            ]
        }

        try:
            self.service.spreadsheets().batchUpdate(
                spreadsheetId=spreadsheet_id, body=body
            ).execute()
        except HttpError as e:
            return UpdateResult(
                success=False,
                spreadsheet_id=spreadsheet_id,
                errors=[str(e)],
            )

        logger.debug(f"Set note on {update.range_notation}: {note}")
        return UpdateResult(
            success=True,
            spreadsheet_id=spreadsheet_id,
            updated_cells=1,
            details=[{"range": update.range_notation, "note": update.note}],
        )

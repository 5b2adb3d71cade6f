"""Google Sheets API integration."""

from .client import GoogleSheetsClient
from .models import FormulaGrid, NoteUpdate, UpdateResult

__all__ = [
    "GoogleSheetsClient",
    "FormulaGrid",
    "NoteUpdate",
    "UpdateResult",
]

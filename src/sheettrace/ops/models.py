"""Data models for trace operations."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TraceReport(BaseModel):
    """Outcome of tracing the dependents of one cell in a live sheet."""

    spreadsheet_id: str
    sheet_name: str
    target: str  # A1 notation
    dependents: list[str] = Field(default_factory=list)
    note: str
    annotated: bool = False  # True once the note was written to the target cell
    errors: list[str] = Field(default_factory=list)
    execution_time_ms: float = 0.0
    traced_at: datetime = Field(default_factory=_utc_now)

    @property
    def count(self) -> int:
        return len(self.dependents)

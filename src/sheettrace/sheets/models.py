"""Data models for Google Sheets operations."""

from pydantic import BaseModel, Field


class FormulaGrid(BaseModel):
    """Formula text of a sheet's data range, "" where a cell has no formula."""

    spreadsheet_id: str
    sheet_name: str
    range_notation: str  # e.g., "'Sheet1'"
    formulas: list[list[str]] = Field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.formulas)

    @property
    def col_count(self) -> int:
        return max((len(row) for row in self.formulas), default=0)

    @property
    def formula_count(self) -> int:
        return sum(1 for row in self.formulas for formula in row if formula)


class NoteUpdate(BaseModel):
    """Represents a note written to a single cell."""

    sheet_name: str
    cell: str  # A1 notation
    note: str

    @property
    def range_notation(self) -> str:
        return f"{self.sheet_name}!{self.cell}"


class UpdateResult(BaseModel):
    """Result of applying updates."""

    success: bool
    spreadsheet_id: str
    updated_cells: int = 0
    errors: list[str] = Field(default_factory=list)
    details: list[dict] = Field(default_factory=list)

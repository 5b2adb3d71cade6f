"""Data models for dependent tracing."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .references import col_letter_to_index, index_to_col_letter, split_cell_notation

NOTE_PREFIX = "Dependents: "


class InvalidReferenceError(ValueError):
    """Raised when a cell reference cannot be split into column letters and a row number."""

    def __init__(
        self,
        reference: Any,
        reason: str = "expected column letters followed by a row number",
    ):
        self.reference = reference
        super().__init__(f"Invalid cell reference {reference!r}: {reason}")


class MalformedGridError(ValueError):
    """Raised when a grid is not rows of formula text."""

    def __init__(self, message: str, row: Optional[int] = None, col: Optional[int] = None):
        self.row = row  # 0-based
        self.col = col  # 0-based
        super().__init__(message)


class CellRef(BaseModel):
    """A single cell address. Column and row are 1-based."""

    model_config = ConfigDict(frozen=True)

    col: int = Field(ge=1)
    row: int = Field(ge=1)

    @classmethod
    def parse(cls, reference: Any) -> "CellRef":
        """Parse A1 notation ("B7", "ab12") into a CellRef."""
        if isinstance(reference, CellRef):
            return reference
        if not isinstance(reference, str):
            raise InvalidReferenceError(reference, "reference must be a string")

        try:
            letters, row = split_cell_notation(reference)
        except ValueError:
            raise InvalidReferenceError(reference) from None

        if row < 1:
            raise InvalidReferenceError(reference, "row numbers start at 1")

        return cls(col=col_letter_to_index(letters) + 1, row=row)

    @classmethod
    def from_indices(cls, row_index: int, col_index: int) -> "CellRef":
        """Build a CellRef from 0-based grid coordinates."""
        return cls(col=col_index + 1, row=row_index + 1)

    @property
    def column_letters(self) -> str:
        return index_to_col_letter(self.col - 1)

    @property
    def a1(self) -> str:
        """Canonical A1 notation, e.g. col=28, row=3 -> "AB3"."""
        return f"{self.column_letters}{self.row}"

    @property
    def row_index(self) -> int:
        return self.row - 1

    @property
    def col_index(self) -> int:
        return self.col - 1

    def __str__(self) -> str:
        return self.a1


class DependentResult(BaseModel):
    """Cells whose formulas reference a target cell, in row-major scan order."""

    target: CellRef
    dependents: list[CellRef] = Field(default_factory=list)

    @property
    def references(self) -> list[str]:
        return [ref.a1 for ref in self.dependents]

    @property
    def count(self) -> int:
        return len(self.dependents)

    @property
    def is_empty(self) -> bool:
        return not self.dependents

    def format_note(self) -> str:
        """Render the note text attached to the target cell."""
        if self.is_empty:
            return f"{NOTE_PREFIX}None"
        return NOTE_PREFIX + ", ".join(self.references)

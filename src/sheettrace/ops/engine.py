"""Trace operations engine."""

import logging
import time
from typing import Optional, Union

from ..config import settings
from ..sheets import GoogleSheetsClient
from ..trace import CellRef, DependentResult, DependentTracer
from ..trace.tracer import Grid
from .models import TraceReport

logger = logging.getLogger(__name__)


class DependentTraceEngine:
    """
    Engine for tracing cell dependents.

    Grids can be traced directly, or read from a Google Sheet with the
    result written back as a note on the traced cell.
    """

    def __init__(
        self,
        sheets_client: Optional[GoogleSheetsClient] = None,
        case_sensitive: Optional[bool] = None,
    ):
        """
        Initialize the trace engine.

        Args:
            sheets_client: Google Sheets client (created if not provided)
            case_sensitive: Reference matching mode (defaults to settings)
        """
        self.sheets_client = sheets_client or GoogleSheetsClient()
        if case_sensitive is None:
            case_sensitive = settings.reference_case_sensitive
        self.tracer = DependentTracer(case_sensitive=case_sensitive)

    def trace_grid(self, grid: Grid, target: Union[CellRef, str]) -> DependentResult:
        """Trace dependents in an in-memory grid. No I/O."""
        return self.tracer.trace(grid, target)

    def trace_sheet(
        self,
        spreadsheet_id: str,
        sheet_name: str,
        cell: str,
        annotate: Optional[bool] = None,
    ) -> TraceReport:
        """
        Trace the dependents of a cell in a live sheet.

        Args:
            spreadsheet_id: The spreadsheet to read
            sheet_name: The sheet holding both the target and its dependents
            cell: Target cell in A1 notation
            annotate: Write the result as a note on the target (defaults to settings)

        Returns:
            TraceReport with dependents and the note text

        Raises:
            InvalidReferenceError: If cell is not a plain A1 reference
            RuntimeError: If the sheet cannot be read
        """
        if annotate is None:
            annotate = settings.annotate_target

        start_time = time.time()
        target = CellRef.parse(cell)

        logger.info(f"Tracing dependents of {sheet_name}!{target} in {spreadsheet_id}")

        grid = self.sheets_client.read_formula_grid(spreadsheet_id, sheet_name)
        result = self.tracer.trace(grid.formulas, target)
        note = result.format_note()

        annotated = False
        errors: list[str] = []
        if annotate:
            update = self.sheets_client.set_note(spreadsheet_id, sheet_name, target.a1, note)
            annotated = update.success
            errors.extend(update.errors)
            if not update.success:
                logger.warning(f"Failed to annotate {sheet_name}!{target}: {update.errors}")

        execution_time = (time.time() - start_time) * 1000  # Convert to ms

        logger.info(
            f"Trace completed: {result.count} dependents of {target} "
            f"({execution_time:.2f}ms)"
        )

        return TraceReport(
            spreadsheet_id=spreadsheet_id,
            sheet_name=sheet_name,
            target=target.a1,
            dependents=result.references,
            note=note,
            annotated=annotated,
            errors=errors,
            execution_time_ms=execution_time,
        )

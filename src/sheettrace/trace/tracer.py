"""Dependent tracing over a grid of formula text."""

import logging
from collections.abc import Iterator, Sequence
from typing import Any, Union

from .models import CellRef, DependentResult, MalformedGridError
from .references import reference_token_pattern

logger = logging.getLogger(__name__)

# Rows of formula text; "" or None for cells without a formula.
Grid = Sequence[Sequence[Any]]


def _is_row_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _iter_formulas(grid: Grid) -> Iterator[tuple[int, int, str]]:
    """Yield (row_index, col_index, formula) in row-major order, validating as it goes."""
    if not _is_row_sequence(grid):
        raise MalformedGridError(
            f"Grid must be a sequence of rows, got {type(grid).__name__}"
        )

    for row_idx, row in enumerate(grid):
        if not _is_row_sequence(row):
            raise MalformedGridError(
                f"Row {row_idx + 1} must be a sequence of cells, got {type(row).__name__}",
                row=row_idx,
            )
        for col_idx, formula in enumerate(row):
            if formula is None:
                continue
            if not isinstance(formula, str):
                cell = CellRef.from_indices(row_idx, col_idx)
                raise MalformedGridError(
                    f"Cell {cell} holds {type(formula).__name__}, expected formula text",
                    row=row_idx,
                    col=col_idx,
                )
            yield row_idx, col_idx, formula


def find_dependents(
    grid: Grid,
    target: Union[CellRef, str],
    case_sensitive: bool = True,
) -> DependentResult:
    """
    Find every cell whose formula references ``target`` as a whole token.

    Each matching cell is reported once, however many times its formula
    mentions the target. Ranges that merely contain the target (``A1:A10``
    for ``A5``) and absolute references (``$A$1``) are not matched.

    Args:
        grid: Rows of formula text; rows may differ in length
        target: The referenced cell, as a CellRef or A1 text
        case_sensitive: Whether "a1" in a formula counts as a reference to A1

    Returns:
        DependentResult with dependents in row-major scan order

    Raises:
        InvalidReferenceError: If target is not a plain A1 reference
        MalformedGridError: If a row or cell has the wrong shape
    """
    target_ref = CellRef.parse(target)
    pattern = reference_token_pattern(target_ref.a1, case_sensitive)

    dependents = [
        CellRef.from_indices(row_idx, col_idx)
        for row_idx, col_idx, formula in _iter_formulas(grid)
        if formula and pattern.search(formula)
    ]

    logger.debug(f"Found {len(dependents)} dependents of {target_ref}")
    return DependentResult(target=target_ref, dependents=dependents)


def trace_references(grid: Grid, target_ref: str) -> list[str]:
    """Return the A1 references of the cells that depend on ``target_ref``."""
    return find_dependents(grid, target_ref).references


class DependentTracer:
    """Stateless tracer bound to a case-sensitivity setting."""

    def __init__(self, case_sensitive: bool = True):
        self.case_sensitive = case_sensitive

    def trace(self, grid: Grid, target: Union[CellRef, str]) -> DependentResult:
        """Find the dependents of ``target`` in ``grid`` using this tracer's case mode."""
        return find_dependents(grid, target, case_sensitive=self.case_sensitive)

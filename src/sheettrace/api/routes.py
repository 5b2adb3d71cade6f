"""API routes for SheetTrace."""

from typing import Any, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ..ops import DependentTraceEngine, TraceReport
from ..trace import InvalidReferenceError, MalformedGridError, find_dependents

router = APIRouter()

# Global ops engine instance
_ops_engine: Optional[DependentTraceEngine] = None


def get_ops_engine() -> DependentTraceEngine:
    """Get the global ops engine instance."""
    global _ops_engine
    if _ops_engine is None:
        _ops_engine = DependentTraceEngine()
    return _ops_engine


class GridTraceRequest(BaseModel):
    """Request to trace dependents within a supplied grid."""

    grid: list[list[Any]] = Field(default_factory=list)
    target: str
    case_sensitive: Optional[bool] = None  # None means use the configured default


class GridTraceResponse(BaseModel):
    """Dependents found in a supplied grid."""

    target: str
    dependents: list[str]
    count: int
    note: str


class SheetTraceRequest(BaseModel):
    """Request to trace dependents of a cell in a Google Sheet."""

    spreadsheet_id: str
    sheet_name: str
    cell: str
    annotate: Optional[bool] = None


# Trace endpoints


@router.post("/trace", response_model=GridTraceResponse)
async def trace_grid(request: GridTraceRequest):
    """Find the cells in a grid whose formulas reference the target cell."""
    try:
        if request.case_sensitive is None:
            result = get_ops_engine().trace_grid(request.grid, request.target)
        else:
            result = find_dependents(
                request.grid, request.target, case_sensitive=request.case_sensitive
            )
    except (InvalidReferenceError, MalformedGridError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    return GridTraceResponse(
        target=result.target.a1,
        dependents=result.references,
        count=result.count,
        note=result.format_note(),
    )


@router.post("/sheets/trace", response_model=TraceReport)
async def trace_sheet(request: SheetTraceRequest):
    """Trace dependents of a cell in a sheet and optionally annotate it."""
    engine = get_ops_engine()
    try:
        return engine.trace_sheet(
            request.spreadsheet_id,
            request.sheet_name,
            request.cell,
            annotate=request.annotate,
        )
    except InvalidReferenceError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=400, detail=str(e))


# Health check


@router.get("/health")
async def health_check():
    """Health check endpoint with diagnostics."""
    from ..config import settings

    # Gather non-secret diagnostics
    config = {
        "google_credentials_configured": settings.google_credentials_path.exists(),
        "reference_case_sensitive": settings.reference_case_sensitive,
        "annotate_target": settings.annotate_target,
    }

    return {
        "status": "ok",
        "service": "sheettrace",
        "config": config,
    }

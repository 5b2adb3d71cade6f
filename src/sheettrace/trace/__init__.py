"""Dependent tracing core."""

from .models import (
    CellRef,
    DependentResult,
    InvalidReferenceError,
    MalformedGridError,
)
from .references import col_letter_to_index, index_to_col_letter
from .tracer import DependentTracer, find_dependents, trace_references

__all__ = [
    "CellRef",
    "DependentResult",
    "InvalidReferenceError",
    "MalformedGridError",
    "DependentTracer",
    "find_dependents",
    "trace_references",
    "col_letter_to_index",
    "index_to_col_letter",
]

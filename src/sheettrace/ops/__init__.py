"""Trace operations against in-memory grids and live sheets."""

from .engine import DependentTraceEngine
from .models import TraceReport

__all__ = [
    "DependentTraceEngine",
    "TraceReport",
]

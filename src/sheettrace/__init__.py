"""SheetTrace - find the formula dependents of spreadsheet cells."""

__version__ = "0.1.0"

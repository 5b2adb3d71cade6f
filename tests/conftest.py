"""Pytest configuration and shared fixtures."""

from unittest.mock import Mock

import pytest

from sheettrace.sheets import FormulaGrid, GoogleSheetsClient, UpdateResult


@pytest.fixture
def sample_grid() -> list[list[str]]:
    """Two-row grid where B1 and C2 both reference A1."""
    return [
        ["", "=A1*2", ""],
        ["5", "", "=B1+A1"],
    ]


@pytest.fixture
def mock_sheets_client(sample_grid) -> Mock:
    """Create a mocked Google Sheets client."""
    client = Mock(spec=GoogleSheetsClient)

    client.read_formula_grid = Mock(
        return_value=FormulaGrid(
            spreadsheet_id="test-sheet-123",
            sheet_name="Sheet1",
            range_notation="'Sheet1'",
            formulas=sample_grid,
        )
    )

    client.set_note = Mock(
        return_value=UpdateResult(
            success=True,
            spreadsheet_id="test-sheet-123",
            updated_cells=1,
        )
    )

    return client

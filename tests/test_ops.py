"""Tests for the trace operations engine."""

from unittest.mock import Mock, patch

import pytest
from googleapiclient.errors import HttpError

from sheettrace.ops import DependentTraceEngine, TraceReport
from sheettrace.sheets import GoogleSheetsClient, UpdateResult
from sheettrace.trace import InvalidReferenceError


@pytest.fixture
def engine(mock_sheets_client):
    """Create a case-sensitive engine over the mocked client."""
    return DependentTraceEngine(sheets_client=mock_sheets_client, case_sensitive=True)


class TestTraceGrid:
    """Tests for tracing in-memory grids."""

    def test_trace_grid(self, engine, sample_grid, mock_sheets_client):
        result = engine.trace_grid(sample_grid, "A1")

        assert result.references == ["B1", "C2"]
        mock_sheets_client.read_formula_grid.assert_not_called()

    def test_case_insensitive_engine(self, mock_sheets_client):
        engine = DependentTraceEngine(sheets_client=mock_sheets_client, case_sensitive=False)

        assert engine.trace_grid([["=a1"]], "A1").references == ["A1"]

    def test_case_sensitivity_defaults_to_settings(self, mock_sheets_client):
        with patch("sheettrace.ops.engine.settings") as mock_settings:
            mock_settings.reference_case_sensitive = False
            engine = DependentTraceEngine(sheets_client=mock_sheets_client)

        assert engine.tracer.case_sensitive is False


class TestTraceSheet:
    """Tests for tracing live sheets."""

    def test_trace_and_annotate(self, engine, mock_sheets_client):
        report = engine.trace_sheet("test-sheet-123", "Sheet1", "A1", annotate=True)

        assert isinstance(report, TraceReport)
        assert report.target == "A1"
        assert report.dependents == ["B1", "C2"]
        assert report.count == 2
        assert report.note == "Dependents: B1, C2"
        assert report.annotated is True
        assert report.errors == []
        assert report.execution_time_ms >= 0

        mock_sheets_client.read_formula_grid.assert_called_once_with("test-sheet-123", "Sheet1")
        mock_sheets_client.set_note.assert_called_once_with(
            "test-sheet-123", "Sheet1", "A1", "Dependents: B1, C2"
        )

    def test_no_dependents_note(self, engine, mock_sheets_client):
        report = engine.trace_sheet("test-sheet-123", "Sheet1", "C2", annotate=True)

        assert report.dependents == []
        assert report.note == "Dependents: None"
        mock_sheets_client.set_note.assert_called_once_with(
            "test-sheet-123", "Sheet1", "C2", "Dependents: None"
        )

    def test_target_is_normalized(self, engine, mock_sheets_client):
        report = engine.trace_sheet("test-sheet-123", "Sheet1", "b1", annotate=True)

        assert report.target == "B1"
        assert report.dependents == ["C2"]
        assert mock_sheets_client.set_note.call_args.args[2] == "B1"

    def test_without_annotation(self, engine, mock_sheets_client):
        report = engine.trace_sheet("test-sheet-123", "Sheet1", "A1", annotate=False)

        assert report.annotated is False
        assert report.note == "Dependents: B1, C2"
        mock_sheets_client.set_note.assert_not_called()

    def test_annotation_defaults_to_settings(self, engine, mock_sheets_client):
        with patch("sheettrace.ops.engine.settings") as mock_settings:
            mock_settings.annotate_target = False
            engine.trace_sheet("test-sheet-123", "Sheet1", "A1")

        mock_sheets_client.set_note.assert_not_called()

    def test_failed_annotation_is_reported(self, engine, mock_sheets_client):
        mock_sheets_client.set_note.return_value = UpdateResult(
            success=False,
            spreadsheet_id="test-sheet-123",
            errors=["403 Forbidden"],
        )

        report = engine.trace_sheet("test-sheet-123", "Sheet1", "A1", annotate=True)

        assert report.annotated is False
        assert report.errors == ["403 Forbidden"]
        assert report.dependents == ["B1", "C2"]

    def test_annotation_lookup_failure_keeps_dependents(self):
        """A failed note write through the real client still yields the trace."""
        client = GoogleSheetsClient()
        client._service = Mock()
        spreadsheets = client._service.spreadsheets.return_value
        spreadsheets.values.return_value.get.return_value.execute.return_value = {
            "values": [["", "=A1*2", ""], ["5", "", "=B1+A1"]],
        }
        spreadsheets.get.return_value.execute.side_effect = HttpError(
            Mock(status=403, reason="Forbidden"), b"forbidden"
        )
        engine = DependentTraceEngine(sheets_client=client, case_sensitive=True)

        report = engine.trace_sheet("test-sheet-123", "Sheet1", "A1", annotate=True)

        assert report.dependents == ["B1", "C2"]
        assert report.annotated is False
        assert len(report.errors) == 1
        spreadsheets.batchUpdate.assert_not_called()

    def test_invalid_cell_skips_read(self, engine, mock_sheets_client):
        with pytest.raises(InvalidReferenceError):
            engine.trace_sheet("test-sheet-123", "Sheet1", "$A$1", annotate=True)

        mock_sheets_client.read_formula_grid.assert_not_called()

    def test_read_failure_propagates(self, engine, mock_sheets_client):
        mock_sheets_client.read_formula_grid.side_effect = RuntimeError("Failed to read")

        with pytest.raises(RuntimeError, match="Failed to read"):
            engine.trace_sheet("test-sheet-123", "Sheet1", "A1", annotate=True)

        mock_sheets_client.set_note.assert_not_called()

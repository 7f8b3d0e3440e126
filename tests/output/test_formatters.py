"""Tests for ServiceResult formatting."""

from __future__ import annotations

import json

from libpanels.output.formatters import format_result
from libpanels.services.result import ServiceError, ServiceResult

PANEL = {
    "id": 1,
    "uid": "abc123",
    "org_id": 1,
    "folder_id": 0,
    "name": "CPU",
    "model": {"type": "graph"},
    "created": "2024-01-01T00:00:00+00:00",
    "updated": "2024-01-01T00:00:00+00:00",
    "created_by": 42,
    "updated_by": 42,
}


class TestFormatResult:
    def test_json(self) -> None:
        result = ServiceResult(ok=True, op="get_panel", data=PANEL)
        parsed = json.loads(format_result(result, json_output=True))
        assert parsed["ok"] is True
        assert parsed["data"]["uid"] == "abc123"

    def test_generic_human(self) -> None:
        output = format_result(ServiceResult(ok=True, op="get_panel", data=PANEL))
        assert "OK" in output
        assert "get_panel" in output
        assert "uid: abc123" in output
        assert 'model: {"type":"graph"}' in output

    def test_panel_table(self) -> None:
        result = ServiceResult(ok=True, op="list_panels", data={"items": [PANEL], "count": 1})
        output = format_result(result)
        assert "UID" in output
        assert "abc123" in output
        assert "CPU" in output

    def test_empty_panel_table(self) -> None:
        result = ServiceResult(ok=True, op="list_panels", data={"items": [], "count": 0})
        assert "No library panels." in format_result(result)

    def test_error(self) -> None:
        result = ServiceResult(
            ok=False,
            op="get_panel",
            error=ServiceError(code="NOT_FOUND", message="Library panel not found: x"),
        )
        output = format_result(result)
        assert "ERROR" in output
        assert "NOT_FOUND" in output
        assert "Library panel not found: x" in output


class TestQuiet:
    def test_list_prints_uids(self) -> None:
        result = ServiceResult(
            ok=True,
            op="list_panels",
            data={"items": [PANEL, {**PANEL, "uid": "def456"}], "count": 2},
        )
        assert format_result(result, quiet=True).splitlines() == ["abc123", "def456"]

    def test_connected_prints_ids(self) -> None:
        result = ServiceResult(
            ok=True,
            op="list_connected_dashboards",
            data={"uid": "abc123", "dashboard_ids": [7, 9]},
        )
        assert format_result(result, quiet=True) == "7\n9"

    def test_single_panel_prints_uid(self) -> None:
        result = ServiceResult(ok=True, op="create_panel", data=PANEL)
        assert format_result(result, quiet=True) == "abc123"

    def test_no_uid(self) -> None:
        result = ServiceResult(ok=True, op="check_connections", data={"count": 0})
        assert format_result(result, quiet=True) == "OK: check_connections"

    def test_error(self) -> None:
        result = ServiceResult(
            ok=False, op="delete_panel", error=ServiceError(code="NOT_FOUND", message="gone")
        )
        assert format_result(result, quiet=True) == "ERROR: delete_panel - gone"

"""Tests for the MCP tools (tools/scan.py, tools/graph.py, tools/health.py)."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

import architest
from architest.tools.graph import service_graph
from architest.tools.health import health
from architest.tools.scan import scan_project

FIXTURES_DIR = Path(__file__).parent / "fixtures"
SAMPLE_PROJECT = FIXTURES_DIR / "sample_project"

# ─── Helpers ─────────────────────────────────────────────────


def _make_ctx() -> MagicMock:
    """Build a mock Context with async info/error methods."""
    ctx = MagicMock()
    ctx.info = AsyncMock()
    ctx.error = AsyncMock()
    return ctx


# ═══════════════════════════════════════════════════════════════
# scan_project
# ═══════════════════════════════════════════════════════════════


class TestScanProjectTool:
    async def test_sample_project(self):
        result = await scan_project(_make_ctx(), path=str(SAMPLE_PROJECT))

        assert result["projectPath"] == str(SAMPLE_PROJECT)
        services = {s["name"]: s for s in result["services"]}
        assert services["user-api"]["openapi"]["title"] == "User API"
        assert services["order-api"]["openapi"]["baseUrl"] == "http://localhost:9090"
        assert "openapi" not in services["frontend"]
        assert result["specErrors"] == []

    async def test_summary_names_matches(self):
        result = await scan_project(_make_ctx(), path=str(SAMPLE_PROJECT))
        summary = result["summary"]
        assert "Found 4 services" in summary
        assert "user-api -> User API" in summary
        assert "order-api -> Order API" in summary

    async def test_summary_mentions_spec_errors(self, write_file, tmp_path: Path):
        write_file("docker-compose.yml", "services:\n  api:\n    build: api\n")
        write_file("api/openapi.json", "{")
        result = await scan_project(_make_ctx(), path=str(tmp_path))
        assert "1 spec files could not be parsed" in result["summary"]
        assert result["specErrors"][0]["kind"] == "malformed_document"

    async def test_missing_compose_returns_error(self, tmp_path: Path):
        result = await scan_project(_make_ctx(), path=str(tmp_path))
        assert result["success"] is False
        assert result["kind"] == "not_found"
        assert "docker-compose.yml" in result["error"]

    async def test_malformed_compose_reports_position(self, write_file, tmp_path: Path):
        write_file("docker-compose.yml", "services:\n  web: [\n")
        result = await scan_project(_make_ctx(), path=str(tmp_path))
        assert result["success"] is False
        assert result["kind"] == "malformed_document"
        assert result["file_path"].endswith("docker-compose.yml")
        assert isinstance(result["line"], int)

    async def test_schema_violation(self, write_file, tmp_path: Path):
        write_file("docker-compose.yml", "web:\n  image: nginx\n")
        result = await scan_project(_make_ctx(), path=str(tmp_path))
        assert result["success"] is False
        assert result["kind"] == "schema_violation"

    async def test_path_outside_allowed_roots(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ):
        monkeypatch.setenv("ARCHITEST_ALLOWED_ROOTS", str(tmp_path))
        result = await scan_project(_make_ctx(), path=str(SAMPLE_PROJECT))
        assert result["success"] is False
        assert result["kind"] == "scan_error"
        assert "ARCHITEST_ALLOWED_ROOTS" in result["error"]

    async def test_path_inside_allowed_roots(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ARCHITEST_ALLOWED_ROOTS", str(FIXTURES_DIR))
        result = await scan_project(_make_ctx(), path=str(SAMPLE_PROJECT))
        assert len(result["services"]) == 4

    async def test_unexpected_error_reported_to_ctx(self):
        ctx = _make_ctx()
        with patch("architest.tools._helpers.scan", side_effect=RuntimeError("boom")):
            result = await scan_project(ctx, path=str(SAMPLE_PROJECT))
        assert result == {"success": False, "error": "Internal error: RuntimeError"}
        ctx.error.assert_awaited_once()


# ═══════════════════════════════════════════════════════════════
# service_graph
# ═══════════════════════════════════════════════════════════════


class TestServiceGraphTool:
    async def test_sample_project(self):
        result = await service_graph(_make_ctx(), path=str(SAMPLE_PROJECT))
        assert [n["id"] for n in result["nodes"]] == [
            "user-api",
            "order-api",
            "frontend",
            "postgres",
        ]
        assert len(result["edges"]) == 5

    async def test_error_payload(self, tmp_path: Path):
        result = await service_graph(_make_ctx(), path=str(tmp_path))
        assert result["success"] is False
        assert result["kind"] == "not_found"

    async def test_unexpected_error_reported_to_ctx(self):
        ctx = _make_ctx()
        with patch("architest.tools.graph.build_service_graph", side_effect=ValueError("x")):
            result = await service_graph(ctx, path=str(SAMPLE_PROJECT))
        assert result["error"] == "Internal error: ValueError"
        ctx.error.assert_awaited_once()


# ═══════════════════════════════════════════════════════════════
# health
# ═══════════════════════════════════════════════════════════════


class TestHealthTool:
    async def test_reports_ok(self):
        assert await health() == {"status": "ok", "version": architest.__version__}

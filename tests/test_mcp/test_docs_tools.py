"""Tests for check_docs and validate_files MCP tools."""
import pytest

from .conftest import unwrap_result


class TestCheckDocsTool:
    """Tests for check_docs tool."""

    @pytest.mark.asyncio
    async def test_recursive_scan(self, go_project, mcp_client):
        result = unwrap_result(await mcp_client.call_tool("check_docs", {"path": "./..."}))

        assert result["total_count"] == 3
        assert result["returned_count"] == 3
        assert result["size_limited"] is False
        assert "message" not in result

        flat = [
            (group["file"], issue["line"], issue["issue"])
            for group in result["issues_by_file"]
            for issue in group["issues"]
        ]
        assert flat == [
            ("sample.go", 18, "Missing var group comment"),
            ("sample.go", 46, "Missing func comment"),
            ("pkg/README.md", 0, "Missing README.md file"),
        ]

    @pytest.mark.asyncio
    async def test_single_file(self, go_project, mcp_client):
        result = unwrap_result(await mcp_client.call_tool(
            "check_docs", {"path": "sample.go", "recursive": False}
        ))

        assert result["total_count"] == 2
        assert [g["file"] for g in result["issues_by_file"]] == ["sample.go"]

    @pytest.mark.asyncio
    async def test_offset(self, go_project, mcp_client):
        result = unwrap_result(await mcp_client.call_tool(
            "check_docs", {"path": ".", "offset": 2}
        ))

        assert result["total_count"] == 3
        assert result["returned_count"] == 1
        assert result["issues_by_file"][0]["file"] == "pkg/README.md"

    @pytest.mark.asyncio
    async def test_parse_errors_reported(self, go_project, mcp_client):
        (go_project / "broken.go").write_text("package broken\n\nfunc Broken( {\n")

        result = unwrap_result(await mcp_client.call_tool("check_docs", {"path": "."}))

        assert [e["file"] for e in result["errors"]] == ["broken.go"]
        assert result["total_count"] == 3

    @pytest.mark.asyncio
    async def test_invalid_path(self, go_project, mcp_client):
        result = unwrap_result(await mcp_client.call_tool("check_docs", {"path": "missing_dir"}))

        assert result["status"] == "error"
        assert result["error_type"] == "storage_error"


class TestValidateFilesTool:
    """Tests for validate_files tool."""

    @pytest.mark.asyncio
    async def test_mixed_files(self, go_project, mcp_client):
        (go_project / "broken.go").write_text("package broken\n\nfunc (\n")

        result = unwrap_result(await mcp_client.call_tool(
            "validate_files", {"files": ["sample.go", "pkg/util.go", "broken.go"]}
        ))

        assert result["total_files"] == 3
        assert result["valid_count"] == 2
        assert result["invalid_count"] == 1
        assert result["overall_valid"] is False
        broken = result["results"][2]
        assert broken["valid"] is False
        assert broken["language"] == "go"
        assert broken["error"]

    @pytest.mark.asyncio
    async def test_all_valid(self, go_project, mcp_client):
        result = unwrap_result(await mcp_client.call_tool("validate_files", {"files": ["sample.go"]}))
        assert result["overall_valid"] is True

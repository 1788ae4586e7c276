"""MCP surface: FastMCP server and tool registrations."""
from .server import create_server, run_server

__all__ = ["create_server", "run_server"]

"""FastMCP server setup and tool registration."""
from fastmcp import FastMCP

from .tools import docs, parts, validation

mcp = FastMCP("scout")


def create_server():
    """Create and configure the MCP server."""
    # Language-aware part tools
    parts.register(mcp)

    # Documentation conformance
    docs.register(mcp)

    # Syntax validation
    validation.register(mcp)

    return mcp


def run_server():
    """Run the MCP server."""
    server = create_server()
    server.run(show_banner=False)

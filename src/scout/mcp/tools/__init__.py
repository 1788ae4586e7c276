"""MCP tool registrations."""

__all__ = [
    "docs",
    "parts",
    "validation",
]

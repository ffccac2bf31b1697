"""MCP server for the Tandoor recipe manager."""

__version__ = "0.1.0"

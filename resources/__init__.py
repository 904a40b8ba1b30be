"""MCP resources served alongside the tools."""

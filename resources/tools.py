"""
Tool Documentation Resources

Serves toolgate://tools/* resources straight from @mcp.tool docstrings,
so the docstrings are the only copy of the tool documentation.

Reads FastMCP's `_tool_manager._tools` because the public `list_tools()`
is async and the registry is filled at import time. If that structure
moves, registration logs a warning and the resources report "Tool not found".
"""

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

URI_PREFIX = "toolgate://tools/"


def docstring_to_markdown(tool_name: str, docstring: str) -> str:
    """Title plus the docstring with its common indentation removed."""
    if not docstring:
        return f"# {tool_name}()\n\nNo documentation available."

    lines = docstring.strip().split('\n')
    if len(lines) > 1:
        indents = [len(line) - len(line.lstrip())
                   for line in lines[1:] if line.strip()]
        min_indent = min(indents) if indents else 0
        lines = [lines[0]] + [line[min_indent:] if len(line) > min_indent else line.strip()
                              for line in lines[1:]]

    return f"# {tool_name}()\n\n" + '\n'.join(lines)


class ToolResourceRegistry:
    """Tool name -> function, rendered to markdown on demand and cached."""

    def __init__(self) -> None:
        self._tools: dict[str, Callable[..., Any]] = {}
        self._cache: dict[str, dict[str, str]] = {}

    def register_tool(self, name: str, func: Callable[..., Any]) -> None:
        self._tools[name] = func
        self._cache.pop(f"{URI_PREFIX}{name}", None)

    def register_from_mcp(self, mcp_server: Any) -> int:
        """
        Register every tool of a FastMCP server.

        Returns:
            Number of tools registered (0 logs a warning)
        """
        count = 0
        tools = getattr(getattr(mcp_server, '_tool_manager', None), '_tools', {})
        for name, tool in tools.items():
            if hasattr(tool, 'fn'):
                self.register_tool(name, tool.fn)
                count += 1

        if count == 0:
            logger.warning(
                "Tool resource registry is empty after registration. "
                "toolgate://tools/* resources will not be available. "
                "This may indicate a FastMCP API change - check resources/tools.py"
            )
        else:
            logger.info(f"Tool resource registry: {count} tools registered")
        return count

    def get_tool_names(self) -> set[str]:
        return set(self._tools.keys())

    def get_resource(self, uri: str) -> dict[str, str]:
        """
        Resource dict (uri, mimeType, text) for a tool URI.

        Raises:
            KeyError: Not a tool URI, or no such tool
        """
        if uri in self._cache:
            return self._cache[uri]

        if not uri.startswith(URI_PREFIX):
            raise KeyError(f"Not a tool resource: {uri}")

        tool_name = uri[len(URI_PREFIX):]
        if tool_name not in self._tools:
            raise KeyError(f"Tool not found: {tool_name}")

        resource = {
            "uri": uri,
            "mimeType": "text/markdown",
            "text": docstring_to_markdown(tool_name, self._tools[tool_name].__doc__ or ""),
        }
        self._cache[uri] = resource
        return resource

    def list_resources(self) -> list[dict[str, str]]:
        resources: list[dict[str, str]] = []
        for name in sorted(self._tools):
            docstring = self._tools[name].__doc__ or ""
            first_line = docstring.strip().split('\n')[0] if docstring else "No description"
            resources.append({
                "uri": f"{URI_PREFIX}{name}",
                "name": name,
                "description": first_line[:100],
            })
        return resources


# Global registry instance
_registry = ToolResourceRegistry()


def get_tool_registry() -> ToolResourceRegistry:
    """Get the global tool resource registry."""
    return _registry

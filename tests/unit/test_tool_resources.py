"""Tests for the tool documentation registry."""

from unittest.mock import MagicMock

import pytest

from resources.tools import URI_PREFIX, ToolResourceRegistry, docstring_to_markdown


def sample_tool(path: str) -> dict:
    """
    Read a sample.

    Args:
        path: Where
    """
    return {}


class TestDocstringToMarkdown:
    def test_dedents_body(self) -> None:
        text = docstring_to_markdown("sample", sample_tool.__doc__)
        assert text == "# sample()\n\nRead a sample.\n\nArgs:\n    path: Where"

    def test_empty_docstring(self) -> None:
        assert "No documentation available" in docstring_to_markdown("x", "")


class TestToolResourceRegistry:
    def test_register_and_get(self) -> None:
        registry = ToolResourceRegistry()
        registry.register_tool("sample", sample_tool)

        resource = registry.get_resource(f"{URI_PREFIX}sample")

        assert resource["mimeType"] == "text/markdown"
        assert resource["text"].startswith("# sample()")
        assert registry.get_tool_names() == {"sample"}

    def test_unknown_uri(self) -> None:
        registry = ToolResourceRegistry()
        with pytest.raises(KeyError):
            registry.get_resource(f"{URI_PREFIX}missing")
        with pytest.raises(KeyError):
            registry.get_resource("other://sample")

    def test_list_resources(self) -> None:
        registry = ToolResourceRegistry()
        registry.register_tool("sample", sample_tool)

        assert registry.list_resources() == [{
            "uri": f"{URI_PREFIX}sample",
            "name": "sample",
            "description": "Read a sample.",
        }]

    def test_register_from_mcp(self) -> None:
        server = MagicMock()
        server._tool_manager._tools = {"sample": MagicMock(fn=sample_tool)}

        assert ToolResourceRegistry().register_from_mcp(server) == 1

    def test_register_from_mcp_without_tools(self) -> None:
        server = MagicMock(spec=[])
        assert ToolResourceRegistry().register_from_mcp(server) == 0

    def test_server_registers_all_tools(self) -> None:
        from server import _tool_registry

        assert _tool_registry.get_tool_names() == {
            "s3-read-file", "s3-write-to-file", "s3-edit-file",
        }

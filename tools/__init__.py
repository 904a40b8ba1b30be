"""
Tools — MCP tool implementations.

Each tool has its own module with the implementation logic.
server.py provides thin @mcp.tool() wrappers that call into these.

File tools (3):
- read: Document text (PDF/DOCX extracted)
- write: Create or overwrite, inline content or from a URL
- edit: SEARCH/REPLACE blocks applied to the stored file
"""

from .read_file import do_read_file
from .write_file import do_write_file
from .edit_file import do_edit_file
from .store import resolve_s3_store

# Single source of truth for valid file operation names.
OPERATIONS = frozenset({"read", "write", "edit"})

__all__ = [
    "do_read_file", "do_write_file", "do_edit_file",
    "resolve_s3_store", "OPERATIONS",
]

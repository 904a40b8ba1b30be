"""
Shared test helpers for toolgate.

Centralizes fakes and patch-building patterns that repeat across test files.
"""

from __future__ import annotations

from models import ErrorKind, GatewayError, WriteReceipt
from validation import guess_content_type


class InMemoryStore:
    """DocumentStore over a dict. Records every write."""

    def __init__(self, files: dict[str, str | bytes] | None = None):
        self.files: dict[str, str | bytes] = dict(files or {})
        self.writes: list[tuple[str, str | bytes]] = []
        self.reads: list[str] = []

    def read(self, path: str) -> str:
        self.reads.append(path)
        if path not in self.files:
            raise GatewayError(ErrorKind.NOT_FOUND, f"File not found: {path}")
        data = self.files[path]
        return data.decode("utf-8") if isinstance(data, bytes) else data

    def write(self, path: str, content: str | bytes) -> WriteReceipt:
        self.writes.append((path, content))
        self.files[path] = content
        size = len(content.encode("utf-8")) if isinstance(content, str) else len(content)
        return WriteReceipt(
            path=path,
            size=size,
            content_type=guess_content_type(path),
            etag="etag-1",
        )


class FailingStore(InMemoryStore):
    """InMemoryStore whose writes fail with the given kind."""

    def __init__(self, files: dict[str, str | bytes] | None = None,
                 kind: ErrorKind = ErrorKind.PERMISSION_DENIED):
        super().__init__(files)
        self.kind = kind

    def write(self, path: str, content: str | bytes) -> WriteReceipt:
        raise GatewayError(self.kind, f"Write refused: {path}")


def block(search: str, replace: str) -> str:
    """
    One SEARCH/REPLACE block. Empty strings give empty sections.

        block("old line", "new line")
    """
    parts = ["<<<<<<< SEARCH"]
    if search:
        parts.append(search)
    parts.append("=======")
    if replace:
        parts.append(replace)
    parts.append(">>>>>>> REPLACE")
    return "\n".join(parts) + "\n"

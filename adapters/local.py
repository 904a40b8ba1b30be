"""
Local filesystem adapter — DocumentStore rooted at a directory.

Used by the CLI to run the same tools against files on disk.
Paths are relative to the root and may not escape it.
"""

import errno
from pathlib import Path

from adapters.conversion import convert_to_text
from config import CONVERTIBLE_SUFFIXES
from logging_config import logger
from models import ErrorKind, GatewayError, WriteReceipt
from validation import guess_content_type

__all__ = ["LocalDocumentStore"]

# errno values that mean "storage refused the write for lack of room"
_QUOTA_ERRNOS = frozenset({errno.ENOSPC, errno.EDQUOT, errno.EFBIG})


class LocalDocumentStore:
    """DocumentStore backed by a directory tree."""

    def __init__(self, root: Path | str):
        self.root = Path(root).resolve()

    def resolve(self, path: str) -> Path:
        """Map a tool path inside the root. Escaping the root is INVALID_INPUT."""
        if not path or not path.strip():
            raise GatewayError(ErrorKind.INVALID_INPUT, "File path is required")
        target = (self.root / path.lstrip("/")).resolve()
        if not target.is_relative_to(self.root):
            raise GatewayError(
                ErrorKind.INVALID_INPUT,
                f"Path escapes the store root: {path}",
            )
        return target

    def read(self, path: str) -> str:
        target = self.resolve(path)
        try:
            if target.suffix.lower() in CONVERTIBLE_SUFFIXES:
                return convert_to_text(target.read_bytes(), target.suffix.lower())
            return target.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise GatewayError(ErrorKind.NOT_FOUND, f"File not found: {path}") from e
        except IsADirectoryError as e:
            raise GatewayError(ErrorKind.INVALID_INPUT, f"Path is a directory: {path}") from e
        except PermissionError as e:
            raise GatewayError(ErrorKind.PERMISSION_DENIED, f"Permission denied: {path}") from e
        except UnicodeDecodeError as e:
            raise GatewayError(ErrorKind.INVALID_INPUT, f"{path} is not a UTF-8 text file") from e

    def write(self, path: str, content: str | bytes) -> WriteReceipt:
        target = self.resolve(path)
        body = content.encode("utf-8") if isinstance(content, str) else content
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(body)
        except PermissionError as e:
            raise GatewayError(ErrorKind.PERMISSION_DENIED, f"Permission denied: {path}") from e
        except OSError as e:
            if e.errno in _QUOTA_ERRNOS:
                raise GatewayError(ErrorKind.QUOTA_EXCEEDED, f"No space to write {path}: {e}") from e
            raise GatewayError(ErrorKind.UNKNOWN, f"Could not write {path}: {e}") from e

        logger.info(f"Wrote {len(body)} bytes to {target}")
        return WriteReceipt(path=path, size=len(body), content_type=guess_content_type(path))

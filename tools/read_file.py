"""
Read tool — return a document's text.

PDF and DOCX files come back as extracted text rather than raw bytes.
"""

from typing import Any

from config import CONVERTIBLE_SUFFIXES
from logging_config import logger
from models import DocumentStore, FileResult, GatewayError
from validation import path_suffix


def do_read_file(path: str | None, store: DocumentStore) -> FileResult | dict[str, Any]:
    """Read a file from the store."""
    if not path:
        return {"error": True, "kind": "invalid_input",
                "message": "read requires 'path'"}
    try:
        content = store.read(path)
    except GatewayError as e:
        logger.warning(f"read {path} failed: {e.kind.value}: {e.message}")
        return e.to_dict()

    return FileResult(
        path=path,
        operation="read",
        message=f"Read {len(content)} characters from {path}",
        content=content,
        cues={
            "chars": len(content),
            "lines": len(content.splitlines()),
            "converted": path_suffix(path) in CONVERTIBLE_SUFFIXES,
        },
    )

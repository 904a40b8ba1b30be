"""
Write tool — create or overwrite a file.

Content is either passed inline or downloaded from a URL (text or binary).
Exactly one of the two must be given.
"""

from typing import Any

from adapters.download import download_from_url
from logging_config import logger
from models import DocumentStore, FileResult, GatewayError


def do_write_file(
    path: str | None,
    store: DocumentStore,
    content: str | None = None,
    url: str | None = None,
) -> FileResult | dict[str, Any]:
    """Write inline content (or a URL's body) to path, replacing what is there."""
    if not path:
        return {"error": True, "kind": "invalid_input",
                "message": "write requires 'path'"}
    if content is not None and url:
        return {"error": True, "kind": "invalid_input",
                "message": "write takes either 'content' or 'url', not both"}
    if content is None and not url:
        return {"error": True, "kind": "invalid_input",
                "message": "write requires 'content' or 'url'"}

    try:
        return _write(path, store, content, url)
    except GatewayError as e:
        logger.warning(f"write {path} failed: {e.kind.value}: {e.message}")
        return e.to_dict()


def _write(path: str, store: DocumentStore, content: str | None, url: str | None) -> FileResult:
    body: str | bytes
    if url:
        body = download_from_url(url)
    else:
        assert content is not None
        body = content

    receipt = store.write(path, body)

    cues: dict[str, Any] = {
        "bytes_written": receipt.size,
        "content_type": receipt.content_type,
    }
    if url:
        cues["source_url"] = url
    if receipt.etag:
        cues["etag"] = receipt.etag
    if receipt.version_id:
        cues["version_id"] = receipt.version_id

    return FileResult(
        path=path,
        operation="write",
        message=f"Successfully wrote {receipt.size} bytes to {path}",
        cues=cues,
    )

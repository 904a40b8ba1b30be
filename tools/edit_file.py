"""
Edit tool — apply SEARCH/REPLACE blocks to a stored file.

Read, patch, write back only if the text changed. A failed patch leaves
the stored file untouched. Edits to the same path in this process run one
at a time; across processes the last write wins. PDF and DOCX files are
not editable: their text is extracted on read and cannot be written back.
"""

import threading
from typing import Any

from config import CONVERTIBLE_SUFFIXES
from logging_config import logger
from models import DocumentStore, ErrorKind, FileResult, GatewayError, PatchBlock
from patching import apply_diff, parse_patch
from validation import path_suffix

# Striped: paths share a fixed set of locks, so the set never grows
LOCK_STRIPES = 64
_locks = tuple(threading.Lock() for _ in range(LOCK_STRIPES))


def _lock_for(path: str) -> threading.Lock:
    return _locks[hash(path) % LOCK_STRIPES]


def do_edit_file(
    path: str | None,
    diff: str | None,
    store: DocumentStore,
    dry_run: bool = False,
) -> FileResult | dict[str, Any]:
    """Apply a SEARCH/REPLACE diff to the file at path."""
    if not path:
        return {"error": True, "kind": "invalid_input",
                "message": "edit requires 'path'"}
    if not diff or not diff.strip():
        return {"error": True, "kind": "invalid_input",
                "message": "edit requires 'diff' with one or more SEARCH/REPLACE blocks"}
    if path_suffix(path) in CONVERTIBLE_SUFFIXES:
        # read() of these yields extracted text, not the stored bytes
        return {"error": True, "kind": "invalid_input",
                "message": f"{path} is a converted document and is read-only to edit. "
                           "Replace it with s3-write-to-file instead"}

    try:
        with _lock_for(path):
            return _edit(path, diff, store, dry_run)
    except GatewayError as e:
        logger.warning(f"edit {path} failed: {e.kind.value}: {e.message}")
        result = e.to_dict()
        result["message"] = f"Failed to replace content in {path}: {e.message}"
        return result


def _read_original(path: str, store: DocumentStore, blocks: list[PatchBlock]) -> tuple[str, bool]:
    """
    Current text of the file, and whether it is being created.

    A missing file is only acceptable when every block is a whole-document
    replacement (empty SEARCH); then the edit creates it.
    """
    try:
        return store.read(path), False
    except GatewayError as e:
        if e.kind is ErrorKind.NOT_FOUND and all(b.is_full_replacement for b in blocks):
            logger.info(f"{path} does not exist; creating it from a full-replacement diff")
            return "", True
        raise


def _edit(path: str, diff: str, store: DocumentStore, dry_run: bool) -> FileResult:
    # Structural problems fail before any storage call
    blocks = parse_patch(diff)
    original, creating = _read_original(path, store, blocks)

    patched = apply_diff(diff, original, is_final=True)
    modified = creating or patched != original

    cues: dict[str, Any] = {
        "blocks": len(blocks),
        "modified": modified,
        "chars_before": len(original),
        "chars_after": len(patched),
    }
    if creating:
        cues["created"] = True

    if dry_run:
        cues["dry_run"] = True
        return FileResult(
            path=path,
            operation="edit",
            message=f"Dry run: {len(blocks)} block(s) would change {path}" if modified
            else f"Dry run: no changes for {path}",
            content=patched,
            cues=cues,
        )

    if not modified:
        logger.info(f"No changes needed for {path}")
        return FileResult(
            path=path,
            operation="edit",
            message=f"No changes applied to {path} - content already matches the expected patterns",
            cues=cues,
        )

    receipt = store.write(path, patched)
    cues["bytes_written"] = receipt.size
    if receipt.etag:
        cues["etag"] = receipt.etag

    logger.info(f"Applied {len(blocks)} block(s) to {path}")
    return FileResult(
        path=path,
        operation="edit",
        message=f"Successfully applied changes to {path}",
        cues=cues,
    )

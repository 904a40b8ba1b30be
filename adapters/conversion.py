"""
Document conversion adapter — PDF/DOCX bytes to text via markitdown.

markitdown works from a file path, so bytes go through a temp file.
"""

import tempfile
from pathlib import Path

from markitdown import MarkItDown

from logging_config import logger
from models import GatewayError, ErrorKind


def convert_to_text(data: bytes, suffix: str) -> str:
    """
    Extract raw text from a binary document.

    Args:
        data: File bytes
        suffix: File suffix including the dot (".pdf", ".docx")

    Raises:
        GatewayError(EXTRACTION_FAILED): markitdown could not read the file
    """
    with tempfile.NamedTemporaryFile(suffix=suffix, delete=False) as tmp:
        tmp.write(data)
        tmp_path = Path(tmp.name)

    try:
        md = MarkItDown()
        result = md.convert_local(str(tmp_path))
        text = result.text_content or ""
    except Exception as e:
        raise GatewayError(
            ErrorKind.EXTRACTION_FAILED,
            f"Could not extract text from {suffix} file: {e}",
        ) from e
    finally:
        tmp_path.unlink(missing_ok=True)

    logger.debug(f"Converted {len(data)} bytes of {suffix} to {len(text)} chars")
    return text

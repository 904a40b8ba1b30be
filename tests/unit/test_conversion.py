"""Tests for PDF/DOCX conversion via markitdown."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from adapters.conversion import convert_to_text
from models import ErrorKind, GatewayError


class TestConvertToText:
    @patch("adapters.conversion.MarkItDown")
    def test_returns_text_and_removes_temp_file(self, mock_md_cls) -> None:
        seen: list[Path] = []

        def convert_local(path: str) -> MagicMock:
            seen.append(Path(path))
            assert Path(path).read_bytes() == b"%PDF"
            return MagicMock(text_content="Page one")

        mock_md_cls.return_value.convert_local.side_effect = convert_local

        assert convert_to_text(b"%PDF", ".pdf") == "Page one"
        assert seen[0].suffix == ".pdf"
        assert not seen[0].exists()

    @patch("adapters.conversion.MarkItDown")
    def test_none_text_is_empty(self, mock_md_cls) -> None:
        mock_md_cls.return_value.convert_local.return_value = MagicMock(text_content=None)
        assert convert_to_text(b"PK", ".docx") == ""

    @patch("adapters.conversion.MarkItDown")
    def test_failure_is_extraction_failed(self, mock_md_cls) -> None:
        mock_md_cls.return_value.convert_local.side_effect = RuntimeError("corrupt xref")

        with pytest.raises(GatewayError) as exc_info:
            convert_to_text(b"junk", ".pdf")

        assert exc_info.value.kind == ErrorKind.EXTRACTION_FAILED
        assert "corrupt xref" in exc_info.value.message

"""
Test suite for PDF text extraction.

PyPDFLoader is patched so no real PDF is required.

System role: Verification of PDF parsing error mapping
"""

from unittest.mock import MagicMock, patch

import pytest
from langchain_core.documents import Document
from pypdf.errors import FileNotDecryptedError

from askdocs.application.parser import extract_pdf_text
from askdocs.core.exceptions import InvalidParameterError


def loader_returning(pages=None, error: Exception | None = None) -> MagicMock:
    loader = MagicMock()
    if error is not None:
        loader.return_value.load.side_effect = error
    else:
        loader.return_value.load.return_value = pages
    return loader


class TestExtractPdfText:
    """Test suite for extract_pdf_text()."""

    def test_should_join_page_texts(self) -> None:
        """Test page contents are joined and stripped."""
        pages = [Document(page_content="Page one. "), Document(page_content="Page two.\n")]

        with patch("askdocs.application.parser.PyPDFLoader", loader_returning(pages)):
            text = extract_pdf_text(b"%PDF-1.4", "doc.pdf")

        assert text == "Page one. \n\nPage two."

    def test_empty_pdf_should_raise(self) -> None:
        """Test PDFs without text are rejected."""
        pages = [Document(page_content="  "), Document(page_content="")]

        with patch("askdocs.application.parser.PyPDFLoader", loader_returning(pages)):
            with pytest.raises(InvalidParameterError) as exc_info:
                extract_pdf_text(b"%PDF-1.4", "blank.pdf")

        assert exc_info.value.message == "PDF appears to be empty or contains no extractable text."

    def test_encrypted_pdf_should_raise_password_error(self) -> None:
        """Test password-protected PDFs get a dedicated message."""
        loader = loader_returning(error=FileNotDecryptedError("File has not been decrypted"))

        with patch("askdocs.application.parser.PyPDFLoader", loader):
            with pytest.raises(InvalidParameterError) as exc_info:
                extract_pdf_text(b"%PDF-1.4", "secret.pdf")

        assert exc_info.value.message == "This PDF is password-protected and cannot be processed."

    def test_unreadable_pdf_should_raise_invalid_parameter(self) -> None:
        """Test other parser failures are reported as invalid input."""
        loader = loader_returning(error=RuntimeError("EOF marker not found"))

        with patch("askdocs.application.parser.PyPDFLoader", loader):
            with pytest.raises(InvalidParameterError, match="Failed to extract text from PDF"):
                extract_pdf_text(b"garbage", "broken.pdf")

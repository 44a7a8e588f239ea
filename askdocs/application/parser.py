"""
PDF text extraction using LangChain PyPDFLoader.

Writes uploaded bytes to a temporary file, loads every page and joins the
page texts into one string for segmentation.

Dependencies: langchain_community.document_loaders, pypdf
System role: Text extraction stage of PDF ingestion
"""

import logging
import os
import tempfile

from langchain_community.document_loaders import PyPDFLoader
from pypdf.errors import FileNotDecryptedError

from askdocs.core.exceptions import InvalidParameterError

logger = logging.getLogger(__name__)

PASSWORD_PROTECTED_MESSAGE = "This PDF is password-protected and cannot be processed."
EMPTY_PDF_MESSAGE = "PDF appears to be empty or contains no extractable text."
CORRUPTED_PDF_MESSAGE = "This PDF file appears to be corrupted or invalid."


def _is_password_error(error: Exception) -> bool:
    if isinstance(error, FileNotDecryptedError):
        return True
    message = str(error).lower()
    return "password" in message or "encrypted" in message


def extract_pdf_text(data: bytes, filename: str) -> str:
    """
    Extract plain text from PDF bytes.

    Args:
        data: Raw PDF file content
        filename: Original filename, used for logging only

    Returns:
        str: Page texts joined by blank lines, stripped

    Raises:
        InvalidParameterError: When the PDF is protected, unreadable or has no text
    """
    fd, path = tempfile.mkstemp(suffix=".pdf")
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)

        try:
            pages = PyPDFLoader(path).load()
        except Exception as e:
            logger.warning(
                f"{__name__}:extract_pdf_text - PDF extraction failed: {type(e).__name__}: {e}",
                extra={"source": filename},
            )
            if _is_password_error(e):
                raise InvalidParameterError(PASSWORD_PROTECTED_MESSAGE, field="file") from e
            if "corrupt" in str(e).lower() or "invalid" in str(e).lower():
                raise InvalidParameterError(CORRUPTED_PDF_MESSAGE, field="file") from e
            raise InvalidParameterError(
                f"Failed to extract text from PDF: {e}",
                field="file",
            ) from e
    finally:
        os.remove(path)

    text = "\n\n".join(page.page_content for page in pages).strip()
    if not text:
        raise InvalidParameterError(EMPTY_PDF_MESSAGE, field="file")

    logger.info(
        f"{__name__}:extract_pdf_text - Extracted {len(text)} characters from {len(pages)} pages",
        extra={"source": filename, "page_count": len(pages)},
    )
    return text

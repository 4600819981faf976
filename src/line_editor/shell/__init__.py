"""Filesystem services used by front-ends; the core never touches disk."""

from .extract import DocxFormatError, extract_docx_text, extract_readable_text
from .files import DocumentError, LoadedDocument, read_document, split_lines, write_document

__all__ = [
    "DocumentError",
    "DocxFormatError",
    "LoadedDocument",
    "extract_docx_text",
    "extract_readable_text",
    "read_document",
    "split_lines",
    "write_document",
]

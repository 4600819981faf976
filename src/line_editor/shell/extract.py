"""Plain-text extraction from Word documents.

``.docx`` files are zip archives whose body lives in ``word/document.xml``;
only paragraphs, runs, breaks and tabs are read. Legacy ``.doc`` files are
not parsed at all: ``extract_readable_text`` keeps whatever human-readable
characters survive a lossy decode.
"""

from __future__ import annotations

import io
import string
import xml.etree.ElementTree as ET
import zipfile
from typing import List

WORD_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
DOCUMENT_PART = "word/document.xml"
TABLE_MARKER = "[table]"

_ASCII_PUNCTUATION = frozenset(string.punctuation)


def _tag(name: str) -> str:
    return f"{{{WORD_NS}}}{name}"


class DocxFormatError(ValueError):
    """The bytes are not a readable ``.docx`` package."""


def _paragraph_text(paragraph: ET.Element) -> str:
    parts: List[str] = []
    for run in paragraph.iter(_tag("r")):
        for child in run:
            if child.tag == _tag("t"):
                parts.append(child.text or "")
            elif child.tag in (_tag("br"), _tag("cr")):
                parts.append("\n")
            elif child.tag == _tag("tab"):
                parts.append("\t")
    return "".join(parts)


def extract_docx_text(data: bytes) -> str:
    """Return the body text of a ``.docx`` file, one paragraph per line.

    Tables are not flattened; each one is replaced by a ``[table]`` marker on
    its own line. Leading and trailing whitespace of the whole text is
    stripped.
    """

    try:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            xml_bytes = archive.read(DOCUMENT_PART)
    except (zipfile.BadZipFile, KeyError) as exc:
        raise DocxFormatError(f"not a docx package: {exc}") from exc

    try:
        root = ET.fromstring(xml_bytes)
    except ET.ParseError as exc:
        raise DocxFormatError(f"malformed {DOCUMENT_PART}: {exc}") from exc

    body = root.find(_tag("body"))
    if body is None:
        raise DocxFormatError(f"{DOCUMENT_PART} has no body")

    chunks: List[str] = []
    for child in body:
        if child.tag == _tag("p"):
            chunks.append(_paragraph_text(child) + "\n")
        elif child.tag == _tag("tbl"):
            chunks.append(f"\n{TABLE_MARKER}\n")
    return "".join(chunks).strip()


def _is_readable(char: str) -> bool:
    return (
        char.isalpha()
        or char.isnumeric()
        or char.isspace()
        or char in _ASCII_PUNCTUATION
    )


def extract_readable_text(data: bytes | str) -> str:
    """Keep letters, digits, whitespace and ASCII punctuation.

    Each run of other characters becomes one space, whitespace runs collapse
    to a single space and the result is trimmed, so the output is one line.
    """

    content = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
    kept: List[str] = []
    last_was_text = False
    for char in content:
        if _is_readable(char):
            kept.append(char)
            last_was_text = True
        elif last_was_text:
            kept.append(" ")
            last_was_text = False
    return " ".join("".join(kept).split())


__all__ = [
    "DocxFormatError",
    "extract_docx_text",
    "extract_readable_text",
    "TABLE_MARKER",
]

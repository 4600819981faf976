from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from line_editor.session import EditorSession
from line_editor.shell import (
    DocumentError,
    DocxFormatError,
    extract_docx_text,
    extract_readable_text,
    read_document,
    write_document,
)

W = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"


def make_docx(path: Path, body: str) -> Path:
    xml = f'<w:document xmlns:w="{W}"><w:body>{body}</w:body></w:document>'
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("[Content_Types].xml", "<Types/>")
        archive.writestr("word/document.xml", xml)
    return path


def paragraph(*runs: str) -> str:
    return "<w:p>" + "".join(f"<w:r>{run}</w:r>" for run in runs) + "</w:p>"


def test_reads_plain_text(tmp_path: Path) -> None:
    path = tmp_path / "plain.txt"
    path.write_bytes("héllo\r\nworld\n".encode("utf-8"))

    loaded = read_document(path)

    assert loaded.lines == ("héllo", "world")
    assert loaded.warning is None
    assert loaded.path == path


def test_separators_other_than_line_feed_survive_save(tmp_path: Path) -> None:
    source = tmp_path / "form.txt"
    source.write_bytes("page one\x0cpage two\nsep\u2028inside\nrs\x1efield".encode("utf-8"))
    session = EditorSession()

    loaded = read_document(source)
    session.load(loaded.lines, filename=str(source))
    target = write_document(tmp_path / "saved.txt", session.to_text())

    assert loaded.lines == ("page one\x0cpage two", "sep\u2028inside", "rs\x1efield")
    assert target.read_bytes() == source.read_bytes()


def test_empty_file_gives_one_line(tmp_path: Path) -> None:
    path = tmp_path / "empty.txt"
    path.write_bytes(b"")

    assert read_document(path).lines == ("",)


def test_invalid_utf8_raises_document_error(tmp_path: Path) -> None:
    path = tmp_path / "bad.txt"
    path.write_bytes(b"\xff\xfe\xfa")

    with pytest.raises(DocumentError) as excinfo:
        read_document(path)

    assert excinfo.value.path == path


def test_missing_file_raises_document_error(tmp_path: Path) -> None:
    with pytest.raises(DocumentError):
        read_document(tmp_path / "absent.txt")


def test_docx_paragraphs_become_lines(tmp_path: Path) -> None:
    body = (
        paragraph("<w:t>Hello </w:t>", "<w:t>world</w:t>")
        + paragraph("<w:t>a</w:t><w:tab/><w:t>b</w:t>", "<w:br/><w:t>c</w:t>")
        + "<w:tbl><w:tr><w:tc>" + paragraph("<w:t>cell</w:t>") + "</w:tc></w:tr></w:tbl>"
        + paragraph("<w:t>end</w:t>")
    )
    path = make_docx(tmp_path / "doc.docx", body)

    loaded = read_document(path)

    assert loaded.lines == ("Hello world", "a\tb", "c", "", "[table]", "end")
    assert loaded.warning is None


def test_malformed_docx_falls_back_with_warning(tmp_path: Path) -> None:
    path = tmp_path / "broken.docx"
    path.write_bytes(b"PK\x03\x04 not really a zip \x00\x01 text")

    loaded = read_document(path)

    assert loaded.warning is not None
    assert loaded.lines == ("PK not really a zip text",)


def test_extract_docx_text_rejects_missing_part(tmp_path: Path) -> None:
    path = tmp_path / "other.zip"
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("readme.txt", "hi")

    with pytest.raises(DocxFormatError):
        extract_docx_text(path.read_bytes())


def test_doc_uses_readable_text(tmp_path: Path) -> None:
    path = tmp_path / "legacy.doc"
    path.write_bytes(b"\xd0\xcf\x11\xe0Title\x00\x00Some   words,\nhere!\x07")

    assert read_document(path).lines == ("Title Some words, here!",)


def test_readable_text_keeps_letters_digits_punctuation() -> None:
    assert extract_readable_text("ab\x00\x01cd 12☃ok.") == "ab cd 12 ok."
    assert extract_readable_text("  \x00  ") == ""


def test_write_document_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "saved.txt"

    written = write_document(path, "one\ntwo")

    assert written == path
    assert path.read_bytes() == b"one\ntwo"
    assert read_document(path).lines == ("one", "two")


def test_write_document_failure(tmp_path: Path) -> None:
    with pytest.raises(DocumentError):
        write_document(tmp_path / "no" / "such" / "dir.txt", "x")

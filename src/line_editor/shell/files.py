"""Reading documents into line sequences and writing text back to disk."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from line_editor.buffer.document import split_text
from line_editor.runtime import telemetry

from .extract import DocxFormatError, extract_docx_text, extract_readable_text

PathLike = Union[str, Path]


class DocumentError(RuntimeError):
    """Raised when a document cannot be read or written."""

    def __init__(self, path: PathLike, message: str):
        super().__init__(f"{path}: {message}")
        self.path = Path(path)


@dataclass(frozen=True, slots=True)
class LoadedDocument:
    lines: Tuple[str, ...]
    path: Path
    warning: Optional[str] = None

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def split_lines(text: str) -> Tuple[str, ...]:
    return tuple(split_text(text))


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise DocumentError(path, exc.strerror or str(exc)) from exc


def _read_text(path: Path) -> str:
    data = _read_bytes(path)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DocumentError(path, f"not valid UTF-8 ({exc.reason})") from exc


def read_document(path: PathLike) -> LoadedDocument:
    """Load ``path`` according to its extension.

    ``.docx`` falls back to readable-text extraction when the package is
    malformed and reports that through ``LoadedDocument.warning``.
    """

    target = Path(path)
    suffix = target.suffix.lower()
    with telemetry.span(
        "shell::read_document",
        component="shell",
        metadata={"path": str(target), "kind": suffix or "txt"},
    ) as handle:
        warning = None
        if suffix == ".docx":
            data = _read_bytes(target)
            try:
                text = extract_docx_text(data)
            except DocxFormatError as exc:
                warning = f"could not read DOCX structure ({exc}); showing raw text"
                handle.add_metadata("fallback", True)
                text = extract_readable_text(data)
        elif suffix == ".doc":
            text = extract_readable_text(_read_bytes(target))
        else:
            text = _read_text(target)

        lines = split_lines(text)
        handle.add_metadata("lines", len(lines))
        if warning:
            telemetry.record_event(
                "shell.read_fallback",
                level="warning",
                data={"path": str(target), "reason": warning},
            )
        return LoadedDocument(lines=lines, path=target, warning=warning)


def write_document(path: PathLike, text: str) -> Path:
    target = Path(path)
    with telemetry.span(
        "shell::write_document",
        component="shell",
        metadata={"path": str(target), "chars": len(text)},
    ):
        try:
            with target.open("w", encoding="utf-8", newline="\n") as handle:
                handle.write(text)
        except OSError as exc:
            raise DocumentError(target, exc.strerror or str(exc)) from exc
    return target


__all__ = [
    "DocumentError",
    "LoadedDocument",
    "read_document",
    "split_lines",
    "write_document",
]

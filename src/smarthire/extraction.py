"""Plain-text extraction from uploaded resume documents."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Sequence

import docx
import pymupdf4llm

SUPPORTED_SUFFIXES: tuple[str, ...] = (".pdf", ".docx", ".txt", ".md")

# Page counters such as "Page 2 of 3" or a bare "2 / 3" emitted by PDF exporters.
_PAGE_COUNTER = re.compile(r"^\s*(?:page\s+)?\d+\s*(?:/|of)\s*\d+\s*$", re.IGNORECASE)


class UnsupportedFormatError(ValueError):
    """Raised when a resume file type has no text extractor."""

    def __init__(self, path: Path):
        super().__init__(
            f"Unsupported resume format {path.suffix or '<none>'!r}; "
            f"expected one of {', '.join(SUPPORTED_SUFFIXES)}"
        )
        self.path = path


def extract_text(
    path: str | Path,
    *,
    exclude_patterns: Sequence[str] | None = None,
) -> str:
    """Return the text of a PDF, DOCX or plain-text resume.

    Parameters
    ----------
    path:
        Path to the uploaded resume.
    exclude_patterns:
        Optional substrings; any line containing one of them is dropped
        (an optional trailing page counter like ``" 1 / 3"`` is tolerated).
        Standalone page-counter lines are always dropped.
    """

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)

    suffix = path.suffix.lower()
    if suffix == ".pdf":
        raw = pymupdf4llm.to_markdown(str(path))
    elif suffix == ".docx":
        raw = _docx_text(path)
    elif suffix in (".txt", ".md"):
        raw = path.read_text(encoding="utf-8", errors="replace")
    else:
        raise UnsupportedFormatError(path)

    return _clean_lines(raw, _build_patterns(exclude_patterns or ()))


def _docx_text(path: Path) -> str:
    document = docx.Document(str(path))
    lines = [paragraph.text for paragraph in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            lines.append(" | ".join(cell.text for cell in row.cells))
    return "\n".join(lines)


def _clean_lines(text: str, patterns: list[re.Pattern[str]]) -> str:
    cleaned_lines: list[str] = []
    for line in text.splitlines():
        if not line.strip():
            cleaned_lines.append(line)
            continue
        if _PAGE_COUNTER.match(line):
            continue
        if any(pattern.search(line) for pattern in patterns):
            continue
        cleaned_lines.append(line)
    return "\n".join(cleaned_lines).strip()


def _build_patterns(excludes: Iterable[str]) -> list[re.Pattern[str]]:
    patterns: list[re.Pattern[str]] = []
    for text in excludes:
        escaped = re.escape(text)
        pattern = re.compile(rf"{escaped}(?:\s+\d+\s*/\s*\d+)?")
        patterns.append(pattern)
    return patterns


__all__ = ["SUPPORTED_SUFFIXES", "UnsupportedFormatError", "extract_text"]

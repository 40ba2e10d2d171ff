# resume_qa/documents.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

from docx import Document as DocxDocument
from pypdf import PdfReader

from resume_qa.errors import DocumentLoadError, UnsupportedFormat

RESUME = "resume"
PERSONAL = "personal"

# (base name, domain) in the order documents are indexed
DOCUMENT_BASES: list[tuple[str, str]] = [
    ("resume", RESUME),
    ("profile", PERSONAL),
    ("personal", PERSONAL),
    ("about", PERSONAL),
    ("bio", PERSONAL),
    ("interests", PERSONAL),
]


class SourceFormat(str, Enum):
    PDF = ".pdf"
    DOCX = ".docx"
    MARKDOWN = ".md"
    TEXT = ".txt"

    @classmethod
    def from_path(cls, path: Path) -> "SourceFormat":
        ext = path.suffix.lower()
        try:
            return cls(ext)
        except ValueError:
            raise UnsupportedFormat(str(path), ext) from None


# first existing extension wins for a given base name
EXTENSION_PRIORITY = [SourceFormat.PDF, SourceFormat.DOCX, SourceFormat.MARKDOWN, SourceFormat.TEXT]


@dataclass(frozen=True)
class SourceDocument:
    text: str
    source: str  # file name, shown next to citations
    domain: str


def read_text_safely(path: Path) -> str:
    """
    Read file bytes and decode safely:
    - Try UTF-8 first
    - Fall back to cp1252 (common Windows source of mojibake)
    """
    raw = path.read_bytes()
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("cp1252", errors="replace")


def extract_pdf(path: Path) -> str:
    reader = PdfReader(str(path))
    pages = [(page.extract_text() or "") for page in reader.pages]
    return "\n\n".join(pages)


def extract_docx(path: Path) -> str:
    doc = DocxDocument(str(path))
    return "\n\n".join(p.text for p in doc.paragraphs if p.text.strip())


EXTRACTORS: dict[SourceFormat, Callable[[Path], str]] = {
    SourceFormat.PDF: extract_pdf,
    SourceFormat.DOCX: extract_docx,
    SourceFormat.MARKDOWN: read_text_safely,
    SourceFormat.TEXT: read_text_safely,
}


def extract_text(path: Path) -> str:
    fmt = SourceFormat.from_path(path)
    return EXTRACTORS[fmt](path)


def load_documents(data_dir: Path) -> list[SourceDocument]:
    """
    Looks for data_dir/<base>.<ext> for every known base name.
    Only the first matching extension per base is read; the rest are ignored.
    """
    docs: list[SourceDocument] = []

    for base, domain in DOCUMENT_BASES:
        for fmt in EXTENSION_PRIORITY:
            path = data_dir / f"{base}{fmt.value}"
            if not path.exists():
                continue
            docs.append(SourceDocument(text=extract_text(path), source=path.name, domain=domain))
            break

    if not docs:
        raise DocumentLoadError(
            f"No documents found in {data_dir}. Place files under it: resume.(pdf|docx|md|txt) "
            "and optionally profile|personal|about|bio|interests with supported extensions."
        )
    return docs

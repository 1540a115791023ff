"""Loading of already-extracted document text."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from models import DocumentMetadata

SUPPORTED_EXTENSIONS = {".txt", ".text", ".html", ".htm", ".xml", ".js"}
# Text extractors such as pdftotext separate pages with a form feed.
PAGE_SEPARATOR = "\f"


@dataclass(frozen=True)
class ExtractedDocument:
    """Plain text and metadata of one document."""

    text: str
    metadata: DocumentMetadata


def count_pages(text: str) -> int:
    """Count pages delimited by form feeds, ignoring a trailing one."""
    if not text:
        return 1
    return text.rstrip(PAGE_SEPARATOR).count(PAGE_SEPARATOR) + 1


def document_from_text(text: str, document_info: dict[str, str] | None = None) -> ExtractedDocument:
    """Wrap in-memory text as a document."""
    metadata = DocumentMetadata(
        page_count=count_pages(text),
        content_length=len(text),
        document_info=dict(document_info or {}),
    )
    return ExtractedDocument(text=text, metadata=metadata)


def load_document(path: str | Path) -> ExtractedDocument:
    """Read an extracted text file from disk.

    Args:
        path: File to read.

    Returns:
        The decoded text with page count and file info.

    Raises:
        FileNotFoundError: If the path does not exist.
        IsADirectoryError: If the path is a directory.
        ValueError: If the extension is unsupported or the file is not UTF-8.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")
    if file_path.is_dir():
        raise IsADirectoryError(f"Path is a directory: {file_path}")
    if file_path.suffix.lower() not in SUPPORTED_EXTENSIONS:
        supported = ", ".join(sorted(SUPPORTED_EXTENSIONS))
        raise ValueError(f"Unsupported file type '{file_path.suffix}'; expected one of: {supported}")

    raw = file_path.read_bytes()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ValueError(f"File is not valid UTF-8 text: {file_path} ({exc.reason})") from exc

    return document_from_text(
        text,
        {"fileName": file_path.name, "fileSize": str(len(raw))},
    )

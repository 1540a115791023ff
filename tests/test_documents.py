"""Tests for loading extracted document text."""

from pathlib import Path

import pytest

from pdfxss.documents import count_pages, document_from_text, load_document


def test_load_document_reads_text_and_metadata(tmp_path: Path) -> None:
    """Verify text, page count and file info are returned."""
    sample = tmp_path / "report.HTML"
    sample.write_text("first page\fsecond page\fthird page", encoding="utf-8")

    document = load_document(sample)

    assert document.text.startswith("first page")
    assert document.metadata.page_count == 3
    assert document.metadata.content_length == len(document.text)
    assert document.metadata.document_info == {
        "fileName": "report.HTML",
        "fileSize": str(sample.stat().st_size),
    }


def test_load_document_raises_when_path_does_not_exist(tmp_path: Path) -> None:
    """Verify missing path raises a clear FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_document(tmp_path / "missing.txt")


def test_load_document_rejects_directories(tmp_path: Path) -> None:
    """Verify a directory is not read as a document."""
    folder = tmp_path / "folder.txt"
    folder.mkdir()

    with pytest.raises(IsADirectoryError):
        load_document(folder)


def test_load_document_rejects_unsupported_extension(tmp_path: Path) -> None:
    """Verify only extracted text formats are accepted."""
    sample = tmp_path / "scan.docx"
    sample.write_bytes(b"PK\x03\x04")

    with pytest.raises(ValueError, match="Unsupported file type"):
        load_document(sample)


def test_load_document_rejects_invalid_utf8(tmp_path: Path) -> None:
    """Verify undecodable bytes raise ValueError."""
    sample = tmp_path / "broken.txt"
    sample.write_bytes(b"\xff\xfe\xfa")

    with pytest.raises(ValueError, match="not valid UTF-8"):
        load_document(sample)


def test_count_pages() -> None:
    """Verify form feeds delimit pages and a trailing one is ignored."""
    assert count_pages("") == 1
    assert count_pages("single") == 1
    assert count_pages("a\fb") == 2
    assert count_pages("a\fb\f") == 2


def test_document_from_text_copies_info() -> None:
    """Verify in-memory documents get their own info mapping."""
    info = {"Producer": "test"}
    document = document_from_text("abc", info)
    info["Producer"] = "changed"

    assert document.metadata.document_info == {"Producer": "test"}
    assert document.metadata.content_length == 3

"""Tests for upload validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from screenshot_analyzer.models import UploadCandidate
from screenshot_analyzer.validation import (
    FILE_TOO_LARGE_MESSAGE,
    MAX_FILE_SIZE,
    SUPPORTED_FORMATS,
    UNSUPPORTED_FORMAT_MESSAGE,
    candidate_for_file,
    validate,
    validate_candidate,
    validate_file,
)


@pytest.mark.parametrize("media_type", sorted(SUPPORTED_FORMATS))
def test_supported_formats_within_limit_are_valid(media_type: str) -> None:
    outcome = validate(media_type, 1024)
    assert outcome.valid is True
    assert outcome.reason is None
    assert outcome.message is None
    assert bool(outcome) is True


def test_size_limit_is_inclusive() -> None:
    assert MAX_FILE_SIZE == 5_242_880
    assert validate("image/png", MAX_FILE_SIZE).valid is True
    assert validate("image/png", 0).valid is True


def test_oversized_file_is_rejected_with_size_reason() -> None:
    outcome = validate("image/webp", MAX_FILE_SIZE + 1)
    assert outcome.valid is False
    assert outcome.reason == "file_too_large"
    assert outcome.message == FILE_TOO_LARGE_MESSAGE


@pytest.mark.parametrize(
    "media_type",
    ["image/bmp", "IMAGE/PNG", "image/png; charset=binary", "image/*", "application/pdf", ""],
)
def test_unlisted_media_types_are_rejected(media_type: str) -> None:
    outcome = validate(media_type, 10)
    assert outcome.valid is False
    assert outcome.reason == "unsupported_format"
    assert outcome.message == UNSUPPORTED_FORMAT_MESSAGE


def test_format_rejection_wins_over_size_rejection() -> None:
    outcome = validate("image/tiff", MAX_FILE_SIZE * 10)
    assert outcome.reason == "unsupported_format"


def test_validate_candidate_delegates_to_validate() -> None:
    outcome = validate_candidate(UploadCandidate(media_type="image/gif", byte_size=MAX_FILE_SIZE + 1))
    assert outcome.reason == "file_too_large"


def test_candidate_for_file_reads_type_and_size(png_file: Path) -> None:
    candidate = candidate_for_file(png_file)
    assert candidate.media_type == "image/png"
    assert candidate.byte_size == png_file.stat().st_size


def test_validate_file_accepts_small_png(png_file: Path) -> None:
    assert validate_file(png_file).valid is True


def test_validate_file_rejects_unknown_extension(tmp_path: Path) -> None:
    path = tmp_path / "notes.unknownext"
    path.write_bytes(b"data")
    outcome = validate_file(path)
    assert outcome.reason == "unsupported_format"


def test_validate_file_recognizes_webp(tmp_path: Path) -> None:
    path = tmp_path / "shot.webp"
    path.write_bytes(b"RIFF")
    assert validate_file(path).valid is True


def test_validate_file_rejects_large_jpeg(tmp_path: Path) -> None:
    path = tmp_path / "big.jpg"
    path.write_bytes(b"\0" * (MAX_FILE_SIZE + 1))
    assert validate_file(path).reason == "file_too_large"


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        validate_file(tmp_path / "missing.png")

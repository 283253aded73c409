"""
Upload Validation

Checks a screenshot's media type and size before it is sent to a
vision provider. Format is checked before size and only the first
failing check is reported.
"""

import mimetypes
from pathlib import Path
from typing import Optional, Union

from .models import UploadCandidate, ValidationOutcome

SUPPORTED_FORMATS = frozenset({
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
})

MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB

UNSUPPORTED_FORMAT_MESSAGE = "Unsupported file format. Please use JPEG, PNG, GIF, or WebP."
FILE_TOO_LARGE_MESSAGE = "File size exceeds 5MB limit."

# Not registered by every platform's mimetypes table
mimetypes.add_type("image/webp", ".webp")


def validate(media_type: str, byte_size: int) -> ValidationOutcome:
    """
    Check an upload against the format allow-list and size limit.

    The media type must match the allow-list exactly (case-sensitive,
    no parameters). The size limit is inclusive.

    Args:
        media_type: Declared MIME type of the file
        byte_size: File size in bytes

    Returns:
        ValidationOutcome with valid=True, or the first rejection reason

    Example:
        outcome = validate("image/png", 1024)
        if not outcome.valid:
            print(outcome.message)
    """
    if media_type not in SUPPORTED_FORMATS:
        return ValidationOutcome(
            valid=False,
            reason="unsupported_format",
            message=UNSUPPORTED_FORMAT_MESSAGE,
        )
    if byte_size > MAX_FILE_SIZE:
        return ValidationOutcome(
            valid=False,
            reason="file_too_large",
            message=FILE_TOO_LARGE_MESSAGE,
        )
    return ValidationOutcome(valid=True)


def validate_candidate(candidate: UploadCandidate) -> ValidationOutcome:
    """Validate an UploadCandidate record"""
    return validate(candidate.media_type, candidate.byte_size)


def guess_media_type(path: Union[str, Path]) -> Optional[str]:
    """Guess a file's MIME type from its name"""
    media_type, _ = mimetypes.guess_type(str(path))
    return media_type


def candidate_for_file(path: Union[str, Path]) -> UploadCandidate:
    """
    Build an UploadCandidate from a file on disk.

    The media type comes from the file name and the size from the
    file system. Unknown extensions get an empty media type, which
    the allow-list rejects.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Screenshot not found: {path}")
    return UploadCandidate(
        media_type=guess_media_type(path) or "",
        byte_size=path.stat().st_size,
    )


def validate_file(path: Union[str, Path]) -> ValidationOutcome:
    """Validate a file on disk against the upload policy"""
    return validate_candidate(candidate_for_file(path))

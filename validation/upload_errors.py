from enum import IntEnum
from typing import Callable, Optional, Union

from validation.constraint import FileConstraint
from validation.violations import Violation, ViolationKind


class UploadError(IntEnum):
    """Why receiving an upload failed. Values follow the common CGI/PHP codes."""

    OK = 0
    INI_SIZE = 1  # Larger than the server's upload ceiling
    FORM_SIZE = 2  # Larger than the client-declared form ceiling
    PARTIAL = 3
    NO_FILE = 4
    NO_TMP_DIR = 6
    CANT_WRITE = 7
    EXTENSION = 8  # Stopped by a server-side upload filter


def _ini_size(constraint: FileConstraint, max_filesize: int) -> Violation:
    # No file on disk yet, so only the configured ceilings can be reported
    if constraint.max_size is not None:
        limit = min(max_filesize, constraint.max_size)
    else:
        limit = max_filesize

    return Violation(
        kind=ViolationKind.UPLOAD_INI_SIZE,
        template=constraint.upload_ini_size_error_message,
        parameters={"limit": limit, "suffix": "bytes"},
    )


def _fixed(kind: ViolationKind, message_field: str) -> Callable[[FileConstraint, int], Violation]:
    def build(constraint: FileConstraint, max_filesize: int) -> Violation:
        return Violation(kind=kind, template=getattr(constraint, message_field))

    return build


UPLOAD_ERROR_MAPPERS: dict[UploadError, Callable[[FileConstraint, int], Violation]] = {
    UploadError.INI_SIZE: _ini_size,
    UploadError.FORM_SIZE: _fixed(ViolationKind.UPLOAD_FORM_SIZE, "upload_form_size_error_message"),
    UploadError.PARTIAL: _fixed(ViolationKind.UPLOAD_PARTIAL, "upload_partial_error_message"),
    UploadError.NO_FILE: _fixed(ViolationKind.UPLOAD_NO_FILE, "upload_no_file_error_message"),
    UploadError.NO_TMP_DIR: _fixed(ViolationKind.UPLOAD_NO_TMP_DIR, "upload_no_tmp_dir_error_message"),
    UploadError.CANT_WRITE: _fixed(ViolationKind.UPLOAD_CANT_WRITE, "upload_cant_write_error_message"),
    UploadError.EXTENSION: _fixed(ViolationKind.UPLOAD_EXTENSION, "upload_extension_error_message"),
}


def map_upload_error(
    error: Union[UploadError, int],
    constraint: FileConstraint,
    max_filesize: int,
) -> Violation:
    """Translate an upload failure code into a single violation.

    Args:
        error: Upload error code. Unknown integers are allowed.
        constraint: Supplies the message templates and ``max_size``.
        max_filesize: Server-side upload ceiling in bytes.

    Returns:
        The violation for this failure. Unrecognized codes get the generic
        upload message with ``code`` set to the raw value.
    """
    kind = _as_upload_error(error)
    mapper = UPLOAD_ERROR_MAPPERS.get(kind) if kind is not None else None

    if mapper is None:
        return Violation(
            kind=ViolationKind.UPLOAD_ERROR,
            template=constraint.upload_error_message,
            code=int(error),
        )

    return mapper(constraint, max_filesize)


def _as_upload_error(error: Union[UploadError, int]) -> Optional[UploadError]:
    try:
        return UploadError(error)
    except ValueError:
        return None

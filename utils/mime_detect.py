import os
from typing import Optional, Union

import magic


def detect_mime_type(data: bytes) -> Optional[str]:
    """Detect a MIME type from file content via libmagic.

    Never trusts file extensions or client-declared Content-Type.

    Args:
        data: File content, or a leading slice of it.

    Returns:
        MIME type string, or None when there is nothing to sniff.
    """
    if not data:
        return None
    return magic.from_buffer(data, mime=True)


def detect_file_mime_type(path: Union[str, os.PathLike]) -> Optional[str]:
    """Detect the MIME type of a file on disk.

    libmagic reads as far into the file as its rules need (OOXML documents
    are told apart from plain ZIP archives by their entries).

    Returns:
        MIME type string, or None for an empty file.
    """
    if os.path.getsize(path) == 0:
        return None
    return magic.from_file(os.fspath(path), mime=True)

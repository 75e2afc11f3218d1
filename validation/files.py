import os
from functools import cached_property
from typing import Optional, Union

from config import settings
from utils.file_metadata import FileMetadataAccessor, local_metadata
from validation.upload_errors import UploadError


class File:
    """A file on disk. Size and MIME type are read lazily."""

    def __init__(
        self,
        path: Union[str, os.PathLike],
        metadata: Optional[FileMetadataAccessor] = None,
    ):
        self.pathname = os.fspath(path)
        self._metadata = metadata or local_metadata

    @property
    def size(self) -> int:
        return self._metadata.size_bytes(self.pathname)

    @cached_property
    def mime_type(self) -> Optional[str]:
        return self._metadata.mime_type(self.pathname)

    def __fspath__(self) -> str:
        return self.pathname

    def __str__(self) -> str:
        return self.pathname

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.pathname!r})"


class UploadedFile(File):
    """A file received over HTTP, possibly with a failed transfer.

    When ``error`` is anything but ``UploadError.OK`` the path may not
    point at a usable file.
    """

    def __init__(
        self,
        path: Union[str, os.PathLike],
        original_name: str = "",
        client_mime_type: Optional[str] = None,
        error: Union[UploadError, int] = UploadError.OK,
        metadata: Optional[FileMetadataAccessor] = None,
    ):
        super().__init__(path, metadata)
        self.original_name = original_name
        self.client_mime_type = client_mime_type
        self.error = error

    def is_valid(self) -> bool:
        return self.error == UploadError.OK

    @staticmethod
    def get_max_filesize() -> int:
        """Server-side upload ceiling in bytes."""
        return settings.upload_max_filesize_bytes

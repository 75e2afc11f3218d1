import os
from typing import Optional, Protocol

from utils.mime_detect import detect_file_mime_type


class FileMetadataAccessor(Protocol):
    """Filesystem queries the validator depends on."""

    def exists(self, path: str) -> bool: ...

    def is_readable(self, path: str) -> bool: ...

    def size_bytes(self, path: str) -> int: ...

    def mime_type(self, path: str) -> Optional[str]: ...


class LocalFileMetadata:
    """FileMetadataAccessor backed by the local filesystem."""

    def exists(self, path: str) -> bool:
        # Regular files only; directories and missing paths are "not found"
        return os.path.isfile(path)

    def is_readable(self, path: str) -> bool:
        return os.access(path, os.R_OK)

    def size_bytes(self, path: str) -> int:
        return os.path.getsize(path)

    def mime_type(self, path: str) -> Optional[str]:
        return detect_file_mime_type(path)


# Module-level singleton
local_metadata = LocalFileMetadata()

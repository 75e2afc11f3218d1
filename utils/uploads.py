import os
import tempfile
from typing import Optional

from fastapi import UploadFile

from config import settings
from utils.logging import get_logger
from validation.files import UploadedFile
from validation.upload_errors import UploadError

logger = get_logger("uploads")


async def receive_upload(
    upload: Optional[UploadFile],
    form_max_size: Optional[int] = None,
) -> UploadedFile:
    """Stream an incoming upload into the temp dir.

    Transfer problems are not raised. They are recorded on the returned
    UploadedFile as an ``UploadError`` so the validator can report them.

    Args:
        upload: Multipart file field, or None if the form had none.
        form_max_size: Client-declared ceiling (MAX_FILE_SIZE form field).

    Returns:
        UploadedFile pointing at the stored copy (or at nothing, on error).
    """
    if upload is None or not upload.filename:
        return _failed("", None, UploadError.NO_FILE)

    name = upload.filename
    client_type = upload.content_type

    extension = os.path.splitext(name)[1].lower().lstrip(".")
    if extension and extension in settings.blocked_extensions:
        return _failed(name, client_type, UploadError.EXTENSION)

    tmp_dir = settings.upload_tmp_dir
    if not os.path.isdir(tmp_dir):
        return _failed(name, client_type, UploadError.NO_TMP_DIR)

    try:
        fd, path = tempfile.mkstemp(prefix="filegate-", dir=tmp_dir)
    except OSError:
        logger.warning(
            "Cannot create temporary upload file",
            exc_info=True,
            extra={"context": {"tmp_dir": tmp_dir}},
        )
        return _failed(name, client_type, UploadError.CANT_WRITE)

    error = UploadError.OK
    received = 0
    try:
        with os.fdopen(fd, "wb") as out:
            while True:
                chunk = await upload.read(settings.upload_chunk_size)
                if not chunk:
                    break
                received += len(chunk)
                if received > settings.upload_max_filesize_bytes:
                    error = UploadError.INI_SIZE
                    break
                if form_max_size is not None and received > form_max_size:
                    error = UploadError.FORM_SIZE
                    break
                out.write(chunk)
    except OSError:
        logger.warning(
            "Failed writing upload to disk",
            exc_info=True,
            extra={"context": {"path": path, "received": received}},
        )
        error = UploadError.CANT_WRITE

    if error == UploadError.OK and upload.size is not None and upload.size != received:
        error = UploadError.PARTIAL

    if error != UploadError.OK:
        _remove(path)
        return _failed(name, client_type, error)

    return UploadedFile(path, original_name=name, client_mime_type=client_type)


def discard_upload(uploaded: UploadedFile) -> None:
    """Delete the stored copy of an upload, if one was kept."""
    if uploaded.is_valid() and uploaded.pathname:
        _remove(uploaded.pathname)


def _failed(name: str, client_type: Optional[str], error: UploadError) -> UploadedFile:
    logger.info(
        f"Upload failed: {error.name}",
        extra={"context": {"filename": name, "error": int(error)}},
    )
    return UploadedFile("", original_name=name, client_mime_type=client_type, error=error)


def _remove(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass

import re
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

SIZE_FACTORS = {
    "": 1,
    "k": 1000,
    "M": 1000 * 1000,
    "Ki": 1024,
    "Mi": 1024 * 1024,
}

_MAX_SIZE_PATTERN = re.compile(r"^(\d+)(k|M|Ki|Mi)?$")


def parse_max_size(value: Union[int, str]) -> tuple[int, bool]:
    """Normalize a size limit such as ``"500k"`` or ``"2Mi"`` to bytes.

    Returns:
        Tuple of (bytes, suffix_is_binary).

    Raises:
        ValueError: If the value is negative or not a recognized size.
    """
    if isinstance(value, bool):
        raise ValueError(f'"{value}" is not a valid maximum size')
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f'"{value}" is not a valid maximum size')
        return value, False

    match = _MAX_SIZE_PATTERN.match(str(value).strip())
    if not match:
        raise ValueError(f'"{value}" is not a valid maximum size')

    number, unit = match.group(1), match.group(2) or ""
    return int(number) * SIZE_FACTORS[unit], len(unit) == 2


class FileConstraint(BaseModel):
    """Declarative rules a file must satisfy.

    ``max_size`` is always held in raw bytes. Strings with a ``k``/``M``
    suffix are decimal, ``Ki``/``Mi`` are binary; when ``binary_format``
    is not given it follows the suffix.
    """

    model_config = ConfigDict(frozen=True)

    max_size: Optional[int] = None
    binary_format: bool = False
    mime_types: tuple[str, ...] = ()
    disallow_empty: bool = False

    # --- Message templates ---
    not_found_message: str = "The file could not be found."
    not_readable_message: str = "The file is not readable."
    max_size_message: str = (
        "The file is too large ({{ size }} {{ suffix }}). "
        "Allowed maximum size is {{ limit }} {{ suffix }}."
    )
    mime_types_message: str = (
        "The mime type of the file is invalid ({{ type }}). "
        "Allowed mime types are {{ types }}."
    )
    disallow_empty_message: str = "An empty file is not allowed."

    upload_ini_size_error_message: str = (
        "The file is too large. Allowed maximum size is {{ limit }} {{ suffix }}."
    )
    upload_form_size_error_message: str = "The file is too large."
    upload_partial_error_message: str = "The file was only partially uploaded."
    upload_no_file_error_message: str = "No file was uploaded."
    upload_no_tmp_dir_error_message: str = "No temporary folder was configured."
    upload_cant_write_error_message: str = "Cannot write temporary file to disk."
    upload_extension_error_message: str = "A server extension caused the upload to fail."
    upload_error_message: str = "The file could not be uploaded."

    @model_validator(mode="before")
    @classmethod
    def _normalize_max_size(cls, data):
        if not isinstance(data, dict):
            return data

        data = dict(data)
        binary_suffix = False
        if data.get("max_size") is not None:
            data["max_size"], binary_suffix = parse_max_size(data["max_size"])
        if data.get("binary_format") is None:
            data["binary_format"] = binary_suffix
        return data

    @field_validator("mime_types", mode="before")
    @classmethod
    def _coerce_mime_types(cls, value):
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return tuple(value)

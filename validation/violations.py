from enum import Enum
from typing import Any, Iterable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ViolationKind(str, Enum):
    NOT_FOUND = "not_found"
    NOT_READABLE = "not_readable"
    EMPTY = "empty"
    TOO_LARGE = "too_large"
    MIME_TYPE = "mime_type"
    UPLOAD_INI_SIZE = "upload_ini_size"
    UPLOAD_FORM_SIZE = "upload_form_size"
    UPLOAD_PARTIAL = "upload_partial"
    UPLOAD_NO_FILE = "upload_no_file"
    UPLOAD_NO_TMP_DIR = "upload_no_tmp_dir"
    UPLOAD_CANT_WRITE = "upload_cant_write"
    UPLOAD_EXTENSION = "upload_extension"
    UPLOAD_ERROR = "upload_error"


class Violation(BaseModel):
    """A single failed check, ready to be rendered by the caller."""

    model_config = ConfigDict(frozen=True)

    kind: ViolationKind
    template: str
    parameters: dict[str, Union[str, int]] = Field(default_factory=dict)
    code: Optional[int] = None

    @property
    def message(self) -> str:
        """Template with every ``{{ name }}`` placeholder substituted."""
        rendered = self.template
        for name, value in self.parameters.items():
            rendered = rendered.replace("{{ %s }}" % name, str(value))
        return rendered


def format_value(value: Any) -> str:
    """Render a parameter value for display inside a message."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f'"{value}"'
    return str(value)


def format_values(values: Iterable[Any]) -> str:
    return ", ".join(format_value(v) for v in values)

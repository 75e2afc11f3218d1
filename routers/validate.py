import json

from fastapi import APIRouter, File, Form, UploadFile
from pydantic import ValidationError

from exceptions import BadRequestError
from schemas import ValidationResponse, ViolationOut
from utils.uploads import discard_upload, receive_upload
from validation.constraint import FileConstraint
from validation.file_validator import file_validator

router = APIRouter()


@router.post("/validate", response_model=ValidationResponse)
async def validate(
    file: UploadFile | None = File(None),
    constraint: str | None = Form(None),
    max_file_size: int | None = Form(None, alias="MAX_FILE_SIZE"),
):
    """Validate an uploaded file against a constraint.

    Multipart fields:
    1. file: the upload
    2. constraint: optional JSON object of FileConstraint fields
    3. MAX_FILE_SIZE: optional client-declared size ceiling in bytes
    """
    file_constraint = _parse_constraint(constraint)

    uploaded = await receive_upload(file, form_max_size=max_file_size)
    try:
        violations = file_validator.validate(uploaded, file_constraint)
    finally:
        discard_upload(uploaded)

    return ValidationResponse(
        valid=not violations,
        filename=uploaded.original_name or None,
        violations=[
            ViolationOut(
                kind=v.kind.value,
                message=v.message,
                template=v.template,
                parameters=v.parameters,
                code=v.code,
            )
            for v in violations
        ],
    )


def _parse_constraint(constraint_str: str | None) -> FileConstraint:
    """Parse the 'constraint' form field JSON string."""
    if not constraint_str:
        return FileConstraint()

    try:
        data = json.loads(constraint_str)
    except json.JSONDecodeError as e:
        raise BadRequestError(f"Invalid JSON in 'constraint' field: {e}")

    if not isinstance(data, dict):
        raise BadRequestError("'constraint' field must be a JSON object")

    try:
        return FileConstraint(**data)
    except ValidationError as e:
        raise BadRequestError(
            "Invalid constraint",
            errors=[err["msg"] for err in e.errors()],
        )

import inspect
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Union

from exceptions import UnexpectedTypeError
from utils.file_metadata import FileMetadataAccessor, local_metadata
from utils.logging import get_logger
from validation.constraint import FileConstraint
from validation.files import File, UploadedFile
from validation.mime_match import match_mime_type
from validation.size_format import format_size_limit
from validation.upload_errors import map_upload_error
from validation.violations import Violation, ViolationKind, format_value, format_values

logger = get_logger("validation")


@dataclass(frozen=True)
class PathReference:
    """A plain path, or anything that stringifies to one."""

    path: str


@dataclass(frozen=True)
class HandleReference:
    """An object that knows its own path and (lazily) its MIME type."""

    handle: Any

    @property
    def path(self) -> str:
        return self.handle.pathname


FileReference = Union[PathReference, HandleReference]


def resolve_reference(value: Any) -> FileReference:
    """Classify a value as a path or a file handle.

    Raises:
        UnexpectedTypeError: If the value is neither.
    """
    if isinstance(value, File) or (
        _has_static_attr(value, "pathname") and _has_static_attr(value, "mime_type")
    ):
        return HandleReference(value)

    if isinstance(value, bool):
        raise UnexpectedTypeError(value, "str")

    if isinstance(value, (str, int, float)):
        return PathReference(str(value))

    if isinstance(value, (bytes, os.PathLike)):
        return PathReference(os.fsdecode(value))

    # Objects with their own __str__ stand in for their string form
    if type(value).__str__ is not object.__str__:
        return PathReference(str(value))

    raise UnexpectedTypeError(value, "str")


_MISSING = object()


def _has_static_attr(value: Any, name: str) -> bool:
    # Lookup without running properties; a lazy mime_type must not sniff yet
    return inspect.getattr_static(value, name, _MISSING) is not _MISSING


class StepOutcome(str, Enum):
    PASS = "pass"  # Continue with the next check
    ACCEPT = "accept"  # Stop, file is acceptable
    REJECT = "reject"  # Stop, a violation was recorded


@dataclass
class ValidationRun:
    """Per-call state threaded through the checks."""

    value: Any
    constraint: FileConstraint
    reference: Optional[FileReference] = None
    size: int = 0
    violations: list[Violation] = field(default_factory=list)

    @property
    def path(self) -> str:
        return self.reference.path if self.reference else ""


class FileValidator:
    """Runs a file reference through the constraint's checks in order.

    Order: presence, upload status, type, existence, readability, size,
    MIME type. Every check either passes control on or stops the run.
    An empty file is the one violation that does not stop it, so an empty
    upload can still be reported for its missing MIME type.

    Stateless apart from the injected metadata accessor; one instance can
    serve concurrent callers.
    """

    def __init__(self, metadata: Optional[FileMetadataAccessor] = None):
        self.metadata = metadata or local_metadata
        self._steps: list[Callable[[ValidationRun], StepOutcome]] = [
            self._check_presence,
            self._check_upload,
            self._resolve,
            self._check_exists,
            self._check_readable,
            self._check_size,
            self._check_mime_type,
        ]

    def validate(self, value: Any, constraint: FileConstraint) -> list[Violation]:
        """Validate ``value`` against ``constraint``.

        Args:
            value: Path, path-like, File/UploadedFile, or None.
            constraint: Rules and message templates.

        Returns:
            Violations in the order they were found. Empty if valid.

        Raises:
            UnexpectedTypeError: If ``constraint`` is not a FileConstraint
                or ``value`` cannot be read as a path or file handle.
        """
        if not isinstance(constraint, FileConstraint):
            raise UnexpectedTypeError(constraint, "FileConstraint")

        run = ValidationRun(value=value, constraint=constraint)
        outcome = StepOutcome.ACCEPT
        for step in self._steps:
            outcome = step(run)
            if outcome is not StepOutcome.PASS:
                break

        if run.violations:
            logger.info(
                f"File rejected with {len(run.violations)} violation(s)",
                extra={
                    "context": {
                        "path": run.path,
                        "kinds": [v.kind.value for v in run.violations],
                        "outcome": outcome.value,
                    }
                },
            )
        return run.violations

    # --- Steps ---

    def _check_presence(self, run: ValidationRun) -> StepOutcome:
        # Absence of a file is a job for a "required" rule, not this one
        if run.value is None or run.value == "":
            return StepOutcome.ACCEPT
        return StepOutcome.PASS

    def _check_upload(self, run: ValidationRun) -> StepOutcome:
        value = run.value
        if not isinstance(value, UploadedFile) or value.is_valid():
            return StepOutcome.PASS

        run.violations.append(
            map_upload_error(value.error, run.constraint, value.get_max_filesize())
        )
        return StepOutcome.REJECT

    def _resolve(self, run: ValidationRun) -> StepOutcome:
        try:
            run.reference = resolve_reference(run.value)
        except UnexpectedTypeError as e:
            logger.warning(e.message, extra={"context": e.details})
            raise
        return StepOutcome.PASS

    def _check_exists(self, run: ValidationRun) -> StepOutcome:
        if self.metadata.exists(run.path):
            return StepOutcome.PASS
        return self._reject(run, ViolationKind.NOT_FOUND, run.constraint.not_found_message)

    def _check_readable(self, run: ValidationRun) -> StepOutcome:
        if self.metadata.is_readable(run.path):
            return StepOutcome.PASS
        return self._reject(
            run, ViolationKind.NOT_READABLE, run.constraint.not_readable_message
        )

    def _check_size(self, run: ValidationRun) -> StepOutcome:
        constraint = run.constraint
        run.size = self.metadata.size_bytes(run.path)

        if run.size == 0:
            if constraint.disallow_empty:
                run.violations.append(
                    Violation(
                        kind=ViolationKind.EMPTY,
                        template=constraint.disallow_empty_message,
                        parameters={"file": format_value(run.path)},
                    )
                )
            # Recorded, but the MIME type is still worth checking
            return StepOutcome.PASS

        if constraint.max_size is None or run.size <= constraint.max_size:
            return StepOutcome.PASS

        formatted = format_size_limit(run.size, constraint.max_size, constraint.binary_format)
        return self._reject(
            run,
            ViolationKind.TOO_LARGE,
            constraint.max_size_message,
            size=formatted.size,
            limit=formatted.limit,
            suffix=formatted.suffix,
        )

    def _check_mime_type(self, run: ValidationRun) -> StepOutcome:
        allowed = run.constraint.mime_types
        if not allowed:
            return StepOutcome.ACCEPT

        if isinstance(run.reference, HandleReference):
            mime = run.reference.handle.mime_type
        else:
            mime = self.metadata.mime_type(run.path)

        if match_mime_type(mime, allowed):
            return StepOutcome.ACCEPT

        return self._reject(
            run,
            ViolationKind.MIME_TYPE,
            run.constraint.mime_types_message,
            type=format_value(mime),
            types=format_values(allowed),
        )

    def _reject(
        self,
        run: ValidationRun,
        kind: ViolationKind,
        template: str,
        **parameters,
    ) -> StepOutcome:
        run.violations.append(
            Violation(
                kind=kind,
                template=template,
                parameters={"file": format_value(run.path), **parameters},
            )
        )
        return StepOutcome.REJECT


# Module-level singleton
file_validator = FileValidator()

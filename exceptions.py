class FilegateError(Exception):
    """Base exception for all Filegate errors."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str, **kwargs):
        self.message = message
        self.details = kwargs
        super().__init__(message)


class BadRequestError(FilegateError):
    """Malformed request body, invalid constraint JSON, missing fields."""

    status_code = 400
    error_code = "bad_request"


class UnexpectedTypeError(FilegateError):
    """Value or constraint is not of a shape the validator can handle.

    Raised to the caller; never reported as a violation.
    """

    status_code = 500
    error_code = "unexpected_type"

    def __init__(self, value, expected: str):
        given = type(value).__name__
        super().__init__(
            f'Expected argument of type "{expected}", "{given}" given',
            expected=expected,
            given=given,
        )

import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from exceptions import FilegateError
from utils.logging import request_id_var


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Request ID injection and FilegateError responses.

    Order of operations per request:
    1. Generate request ID, expose it to handlers and log records
    2. Process request
    3. Add X-Request-ID to response
    """

    async def dispatch(self, request: Request, call_next):
        # 1. Request ID
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        try:
            # 2. Process request
            response = await call_next(request)

        except FilegateError as exc:
            response = JSONResponse(
                status_code=exc.status_code,
                content={
                    "success": False,
                    "error": exc.error_code,
                    "message": exc.message,
                    **exc.details,
                },
            )
        finally:
            request_id_var.reset(token)

        # 3. Request ID header
        response.headers["X-Request-ID"] = request_id
        return response

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from exceptions import FilegateError
from middleware import RequestIdMiddleware
from routers import health, validate
from utils.logging import get_logger, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: configure logging, verify upload dir."""
    # --- Startup ---
    setup_logging()
    logger = get_logger("main")

    checks = health.check_upload_dir()
    failing = [name for name, ok in checks.items() if not ok]
    if failing:
        logger.warning(
            f"Upload directory checks failing: {failing}",
            extra={"context": {"failing_checks": failing, "tmp_dir": settings.upload_tmp_dir}},
        )

    yield

    logger.info("Filegate shutting down")


app = FastAPI(
    title="Filegate",
    description="File Upload Validation Service",
    version=health.VERSION,
    lifespan=lifespan,
)

# CORS middleware
origins = [o.strip() for o in settings.allowed_origins.split(",")]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_methods=["POST", "OPTIONS", "GET"],
    allow_headers=["Content-Type"],
    expose_headers=["X-Request-ID"],
)

# RequestIdMiddleware handles: request ID, FilegateError responses
app.add_middleware(RequestIdMiddleware)


@app.exception_handler(FilegateError)
async def filegate_error_handler(request: Request, exc: FilegateError):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.error_code,
            "message": exc.message,
            **exc.details,
        },
    )


# Routers
app.include_router(health.router)
app.include_router(validate.router)

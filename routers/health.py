import os

from fastapi import APIRouter

from config import settings
from schemas import HealthResponse

router = APIRouter()

VERSION = "0.1.0"


def check_upload_dir() -> dict[str, bool]:
    """Check that received uploads have somewhere to go."""
    tmp_dir = settings.upload_tmp_dir
    exists = os.path.isdir(tmp_dir)
    return {
        "upload_tmp_dir": exists,
        "upload_tmp_dir_writable": exists and os.access(tmp_dir, os.W_OK),
    }


@router.get("/health", response_model=HealthResponse)
async def health():
    checks = check_upload_dir()
    all_ok = all(checks.values())
    return HealthResponse(
        status="ok" if all_ok else "degraded",
        checks=checks,
        version=VERSION,
    )

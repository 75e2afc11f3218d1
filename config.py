import tempfile

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    # --- Server ---
    port: int = 8080
    workers: int = 4

    # --- Upload Limits ---
    upload_max_filesize_mb: int = 32
    upload_max_filesize_bytes: int = 0  # Computed in model_post_init
    upload_tmp_dir: str = ""  # "" = system temp dir
    upload_chunk_size: int = 64 * 1024
    blocked_upload_extensions: str = ""  # e.g. "exe,bat,sh"

    # --- Security ---
    allowed_origins: str = "*"

    # --- Logging ---
    log_level: str = "ERROR"

    model_config = {"env_prefix": "", "case_sensitive": False}

    def model_post_init(self, __context) -> None:
        if self.upload_max_filesize_bytes == 0:
            self.upload_max_filesize_bytes = self.upload_max_filesize_mb * 1024 * 1024
        if not self.upload_tmp_dir:
            self.upload_tmp_dir = tempfile.gettempdir()

    @property
    def blocked_extensions(self) -> set[str]:
        return {
            ext.strip().lower().lstrip(".")
            for ext in self.blocked_upload_extensions.split(",")
            if ext.strip()
        }


settings = Settings()

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Ensure environment variables from the repository root .env are available
# regardless of the working directory used to start the process.
ROOT_DIR = Path(__file__).resolve().parents[1]
load_dotenv(ROOT_DIR / ".env")


class Settings(BaseSettings):
  storage_root: str = Field(default="Storage", alias="STORAGE_ROOT")
  data_dir: str = Field(default="canddocs_data", alias="CANDDOCS_DATA_DIR")
  tesseract_cmd: str | None = Field(default=None, alias="TESSERACT_CMD")
  tessdata_prefix: str | None = Field(default=None, alias="TESSDATA_PREFIX")
  ocr_language: str = Field(default="eng", alias="OCR_LANGUAGE")
  ocr_render_dpi: int = Field(default=200, alias="OCR_RENDER_DPI")
  ocr_max_image_dimension: int = Field(default=2500, alias="OCR_MAX_IMAGE_DIMENSION")
  file_retry_attempts: int = Field(default=15, alias="FILE_RETRY_ATTEMPTS")
  file_retry_delay_ms: int = Field(default=150, alias="FILE_RETRY_DELAY_MS")
  fallback_user_id: int = Field(default=2, alias="FALLBACK_USER_ID")
  batch_workers: int = Field(default=2, alias="BATCH_WORKERS")

  def retry_delay_seconds(self) -> float:
    return max(self.file_retry_delay_ms, 0) / 1000.0

  class Config:
    case_sensitive = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
  return Settings()  # type: ignore[arg-type]

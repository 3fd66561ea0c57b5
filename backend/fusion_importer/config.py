from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List


class Settings(BaseSettings):
    file_encoding: str = "utf-8"
    na_values: List[str] = ["", "NA", "NaN", "."]  # Cells treated as absent
    log_level: str = "INFO"
    max_upload_bytes: int = 50 * 1024 * 1024

    class Config:
        env_file = ".env"
        env_prefix = "FUSION_IMPORTER_"


@lru_cache()
def get_settings() -> Settings:
    return Settings()

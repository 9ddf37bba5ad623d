from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_title: str = "Sanma Hand Evaluator"
    log_level: str = "INFO"
    decomposition_limit: int = 128
    shanten_cache_size: int = 65536

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", env_prefix="SANMA_")


settings = Settings()

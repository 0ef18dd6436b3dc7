"""
Settings for micromodel, read from environment variables or a `.env` file.
"""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    db_path: str = Field(":memory:", alias="MICROMODEL_DB_PATH")
    log_level: str = Field("INFO", alias="MICROMODEL_LOG_LEVEL")
    sql_echo: bool = Field(True, alias="MICROMODEL_SQL_ECHO")
    csrf_protection: bool = Field(True, alias="MICROMODEL_CSRF_PROTECTION")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings():
    return Settings()

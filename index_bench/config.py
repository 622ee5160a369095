"""
Configuration settings for the index benchmark harness.

Uses Pydantic Settings to load environment variables for the database
connection, logging, and benchmark defaults (record count, batch size,
RNG seed, schema suite).
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    db_host: str = Field("localhost", alias="DB_HOST")
    db_port: int = Field(5432, alias="DB_PORT")
    db_user: str = Field("postgres", alias="DB_USER")
    db_password: str = Field("postgres", alias="DB_PASSWORD")
    db_name: str = Field("index_benchmark", alias="DB_NAME")
    db_connect_timeout: int = Field(10, alias="DB_CONNECT_TIMEOUT")
    # 0 disables the server-side statement timeout
    db_statement_timeout_ms: int = Field(0, alias="DB_STATEMENT_TIMEOUT_MS")

    # Application
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Benchmark defaults
    bench_records: int = Field(10_000, alias="BENCH_RECORDS", ge=0)
    bench_batch_size: int = Field(1_000, alias="BENCH_BATCH_SIZE", gt=0)
    bench_seed: Optional[int] = Field(None, alias="BENCH_SEED")
    bench_suite: str = Field("index_comparison", alias="BENCH_SUITE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]

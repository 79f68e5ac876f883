"""
Configuration settings for the graph load generator.

Uses Pydantic Settings to load environment variables for the graph store
endpoint, the runner pool, the entity dataset and logging. Every key is
optional; defaults match a local Memgraph instance.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Graph store
    host: str = Field("localhost", alias="HOST")
    port: int = Field(7687, ge=1, le=65535, alias="PORT")
    db_user: Optional[str] = Field(None, alias="DB_USER")
    db_password: Optional[str] = Field(None, alias="DB_PASSWORD")
    max_connection_lifetime: float = Field(60.0, gt=0, alias="MAX_CONNECTION_LIFETIME")
    connection_liveness_check_timeout: float = Field(
        15.0, ge=0, alias="CONNECTION_LIVENESS_CHECK_TIMEOUT"
    )

    # Load generation
    concurrency: int = Field(18, ge=1, alias="CONCURRENCY")
    timeout: float = Field(15.0, gt=0, alias="TIMEOUT")
    min_supply_chain_size: int = Field(5000, alias="MIN_SUPPLY_CHAIN_SIZE")
    data_path: Path = Field(Path("data.csv"), alias="DATA_PATH")

    # Query
    query_memory_limit_mb: int = Field(5120, ge=1, alias="QUERY_MEMORY_LIMIT_MB")
    query_result_limit: int = Field(20_000, ge=1, alias="QUERY_RESULT_LIMIT")

    # Application
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def uri(self) -> str:
        """Bolt URI of the graph store."""
        return f"bolt://{self.host}:{self.port}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]

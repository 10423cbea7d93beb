from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="TAXONOMY_",
        extra="ignore",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # API
    api_prefix: str = "/api/v1"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8000",
    ]
    trusted_hosts: list[str] = ["*"]
    root_path: str = ""

    # Storage
    storage_backend: Literal["memory", "supabase"] = "memory"

    # Supabase (only read when storage_backend == "supabase")
    supabase_url: str | None = None
    supabase_service_role_key: str | None = None
    vocabularies_table: str = "vocabularies"
    terms_table: str = "terms"

    # Dropdown options
    option_depth_marker: str = "-"  # repeated once per nesting level


settings = Settings()

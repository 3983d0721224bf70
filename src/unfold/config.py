"""Configuration management using Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="UNFOLD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Dataset
    dataset_path: str = "graph-data.json"
    root_id: str = Field(
        default="root",
        description="Node the hierarchy is rooted at and the view starts from"
    )

    # Panel bundles
    panels_base_url: str | None = Field(
        default=None,
        description="HTTP base for panel bundles; local panels_dir is used when unset"
    )
    panels_dir: str = "panels"
    panel_markup_name: str = "panel.html"
    panel_style_name: str = "panel.css"
    panel_script_name: str = "panel.py"
    panel_fetch_timeout: float | None = Field(
        default=None,
        description="Per-request timeout in seconds; None waits indefinitely"
    )
    panel_fetch_max_concurrent: int = 6

    # Presentation
    dim_opacity: float = Field(
        default=0.15,
        description="Opacity of elements outside the highlight set"
    )

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    log_level: str = "INFO"


def get_dev_settings() -> Settings:
    """Get development environment settings."""
    return Settings(
        panels_base_url=None,
        api_debug=True,
        log_level="DEBUG",
    )


def get_test_settings() -> Settings:
    """Get test environment settings."""
    return Settings(
        dataset_path="tests/fixtures/graph-data.json",
        panels_base_url=None,
        panels_dir="tests/fixtures/panels",
        panel_fetch_timeout=5.0,
    )


# Global settings instance
settings = Settings()

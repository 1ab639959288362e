"""Configuration management using Pydantic settings."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "PLANMAP"

    # Planning backend
    backend_base_url: str = "http://localhost:8000"
    request_timeout: float = 10.0

    # Viewport sync: trailing debounce after the last pan/zoom settle
    viewport_debounce_ms: int = 250

    # Mock analysis latency (seconds)
    analysis_delay_seconds: float = 2.0

    # Scenario / export
    scenario_name: str = "untitled-scenario"
    export_dir: Path = Path("./exports")

    # Initial camera (Kuala Lumpur)
    map_center_lng: float = 101.6869
    map_center_lat: float = 3.139
    map_zoom: float = 12.0
    map_width: int = 1280
    map_height: int = 800

    # Mock backend
    mock_api_host: str = "127.0.0.1"
    mock_api_port: int = 8000
    mock_api_latency: float = 0.3


settings = Settings()

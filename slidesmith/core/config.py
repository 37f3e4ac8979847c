"""
Application settings using Pydantic for validation and type safety.
All values can be overridden from environment variables or a .env file.
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration with validation."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="",
        extra="ignore",
    )
    
    # Application
    app_name: str = Field(default="Slidesmith", description="Application name")
    debug: bool = Field(default=False, description="Debug mode flag")
    
    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=7010, ge=1, le=65535, description="Server port")
    
    # Paths (relative to workspace root)
    data_dir: Path = Field(default=Path("data"), description="Data directory")
    
    @property
    def presentations_dir(self) -> Path:
        """Get the directory where autosaved presentations are written."""
        return self.data_dir / "presentations"
    
    # Autosave Configuration
    autosave_enabled: bool = Field(
        default=True,
        description="Automatically persist the document after edits"
    )
    autosave_debounce_seconds: float = Field(
        default=1.5,
        ge=0,
        le=60,
        description="Quiet period after the last edit before an autosave runs"
    )
    
    # History Configuration
    history_limit: Optional[int] = Field(
        default=100,
        ge=1,
        description="Maximum number of undo steps kept per session (None for unbounded)"
    )
    
    # Import Configuration
    max_import_bytes: int = Field(
        default=25 * 1024 * 1024,
        ge=1,
        description="Largest accepted import upload in bytes"
    )
    require_unique_ids: bool = Field(
        default=False,
        description="Reject documents with duplicate slide or element ids"
    )
    
    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )
    
    @field_validator("data_dir")
    @classmethod
    def validate_data_dir(cls, v: Path) -> Path:
        """Ensure data directory path is valid."""
        return Path(v)
    
    def ensure_directories(self) -> None:
        """Create required directories if they don't exist."""
        for dir_path in [
            self.data_dir,
            self.presentations_dir,
        ]:
            dir_path.mkdir(parents=True, exist_ok=True)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.
    
    Using lru_cache ensures settings are loaded once and reused.
    """
    return Settings()

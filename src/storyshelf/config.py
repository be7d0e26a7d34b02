"""storyshelf configuration using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    # Database (single-file SQLite, directory is usually a mounted disk)
    render_disk_path: str = "."
    database_filename: str = "stories.db"

    # Server
    host: str = "0.0.0.0"
    port: int = 8081
    static_dir: str = str(PACKAGE_DIR / "static")

    # Client
    api_base_url: str = "http://localhost:8081"
    client_timeout_seconds: int = 30

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def database_path(self) -> Path:
        """Location of the SQLite database file."""
        return Path(self.render_disk_path) / self.database_filename

    @property
    def database_url(self) -> str:
        """SQLAlchemy async URL for the story database."""
        return f"sqlite+aiosqlite:///{self.database_path}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from pathlib import Path
from typing import Optional
import logging

_logger = logging.getLogger(__name__)

# Look for .env in the project root (parent of the learnflow package),
# then fall back to the current directory
project_dir = Path(__file__).parent.parent.parent
env_path = project_dir / ".env"

if env_path.exists():
    load_dotenv(env_path, override=True)
    _logger.info(f"Loaded .env file from: {env_path}")
elif Path(".env").exists():
    load_dotenv(Path(".env"), override=True)
    _logger.info(f"Loaded .env file from: {Path('.env').absolute()}")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Remote store database
    database_url: str = "sqlite:///./learnflow.db"

    # API
    api_v1_prefix: str = "/api/v1"

    # CORS
    cors_origins: list[str] = ["*"]

    # Remote store client
    remote_base_url: str = "http://localhost:8000/api/v1"
    remote_timeout_seconds: Optional[float] = 10.0

    # Local cache file (one JSON document holding every cache key)
    cache_path: str = str(Path.home() / ".learnflow" / "cache.json")

    # Study defaults
    default_unit: str = "General"
    test_size: int = 10
    unit_test_size: int = 20
    paraphrase_test_size: int = 10

    log_level: str = "INFO"

    @property
    def sqlalchemy_database_url(self) -> str:
        """Database URL normalised for SQLAlchemy (postgres:// -> postgresql://)."""
        if self.database_url.startswith("postgres://"):
            return self.database_url.replace("postgres://", "postgresql://", 1)
        return self.database_url


# Create settings instance
settings = Settings()

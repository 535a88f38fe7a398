# backend/sitefactory/config.py
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_PATH = Path(__file__).resolve().parent


class Settings(BaseSettings):
    # Storage
    STORAGE_BACKEND: Literal["sqlite", "supabase"] = "sqlite"
    DATA_PATH: Path = Path("data")
    DATABASE_URL: Optional[str] = None  # Defaults to a SQLite file under DATA_PATH
    MIGRATIONS_PATH: Path = PACKAGE_PATH / "migrations"
    LOG_PATH: Optional[Path] = None  # Will be set based on DATA_PATH

    # Hosted store
    SUPABASE_URL: Optional[str] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None

    # HTTP server
    HOST: str = "0.0.0.0"
    PORT: int = 8787
    RELOAD: bool = False
    CORS_ORIGIN: Optional[str] = None  # Unset means any origin

    # Upstream APIs
    UPSTREAM_TIMEOUT_SECONDS: float = 30.0

    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"

    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-1.5-flash"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"

    SEARCH_ENDPOINT: Optional[str] = None
    SEARCH_API_KEY: Optional[str] = None
    SEARCH_INDEX: Optional[str] = None
    SEARCH_API_VERSION: str = "2023-11-01"

    PEXELS_API_KEY: Optional[str] = None
    PEXELS_BASE_URL: str = "https://api.pexels.com/v1"

    # Proxy rate limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_REQUESTS: int = 5
    RATE_LIMIT_WINDOW_SECONDS: int = 60

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    def model_post_init(self, __context) -> None:
        """Post initialization hook to set derived paths"""
        if isinstance(self.DATA_PATH, str):
            self.DATA_PATH = Path(self.DATA_PATH)

        if not self.DATABASE_URL:
            self.DATABASE_URL = f"sqlite:///{self.DATA_PATH / 'sitefactory.db'}"
        self.LOG_PATH = Path(self.LOG_PATH) if self.LOG_PATH else self.DATA_PATH / "logs"

        self.create_storage_dirs()

    def create_storage_dirs(self) -> None:
        """Create necessary data directories if they don't exist"""
        for path in [self.DATA_PATH, self.LOG_PATH]:
            path.mkdir(parents=True, exist_ok=True)


settings = Settings()

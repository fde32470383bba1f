# shopfront/core/config.py
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# Signing key used when JWT_SECRET is not configured. Development only.
DEV_JWT_SECRET = "dev-secret"


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Data source:
      - DATA_SOURCE=remote (default): Supabase table first, local JSON file
        as fallback when the remote call fails.
      - DATA_SOURCE=local: only the local JSON files under DATA_DIR.

    Remote store (.env):
      - SUPABASE_URL
      - SUPABASE_KEY (anon key) or SUPABASE_SERVICE_ROLE_KEY

    Auth:
      - JWT_SECRET (falls back to a development key with a warning)
    """

    PROJECT_NAME: str = "Shopfront API"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Persistence
    DATA_SOURCE: Literal["remote", "local"] = "remote"
    DATA_DIR: Path = Path("data")
    PRODUCTS_FILE: str = "products.json"
    USERS_FILE: str = "users.json"

    # Supabase (remote document store)
    SUPABASE_URL: str | None = None
    SUPABASE_KEY: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None
    PRODUCTS_TABLE: str = "products"
    USERS_TABLE: str = "users"

    # JWT signing
    JWT_SECRET: str | None = None
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 24

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def jwt_secret(self) -> str:
        """Configured signing key, or the development default."""
        return self.JWT_SECRET or DEV_JWT_SECRET

    @property
    def uses_dev_secret(self) -> bool:
        return not self.JWT_SECRET

    @property
    def products_path(self) -> Path:
        return self.DATA_DIR / self.PRODUCTS_FILE

    @property
    def users_path(self) -> Path:
        return self.DATA_DIR / self.USERS_FILE


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )

    # Database
    database_url: str = "sqlite+aiosqlite:///./jobboard.db"
    db_timeout_seconds: float = 10.0  # per-statement / busy timeout
    db_pool_timeout_seconds: float = 10.0  # wait for a pooled connection

    # Password hashing (HASH_SECRET must be set before any hash/verify)
    hash_secret: Optional[str] = None
    argon2_time_cost: int = 3
    argon2_memory_cost: int = 65536  # KiB
    argon2_parallelism: int = 4
    argon2_hash_len: int = 32

    # Auth
    auth_header_prefix: str = "Bearer "
    allow_admin_registration: bool = False

    # App
    allowed_origins: Optional[str] = None  # comma-separated
    debug: bool = False


settings = Settings()

"""Configuration management using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_path: str = "./data/daisyauth.db"
    api_prefix: str = "/api"
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    # JWT Configuration
    # The signing key itself is never configured: each authenticator
    # generates its own random key of this many bytes at construction.
    jwt_algorithm: str = "HS512"
    jwt_expiry_seconds: int = 86400
    jwt_signing_key_bytes: int = 64

    # Drop revoked tokens from the blacklist once their own expiry has passed
    revocation_eviction: bool = False

    # Bcrypt work factor (higher = more secure but slower)
    # For tests, use 4 for faster execution while maintaining functionality
    bcrypt_work_factor: int = 12

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False
    )


settings = Settings()

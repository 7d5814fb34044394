"""
Configuration management for the Member Service
"""
from typing import List, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# passlib's own default for pbkdf2_sha256; anything lower is rejected
MIN_PASSWORD_HASH_ROUNDS = 29000

# Development fallback only; production must set SECRET_KEY
DEFAULT_SECRET_KEY = "change-this-secret-in-prod-0123456789abcdef"


class Settings(BaseSettings):
    """Member Service configuration loaded from environment variables"""

    # Server Configuration
    APP_NAME: str = "Member Service"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./members.db"
    DB_ECHO: bool = False

    # Token Configuration
    SECRET_KEY: SecretStr = SecretStr(DEFAULT_SECRET_KEY)
    JWT_ALGORITHM: str = "HS256"
    TOKEN_EXPIRE_HOURS: int = Field(24, gt=0)
    TOKEN_LEEWAY_SECONDS: int = Field(0, ge=0)

    # Password Hashing
    PASSWORD_HASH_ROUNDS: int = MIN_PASSWORD_HASH_ROUNDS

    # Membership Defaults
    MEMBERSHIP_ID_PREFIX: str = "LBK"
    DEFAULT_MEMBER_LEVEL: str = "Gold"

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )

    @field_validator("PASSWORD_HASH_ROUNDS")
    @classmethod
    def validate_hash_rounds(cls, v: int) -> int:
        """Refuse a hashing cost weaker than the library default"""
        if v < MIN_PASSWORD_HASH_ROUNDS:
            raise ValueError(
                f"PASSWORD_HASH_ROUNDS must be at least {MIN_PASSWORD_HASH_ROUNDS}"
            )
        return v

    @property
    def uses_default_secret(self) -> bool:
        return self.SECRET_KEY.get_secret_value() == DEFAULT_SECRET_KEY


# Global settings instance
settings = Settings()

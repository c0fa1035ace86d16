import secrets
import warnings
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings


# Insecure default values that should never be used in production
INSECURE_JWT_SECRETS = {
    "CHANGE_ME_TO_RANDOM_SECRET_KEY",
    "secret",
    "your-secret-key",
    "changeme",
    "password",
    "",
}


class Settings(BaseSettings):
    PROJECT_NAME: str = "Social Network API"
    API_PREFIX: str = ""

    # ===========================================
    # Environment Mode
    # ===========================================
    ENV: Literal["development", "production"] = "development"

    # ===========================================
    # Database
    # ===========================================
    DATABASE_URL: str = "sqlite:///./social_network.db"

    # ===========================================
    # Authentication
    # ===========================================
    JWT_SECRET_KEY: str = "CHANGE_ME_TO_RANDOM_SECRET_KEY"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440  # 24 hours

    # When False every users/thoughts/reactions route is public
    AUTH_REQUIRED: bool = False

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Comma separated list, empty uses the localhost defaults
    CORS_ORIGINS: str = ""

    @field_validator("JWT_SECRET_KEY")
    @classmethod
    def validate_jwt_secret(cls, v: str, info) -> str:
        """Validate JWT secret key for security."""
        if v in INSECURE_JWT_SECRETS:
            if info.data.get("ENV", "development") == "production":
                raise ValueError(
                    "JWT_SECRET_KEY must be set to a secure random value in production. "
                    "Generate one with: python -c \"import secrets; print(secrets.token_hex(32))\""
                )
            # Development mode: generate temporary key with warning
            warnings.warn(
                "Using auto-generated JWT_SECRET_KEY. Set JWT_SECRET_KEY in .env for production.",
                UserWarning,
            )
            return secrets.token_hex(32)

        if len(v) < 32:
            raise ValueError(
                "JWT_SECRET_KEY must be at least 32 characters long for security. "
                "Generate one with: python -c \"import secrets; print(secrets.token_hex(32))\""
            )
        return v

    @property
    def cors_origins(self) -> list[str]:
        if self.CORS_ORIGINS:
            return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]
        return [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]

    class Config:
        env_file = ".env"


settings = Settings()

from typing import Optional
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Explicitly load .env file and override existing environment variables
# This ensures that values from .env take precedence over system-wide environment variables.
load_dotenv(override=True)

class Settings(BaseSettings):
    """Base settings for the car insurance service."""

    # API settings
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Car Insurance Service"
    LOG_LEVEL: str = "INFO"

    # Database settings
    # Default values for local development, override these in .env file
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "carins"
    POSTGRES_PORT: int = 5432

    # Full connection URL, takes precedence over the POSTGRES_* values (sqlite:// works too)
    DATABASE_URL: Optional[str] = None

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    # JWT Authentication settings
    JWT_SECRET_KEY: str = "your-secret-key"  # Change this in production
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 24 hours
    JWT_COOKIE_NAME: str = "jwt-token"
    JWT_COOKIE_SECURE: bool = False

    # Password hashing
    BCRYPT_ROUNDS: int = 12

    # Background expiry scan
    POLICY_EXPIRATION_CHECK_ENABLED: bool = True
    POLICY_EXPIRATION_CHECK_SECONDS: int = 60 * 60

    model_config = {
        "case_sensitive": True,
        "env_file": ".env",
        "extra": "ignore",
    }

# Create settings instance
settings = Settings()

"""
Configuration settings for the Test & Tag reporting service
"""

import os
import sys
from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    # Required secrets - no defaults allowed
    session_secret: str
    database_url: str

    # Development database, used whenever ENVIRONMENT != production
    database_url_dev: Optional[str] = None
    environment: str = "development"

    # Token configuration
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 12 * 60
    cookie_name: str = "tagreport_session"
    cookie_secure: bool = False

    bcrypt_rounds: int = 10

    @field_validator('session_secret')
    @classmethod
    def validate_secret_strength(cls, v: str, info) -> str:
        """Enforce minimum 32-character secret keys per OWASP guidelines"""
        if len(v) < 32:
            raise ValueError(
                f"{info.field_name} must be at least 32 characters "
                f"(current: {len(v)}). Generate with: openssl rand -hex 32"
            )
        weak_patterns = ['test', 'secret', 'password', 'changeme']
        v_lower = v.lower()
        for pattern in weak_patterns:
            # Repeated pattern means a padded placeholder value
            if v_lower.count(pattern) >= 3:
                raise ValueError(f"{info.field_name} contains weak pattern")
        return v

    @field_validator('bcrypt_rounds')
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if not 4 <= v <= 31:
            raise ValueError("bcrypt_rounds must be between 4 and 31")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def active_database_url(self) -> str:
        """Connection string for the current environment"""
        if not self.is_production and self.database_url_dev:
            return self.database_url_dev
        return self.database_url

    @property
    def secure_cookies(self) -> bool:
        return self.cookie_secure or self.is_production

    class Config:
        # Do NOT use .env file in production
        env_file = None

    @classmethod
    def load_and_validate(cls):
        """Load settings and fail fast if secrets missing"""
        session_secret = os.getenv("SESSION_SECRET", "")
        database_url = os.getenv("DATABASE_URL", "")

        if not session_secret:
            print("ERROR: SESSION_SECRET is not configured")
            sys.exit(1)
        if not database_url:
            print("ERROR: DATABASE_URL is not configured")
            sys.exit(1)

        return cls(
            session_secret=session_secret,
            database_url=database_url,
            database_url_dev=os.getenv("DATABASE_URL_DEV") or None,
            environment=os.getenv("ENVIRONMENT", "development"),
        )


settings = Settings.load_and_validate()

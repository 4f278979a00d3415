"""Central configuration loaded from environment variables and a .env file."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # TOTP
    totp_issuer: str = "BI Platform"
    totp_digits: int = Field(default=6, ge=6, le=8)
    totp_period: int = Field(default=30, gt=0)
    totp_valid_window: int = Field(default=1, ge=0)
    totp_secret_bytes: int = Field(default=20, ge=16)

    # Recovery codes
    recovery_code_count: int = Field(default=10, ge=1)

    # Encryption at rest (base64-encoded 32-byte AES key)
    twofa_master_key: str = ""


settings = Settings()

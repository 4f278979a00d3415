"""Pydantic models exchanged with the persistence and HTTP layers."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class AttemptType(StrEnum):
    SETUP = "setup"
    TOTP = "totp"
    BACKUP_CODE = "backup_code"


class EnrollmentBundle(BaseModel):
    """Everything the caller needs to show and store at enrollment time."""
    secret: str
    otpauth_uri: str
    recovery_codes: list[str]


class TwoFactorRecord(BaseModel):
    """Per-user 2FA state, stored by the caller."""
    secret: str
    recovery_codes: list[str] = Field(default_factory=list)
    enabled: bool = False
    verified: bool = False
    enabled_at: datetime | None = None
    last_counter: int | None = None


class SealedTwoFactorRecord(BaseModel):
    """Storage form of ``TwoFactorRecord`` with secret and codes encrypted."""
    secret_encrypted: str
    backup_codes_encrypted: str
    enabled: bool = False
    verified: bool = False
    enabled_at: datetime | None = None
    last_counter: int | None = None


class VerifyResult(BaseModel):
    success: bool
    error: str | None = None


class TwoFactorStatus(BaseModel):
    is_enabled: bool = False
    is_verified: bool = False
    enabled_at: datetime | None = None
    recovery_codes_remaining: int = 0

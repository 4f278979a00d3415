"""Two-factor enrollment and verification over caller-owned records.

Nothing here is persisted: every operation takes a ``TwoFactorRecord`` and
returns the record the caller should store next.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from twofa.backend import CryptoBackend, resolve_backend
from twofa.config import Settings, settings as default_settings
from twofa.crypto import seal, seal_codes, unseal, unseal_codes
from twofa.models import (
    AttemptType,
    EnrollmentBundle,
    SealedTwoFactorRecord,
    TwoFactorRecord,
    TwoFactorStatus,
    VerifyResult,
)
from twofa.provisioning import build_provisioning_uri, generate_secret
from twofa.recovery import consume_recovery_code, generate_recovery_codes
from twofa.totp import match_totp

logger = logging.getLogger(__name__)

INVALID_CODE = "Invalid verification code"
INVALID_RECOVERY_CODE = "Invalid recovery code"
NOT_ENABLED = "Two-factor authentication is not enabled"
ALREADY_USED = "Verification code already used"


class TwoFactorAuthenticator:
    def __init__(
        self,
        backend: CryptoBackend | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.backend = resolve_backend(backend)
        self.settings = settings or default_settings

    def enroll(self, email: str) -> EnrollmentBundle:
        """Mint a secret, its provisioning URI and a recovery code batch."""
        secret = generate_secret(self.settings.totp_secret_bytes, backend=self.backend)
        codes = generate_recovery_codes(self.settings.recovery_code_count, backend=self.backend)
        uri = build_provisioning_uri(secret, email, issuer=self.settings.totp_issuer)
        logger.info("Started 2FA enrollment (%d recovery codes)", len(codes))
        return EnrollmentBundle(secret=secret, otpauth_uri=uri, recovery_codes=codes)

    @staticmethod
    def new_record(bundle: EnrollmentBundle) -> TwoFactorRecord:
        """Pending record for a fresh enrollment; disabled until confirmed."""
        return TwoFactorRecord(secret=bundle.secret, recovery_codes=list(bundle.recovery_codes))

    def match(self, record: TwoFactorRecord, code: str, for_time: int | None = None) -> int | None:
        """Counter matched by ``code`` under the configured window, or None."""
        return match_totp(
            record.secret,
            code,
            self.settings.totp_valid_window,
            for_time=for_time,
            digits=self.settings.totp_digits,
            period=self.settings.totp_period,
            backend=self.backend,
        )

    def confirm(
        self, record: TwoFactorRecord, code: str, for_time: int | None = None
    ) -> tuple[VerifyResult, TwoFactorRecord]:
        """Enable 2FA once the user proves their authenticator is set up."""
        counter = self.match(record, code, for_time)
        if counter is None:
            self._log_attempt(AttemptType.SETUP, False)
            return VerifyResult(success=False, error=INVALID_CODE), record

        self._log_attempt(AttemptType.SETUP, True)
        updated = record.model_copy(
            update={
                "enabled": True,
                "verified": True,
                "enabled_at": datetime.now(UTC),
                "last_counter": counter,
            }
        )
        return VerifyResult(success=True), updated

    def verify(
        self, record: TwoFactorRecord, code: str, for_time: int | None = None
    ) -> tuple[VerifyResult, TwoFactorRecord]:
        """Login-time TOTP check with replay rejection via ``last_counter``."""
        if not record.enabled:
            return VerifyResult(success=False, error=NOT_ENABLED), record

        counter = self.match(record, code, for_time)
        if counter is None:
            self._log_attempt(AttemptType.TOTP, False)
            return VerifyResult(success=False, error=INVALID_CODE), record

        if record.last_counter is not None and counter <= record.last_counter:
            logger.warning("Rejected replayed TOTP code (counter=%d)", counter)
            self._log_attempt(AttemptType.TOTP, False)
            return VerifyResult(success=False, error=ALREADY_USED), record

        self._log_attempt(AttemptType.TOTP, True)
        return VerifyResult(success=True), record.model_copy(update={"last_counter": counter})

    def verify_recovery_code(
        self, record: TwoFactorRecord, code: str
    ) -> tuple[VerifyResult, TwoFactorRecord]:
        """Accept a recovery code once and drop it from the record."""
        if not record.enabled:
            return VerifyResult(success=False, error=NOT_ENABLED), record

        remaining = consume_recovery_code(record.recovery_codes, code)
        if remaining is None:
            self._log_attempt(AttemptType.BACKUP_CODE, False)
            return VerifyResult(success=False, error=INVALID_RECOVERY_CODE), record

        self._log_attempt(AttemptType.BACKUP_CODE, True)
        logger.info("%d recovery codes remaining", len(remaining))
        return VerifyResult(success=True), record.model_copy(update={"recovery_codes": remaining})

    def disable(
        self, record: TwoFactorRecord, code: str, for_time: int | None = None
    ) -> tuple[VerifyResult, TwoFactorRecord]:
        """Turn 2FA off; requires a currently valid code."""
        result, record = self.verify(record, code, for_time)
        if not result.success:
            return result, record
        return result, record.model_copy(update={"enabled": False, "verified": False, "enabled_at": None})

    def regenerate_recovery_codes(
        self, record: TwoFactorRecord, code: str, for_time: int | None = None
    ) -> tuple[VerifyResult, TwoFactorRecord]:
        """Replace the recovery code batch; requires a currently valid code."""
        result, record = self.verify(record, code, for_time)
        if not result.success:
            return result, record
        codes = generate_recovery_codes(self.settings.recovery_code_count, backend=self.backend)
        return result, record.model_copy(update={"recovery_codes": codes})

    @staticmethod
    def status(record: TwoFactorRecord | None) -> TwoFactorStatus:
        if record is None:
            return TwoFactorStatus()
        return TwoFactorStatus(
            is_enabled=record.enabled,
            is_verified=record.verified,
            enabled_at=record.enabled_at,
            recovery_codes_remaining=len(record.recovery_codes),
        )

    def seal_record(self, record: TwoFactorRecord) -> SealedTwoFactorRecord:
        """Encrypt the secret and recovery codes with the configured master key."""
        key = self.settings.twofa_master_key
        return SealedTwoFactorRecord(
            secret_encrypted=seal(record.secret, key),
            backup_codes_encrypted=seal_codes(record.recovery_codes, key),
            **record.model_dump(exclude={"secret", "recovery_codes"}),
        )

    def unseal_record(self, sealed: SealedTwoFactorRecord) -> TwoFactorRecord:
        key = self.settings.twofa_master_key
        return TwoFactorRecord(
            secret=unseal(sealed.secret_encrypted, key),
            recovery_codes=unseal_codes(sealed.backup_codes_encrypted, key),
            **sealed.model_dump(exclude={"secret_encrypted", "backup_codes_encrypted"}),
        )

    @staticmethod
    def _log_attempt(attempt_type: AttemptType, success: bool) -> None:
        logger.info("2FA attempt type=%s success=%s", attempt_type, success)

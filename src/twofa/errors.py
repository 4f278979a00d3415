"""Exception hierarchy for the two-factor core."""

from __future__ import annotations


class TwoFactorError(Exception):
    """Base class for every error raised by twofa."""


class CryptoBackendError(TwoFactorError):
    """The platform random source or HMAC primitive is unavailable or failed.

    Never retried: a failing primitive means the environment is broken and
    any output produced around it would be insecure.
    """


class SealingError(TwoFactorError):
    """A secret could not be sealed or unsealed for storage at rest."""

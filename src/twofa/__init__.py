"""twofa — TOTP two-factor authentication core (RFC 4648 / 4226 / 6238)."""

from twofa.provisioning import build_provisioning_uri, generate_secret
from twofa.recovery import generate_recovery_codes
from twofa.totp import generate_totp, verify_totp

__version__ = "0.1.0"

__all__ = [
    "build_provisioning_uri",
    "generate_recovery_codes",
    "generate_secret",
    "generate_totp",
    "verify_totp",
]

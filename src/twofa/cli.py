"""CLI entry point for twofa.

Usage:
    python -m twofa secret                      # Mint a new Base32 secret
    python -m twofa uri SECRET user@example.com # Provisioning URI for a QR renderer
    python -m twofa code SECRET [--at TS]       # Current (or historical) code
    python -m twofa verify SECRET CODE          # Check a code within the drift window
    python -m twofa recovery-codes [-n 10]      # Mint recovery codes
    python -m twofa enroll user@example.com     # Secret + URI + recovery codes
    python -m twofa config                      # Show effective settings
"""

from __future__ import annotations

import logging
import sys

import click
from rich.console import Console

console = Console()


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """twofa — TOTP two-factor authentication toolkit."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )


@main.command()
def secret() -> None:
    """Mint a new shared secret."""
    from twofa.config import settings
    from twofa.provisioning import generate_secret

    click.echo(generate_secret(settings.totp_secret_bytes))


@main.command()
@click.argument("secret")
@click.argument("email")
@click.option("--issuer", default=None, help="Issuer label (defaults to TOTP_ISSUER).")
def uri(secret: str, email: str, issuer: str | None) -> None:
    """Print the otpauth:// provisioning URI."""
    from twofa.config import settings
    from twofa.provisioning import build_provisioning_uri

    click.echo(build_provisioning_uri(secret, email, issuer=issuer or settings.totp_issuer))


@main.command()
@click.argument("secret")
@click.option("--at", "timestamp", type=int, default=None, help="Unix timestamp (default: now).")
def code(secret: str, timestamp: int | None) -> None:
    """Print the TOTP code for SECRET."""
    from twofa.config import settings
    from twofa.totp import generate_totp

    click.echo(
        generate_totp(
            secret,
            timestamp,
            digits=settings.totp_digits,
            period=settings.totp_period,
        )
    )


@main.command()
@click.argument("secret")
@click.argument("otp")
@click.option("--window", type=int, default=None, help="Drift window in steps (defaults to TOTP_VALID_WINDOW).")
def verify(secret: str, otp: str, window: int | None) -> None:
    """Verify OTP against SECRET; exit status 1 on mismatch."""
    from twofa.config import settings
    from twofa.totp import verify_totp

    ok = verify_totp(
        secret,
        otp,
        settings.totp_valid_window if window is None else window,
        digits=settings.totp_digits,
        period=settings.totp_period,
    )
    if ok:
        console.print("[green]valid[/green]")
    else:
        console.print("[red]invalid[/red]")
        sys.exit(1)


@main.command("recovery-codes")
@click.option("-n", "--count", type=int, default=None, help="Number of codes (defaults to RECOVERY_CODE_COUNT).")
def recovery_codes(count: int | None) -> None:
    """Mint a batch of recovery codes."""
    from twofa.config import settings
    from twofa.recovery import generate_recovery_codes

    for rc in generate_recovery_codes(settings.recovery_code_count if count is None else count):
        click.echo(rc)


@main.command()
@click.argument("email")
def enroll(email: str) -> None:
    """Run a full enrollment and print the bundle as JSON."""
    from twofa.service import TwoFactorAuthenticator

    bundle = TwoFactorAuthenticator().enroll(email)
    console.print_json(bundle.model_dump_json())


@main.command()
def config() -> None:
    """Show effective configuration."""
    from twofa.config import settings

    console.print("[bold]twofa configuration[/bold]")
    console.print(f"  Issuer: {settings.totp_issuer}")
    console.print(f"  Digits: {settings.totp_digits}")
    console.print(f"  Period: {settings.totp_period}s")
    console.print(f"  Window: ±{settings.totp_valid_window} steps")
    console.print(f"  Secret size: {settings.totp_secret_bytes} bytes")
    console.print(f"  Recovery codes: {settings.recovery_code_count}")
    console.print(f"  Master key: {'set' if settings.twofa_master_key else 'not set'}")


if __name__ == "__main__":
    main()

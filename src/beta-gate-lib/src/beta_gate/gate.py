"""
beta_gate.gate — Per-request forward/redirect decision.

Rules, first match wins:
  1. Gate disabled                      -> forward
  2. Path under a public prefix         -> forward
  3. No credential cookie               -> redirect to landing page
  4. Credential verifies                -> forward
     Credential fails, or verifier errs -> clear cookie, redirect

decide() is pure in (config, path, cookie): no environment reads, no I/O
beyond the verifier call, no state kept between requests.
"""

from __future__ import annotations

from collections.abc import Mapping

from aws_lambda_powertools import Logger

from beta_gate.config import GateConfig
from beta_gate.models import GateDecision
from beta_gate.verifier import CredentialVerifier

logger = Logger(service="beta-gate")


def is_public_path(path: str, public_paths: tuple[str, ...]) -> bool:
    """True if path equals or starts with any public prefix."""
    return any(path.startswith(prefix) for prefix in public_paths)


def _credential_is_valid(verifier: CredentialVerifier, token: str, secret: str) -> bool:
    try:
        return verifier.verify(token, secret) is True
    except Exception:
        # Fail closed: an erroring verifier never grants access.
        logger.exception("Unexpected error during beta credential verification")
        return False


def decide(
    path: str,
    cookies: Mapping[str, str],
    config: GateConfig,
    verifier: CredentialVerifier,
) -> GateDecision:
    """Decide whether a request may reach the application."""
    if not config.enabled:
        return GateDecision.forward()

    if is_public_path(path, config.public_paths):
        return GateDecision.forward()

    token = cookies.get(config.cookie_name)
    if not token:
        logger.debug("No beta credential, redirecting", extra={"path": path})
        return GateDecision.redirect(config.gate_page_path)

    if _credential_is_valid(verifier, token, config.secret):
        return GateDecision.forward()

    logger.debug("Invalid beta credential, clearing cookie", extra={"path": path})
    return GateDecision.redirect(config.gate_page_path, clear_cookie=config.cookie_name)

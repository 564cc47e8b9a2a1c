"""
beta_gate.verifier — BETA_ACCESS_TOKEN signing and verification.

The gate depends only on the CredentialVerifier protocol so its decision
logic can be exercised with a fake. JwtVerifier is the production
implementation: HS256 JWTs signed with the shared secret, expiry required.
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable

import jwt
from aws_lambda_powertools import Logger

from beta_gate.exceptions import InvalidCredential
from beta_gate.models import TOKEN_ALGORITHM, TOKEN_TTL_SECONDS, TOKEN_TYPE

logger = Logger(service="beta-gate")


@runtime_checkable
class CredentialVerifier(Protocol):
    def verify(self, token: str, secret: str) -> bool: ...


def _rejection_reason(exc: jwt.InvalidTokenError) -> str:
    # InvalidSignatureError subclasses DecodeError, so it is checked first.
    if isinstance(exc, jwt.ExpiredSignatureError):
        return "expired"
    if isinstance(exc, jwt.InvalidSignatureError):
        return "bad_signature"
    if isinstance(exc, jwt.MissingRequiredClaimError):
        return "missing_claim"
    if isinstance(exc, jwt.DecodeError):
        return "malformed"
    return "invalid"


class JwtVerifier:
    """Verify BETA_ACCESS_TOKEN values with PyJWT."""

    def __init__(self, *, leeway: int = 0) -> None:
        self.leeway = leeway

    def verify_or_raise(self, token: str, secret: str) -> dict:
        """Return the decoded claims, or raise InvalidCredential."""
        try:
            return jwt.decode(
                token,
                secret,
                algorithms=[TOKEN_ALGORITHM],
                options={"require": ["exp"]},
                leeway=self.leeway,
            )
        except jwt.InvalidTokenError as e:
            raise InvalidCredential(reason=_rejection_reason(e)) from e

    def verify(self, token: str, secret: str) -> bool:
        try:
            self.verify_or_raise(token, secret)
        except InvalidCredential as e:
            logger.info("Beta access credential rejected", extra={"reason": e.reason})
            return False
        return True


def issue_token(secret: str, ttl_seconds: int = TOKEN_TTL_SECONDS, now: int | None = None) -> str:
    """Mint a signed BETA_ACCESS_TOKEN valid for ttl_seconds."""
    issued_at = int(time.time()) if now is None else now
    payload = {
        "typ": TOKEN_TYPE,
        "iat": issued_at,
        "exp": issued_at + ttl_seconds,
    }
    token: str = jwt.encode(payload, secret, algorithm=TOKEN_ALGORITHM)
    logger.info("Issued beta access token", extra={"ttl": ttl_seconds})
    return token

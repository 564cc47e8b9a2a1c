"""
beta_gate.models — Gate constants and the per-request decision type.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

# ---------------------------------------------------------------------------
# Named constants
# ---------------------------------------------------------------------------
BETA_ACCESS_COOKIE: str = "BETA_ACCESS_TOKEN"
BETA_AUTH_PATH: str = "/api/beta-auth"
GATE_PAGE_PATH: str = "/beta-gate"
FAVICON_PATH: str = "/favicon.ico"

# Order matters only for readability; any prefix match exempts the request.
DEFAULT_PUBLIC_PATHS: tuple[str, ...] = (BETA_AUTH_PATH, GATE_PAGE_PATH, FAVICON_PATH)

DEFAULT_SECRET: str = "default_beta_secret"  # pragma: allowlist secret
TOKEN_TYPE: str = "beta_access"
TOKEN_TTL_SECONDS: int = 7 * 24 * 60 * 60  # 7 days
TOKEN_ALGORITHM: str = "HS256"


class GateAction(StrEnum):
    FORWARD = "forward"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class GateDecision:
    """Outcome of gating one request.

    location is set only for REDIRECT. clear_cookie names the cookie the
    response must expire, or is None when nothing needs clearing.
    """

    action: GateAction
    location: str | None = None
    clear_cookie: str | None = None

    @classmethod
    def forward(cls) -> GateDecision:
        return cls(action=GateAction.FORWARD)

    @classmethod
    def redirect(cls, location: str, *, clear_cookie: str | None = None) -> GateDecision:
        return cls(action=GateAction.REDIRECT, location=location, clear_cookie=clear_cookie)

    @property
    def is_forward(self) -> bool:
        return self.action is GateAction.FORWARD

"""
beta_gate.config — Process-wide gate configuration.

Built once at start-up and injected into the middleware. Nothing in the
request path reads the environment.

Environment variables:
    IS_BETA             "true" enables the gate; anything else disables it.
    BETA_ACCESS_SECRET  HS256 secret for BETA_ACCESS_TOKEN. Falls back to
                        DEFAULT_SECRET when unset. Production deployments
                        MUST set it; the fallback is logged as a warning.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from aws_lambda_powertools import Logger

from beta_gate.models import (
    BETA_ACCESS_COOKIE,
    BETA_AUTH_PATH,
    DEFAULT_PUBLIC_PATHS,
    DEFAULT_SECRET,
    GATE_PAGE_PATH,
)

logger = Logger(service="beta-gate")


def _parse_flag(value: str | None) -> bool:
    return (value or "").strip().lower() == "true"


@dataclass(frozen=True)
class GateConfig:
    """Immutable gate settings.

    public_paths must keep the issuance endpoint and the landing page
    reachable, otherwise no client could ever obtain a credential.
    """

    enabled: bool
    secret: str = DEFAULT_SECRET
    public_paths: tuple[str, ...] = DEFAULT_PUBLIC_PATHS
    cookie_name: str = BETA_ACCESS_COOKIE
    gate_page_path: str = GATE_PAGE_PATH
    auth_path: str = BETA_AUTH_PATH

    def __post_init__(self) -> None:
        # Lists are accepted for convenience; the stored value is always a tuple.
        object.__setattr__(self, "public_paths", tuple(self.public_paths))
        if not self.secret:
            raise ValueError("secret must be a non-empty string")
        for required in (self.auth_path, self.gate_page_path):
            if not any(required.startswith(prefix) for prefix in self.public_paths):
                raise ValueError(
                    f"public_paths {self.public_paths!r} must cover {required!r} "
                    "or the gate locks every client out"
                )

    @property
    def uses_default_secret(self) -> bool:
        return self.secret == DEFAULT_SECRET

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> GateConfig:
        """Load configuration from the process environment (or a given mapping)."""
        env = os.environ if environ is None else environ
        enabled = _parse_flag(env.get("IS_BETA"))
        secret = env.get("BETA_ACCESS_SECRET") or DEFAULT_SECRET

        config = cls(enabled=enabled, secret=secret)
        if config.uses_default_secret:
            logger.warning(
                "BETA_ACCESS_SECRET not set, using the well-known default secret "
                "(never acceptable in production)",
                extra={"gate_enabled": enabled},
            )
        logger.info(
            "Beta gate configured",
            extra={"gate_enabled": enabled, "public_paths": list(config.public_paths)},
        )
        return config

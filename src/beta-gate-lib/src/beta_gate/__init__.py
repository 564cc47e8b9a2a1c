"""
beta_gate — Request-time access gate for the beta site.

Sits in front of the whole web application. Every request either reaches
the application or is redirected to the gate landing page, and an invalid
BETA_ACCESS_TOKEN cookie is cleared on the way out.
"""

from beta_gate.config import GateConfig
from beta_gate.exceptions import InvalidCredential
from beta_gate.gate import decide, is_public_path
from beta_gate.middleware import BetaGateMiddleware
from beta_gate.models import GateAction, GateDecision
from beta_gate.verifier import CredentialVerifier, JwtVerifier, issue_token

__all__ = [
    "BetaGateMiddleware",
    "CredentialVerifier",
    "GateAction",
    "GateConfig",
    "GateDecision",
    "InvalidCredential",
    "JwtVerifier",
    "decide",
    "is_public_path",
    "issue_token",
]

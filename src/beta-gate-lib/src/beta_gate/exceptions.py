"""
beta_gate.exceptions — Credential verification failures.
"""


class InvalidCredential(Exception):
    """
    Raised when a BETA_ACCESS_TOKEN fails verification.

    Covers every rejection the verifier makes: bad signature, malformed
    token, expired token, missing required claim.
    The gate never lets this escape to the caller; it becomes a redirect.

    Attributes:
        reason: Short machine-friendly rejection reason, safe to log.
    """

    def __init__(self, *, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid beta access credential: {reason}")

"""
beta_gate.middleware — ASGI middleware applying the gate to every request.

Usage:
    app = FastAPI()
    app.add_middleware(BetaGateMiddleware, config=GateConfig.from_env())

HTTP requests that fail the gate get a 302 to the landing page (plus an
expired Set-Cookie when the credential was invalid). WebSocket handshakes
that fail are closed with 1008 since a browser cannot follow a redirect
there. Lifespan events pass through untouched.
"""

from __future__ import annotations

from aws_lambda_powertools import Logger
from starlette.requests import HTTPConnection
from starlette.responses import RedirectResponse
from starlette.status import HTTP_302_FOUND, WS_1008_POLICY_VIOLATION
from starlette.types import ASGIApp, Receive, Scope, Send
from starlette.websockets import WebSocketClose

from beta_gate.config import GateConfig
from beta_gate.gate import decide
from beta_gate.models import GateDecision
from beta_gate.verifier import CredentialVerifier, JwtVerifier

logger = Logger(service="beta-gate")


def build_redirect(decision: GateDecision) -> RedirectResponse:
    """Translate a REDIRECT decision into the HTTP response sent to the client."""
    response = RedirectResponse(url=decision.location or "/", status_code=HTTP_302_FOUND)
    if decision.clear_cookie:
        response.delete_cookie(decision.clear_cookie, path="/")
    return response


class BetaGateMiddleware:
    def __init__(
        self,
        app: ASGIApp,
        config: GateConfig,
        verifier: CredentialVerifier | None = None,
    ) -> None:
        self.app = app
        self.config = config
        self.verifier = verifier or JwtVerifier()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        path = scope["path"]
        cookies = HTTPConnection(scope).cookies
        decision = decide(path, cookies, self.config, self.verifier)

        if decision.is_forward:
            await self.app(scope, receive, send)
            return

        if scope["type"] == "websocket":
            logger.debug("Closing gated websocket", extra={"path": path})
            await WebSocketClose(code=WS_1008_POLICY_VIOLATION)(scope, receive, send)
            return

        await build_redirect(decision)(scope, receive, send)

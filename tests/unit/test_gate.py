"""
tests/unit/test_gate.py — Decision tests for beta_gate.gate.decide.

Validates, with a fake verifier:
- Disabled gate forwards everything
- Public prefixes forward with no cookie or a bad cookie
- Missing cookie redirects without clearing anything
- Valid cookie forwards without clearing anything
- Invalid cookie redirects and clears exactly the credential cookie
- A crashing verifier fails closed
"""

from unittest.mock import MagicMock

import pytest
from beta_gate.config import GateConfig
from beta_gate.gate import decide, is_public_path
from beta_gate.models import BETA_ACCESS_COOKIE, GATE_PAGE_PATH, GateAction, GateDecision
from beta_gate.verifier import CredentialVerifier

SECRET = "test-secret"  # pragma: allowlist secret
TOKEN = "header.payload.signature"


@pytest.fixture
def config():
    return GateConfig(enabled=True, secret=SECRET)


@pytest.fixture
def disabled_config():
    return GateConfig(enabled=False, secret=SECRET)


def make_verifier(result=True, side_effect=None):
    verifier = MagicMock(spec=CredentialVerifier)
    verifier.verify.return_value = result
    verifier.verify.side_effect = side_effect
    return verifier


REDIRECT_AND_CLEAR = GateDecision(
    action=GateAction.REDIRECT, location=GATE_PAGE_PATH, clear_cookie=BETA_ACCESS_COOKIE
)


# ---------------------------------------------------------------------------
# Rule 1 — feature flag
# ---------------------------------------------------------------------------


class TestDisabledGate:
    @pytest.mark.parametrize("path", ["/", "/admin.html", "/beta-gate", "/api/users"])
    @pytest.mark.parametrize("cookies", [{}, {BETA_ACCESS_COOKIE: "garbage"}])
    def test_forwards_everything(self, disabled_config, path, cookies):
        verifier = make_verifier(result=False)
        decision = decide(path, cookies, disabled_config, verifier)
        assert decision == GateDecision.forward()
        verifier.verify.assert_not_called()


# ---------------------------------------------------------------------------
# Rule 2 — public paths
# ---------------------------------------------------------------------------


class TestPublicPaths:
    @pytest.mark.parametrize(
        "path",
        [
            "/api/beta-auth",
            "/api/beta-auth/",
            "/beta-gate",
            "/beta-gate.html",
            "/favicon.ico",
        ],
    )
    @pytest.mark.parametrize("cookies", [{}, {BETA_ACCESS_COOKIE: "garbage"}])
    def test_public_path_forwards(self, config, path, cookies):
        verifier = make_verifier(result=False)
        assert decide(path, cookies, config, verifier).is_forward
        verifier.verify.assert_not_called()

    def test_is_public_path_is_prefix_match(self):
        prefixes = ("/api/beta-auth", "/beta-gate")
        assert is_public_path("/api/beta-auth", prefixes)
        assert is_public_path("/beta-gate/assets/form.js", prefixes)
        assert not is_public_path("/api/beta", prefixes)
        assert not is_public_path("/x/beta-gate", prefixes)

    def test_custom_public_paths(self):
        cfg = GateConfig(
            enabled=True,
            secret=SECRET,
            public_paths=("/api/beta-auth", "/beta-gate", "/static/"),
        )
        assert decide("/static/app.css", {}, cfg, make_verifier()).is_forward
        assert not decide("/favicon.ico", {}, cfg, make_verifier()).is_forward


# ---------------------------------------------------------------------------
# Rule 3 — missing credential
# ---------------------------------------------------------------------------


class TestMissingCredential:
    def test_redirects_without_clearing(self, config):
        verifier = make_verifier()
        decision = decide("/gear.html", {}, config, verifier)
        assert decision.action == GateAction.REDIRECT
        assert decision.location == "/beta-gate"
        assert decision.clear_cookie is None
        verifier.verify.assert_not_called()

    def test_empty_cookie_counts_as_missing(self, config):
        decision = decide("/gear.html", {BETA_ACCESS_COOKIE: ""}, config, make_verifier())
        assert decision == GateDecision.redirect("/beta-gate")

    def test_other_cookies_are_ignored(self, config):
        decision = decide("/gear.html", {"session": TOKEN}, config, make_verifier())
        assert decision == GateDecision.redirect("/beta-gate")


# ---------------------------------------------------------------------------
# Rule 4 — credential verification
# ---------------------------------------------------------------------------


class TestCredentialVerification:
    def test_valid_credential_forwards(self, config):
        verifier = make_verifier(result=True)
        decision = decide("/dashboard.html", {BETA_ACCESS_COOKIE: TOKEN}, config, verifier)
        assert decision == GateDecision.forward()
        assert decision.clear_cookie is None
        verifier.verify.assert_called_once_with(TOKEN, SECRET)

    def test_invalid_credential_redirects_and_clears(self, config):
        verifier = make_verifier(result=False)
        decision = decide("/dashboard.html", {BETA_ACCESS_COOKIE: TOKEN}, config, verifier)
        assert decision == REDIRECT_AND_CLEAR

    @pytest.mark.parametrize("exc", [RuntimeError("boom"), ValueError("bad"), KeyError("k")])
    def test_verifier_error_fails_closed(self, config, exc):
        verifier = make_verifier(side_effect=exc)
        decision = decide("/dashboard.html", {BETA_ACCESS_COOKIE: TOKEN}, config, verifier)
        assert decision == REDIRECT_AND_CLEAR

    def test_truthy_non_bool_result_is_not_valid(self, config):
        verifier = make_verifier(result="yes")
        decision = decide("/dashboard.html", {BETA_ACCESS_COOKIE: TOKEN}, config, verifier)
        assert decision == REDIRECT_AND_CLEAR

    def test_uses_configured_cookie_name(self):
        cfg = GateConfig(enabled=True, secret=SECRET, cookie_name="GATE")
        verifier = make_verifier(result=False)
        decision = decide("/dashboard.html", {"GATE": TOKEN}, cfg, verifier)
        assert decision.clear_cookie == "GATE"

    def test_decisions_are_independent(self, config):
        verifier = make_verifier()
        verifier.verify.side_effect = [False, True]
        first = decide("/a", {BETA_ACCESS_COOKIE: "stale"}, config, verifier)
        second = decide("/b", {BETA_ACCESS_COOKIE: TOKEN}, config, verifier)
        assert first == REDIRECT_AND_CLEAR
        assert second == GateDecision.forward()

"""Tests for AuthService sign-in and session tokens."""

import pytest

from admin_loja.services import AuthService


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def auth(clock):
    return AuthService("admin@loja.com", "segredo123", "chave-de-teste", token_max_age=3600, clock=clock)


class TestSignIn:
    def test_valid_credentials(self, auth):
        token = auth.sign_in("admin@loja.com", "segredo123")

        assert token is not None
        user = auth.current_user(token)
        assert user.email == "admin@loja.com"
        assert user.name == "admin"

        print(f"Token: {token}")

    def test_email_is_case_insensitive(self, auth):
        assert auth.sign_in("  Admin@Loja.com ", "segredo123") is not None

    @pytest.mark.parametrize(
        "email,password",
        [
            ("admin@loja.com", "errada123"),
            ("outro@loja.com", "segredo123"),
            ("", ""),
        ],
    )
    def test_invalid_credentials(self, auth, email, password):
        assert auth.sign_in(email, password) is None


class TestCurrentUser:
    def test_no_token(self, auth):
        assert auth.current_user(None) is None
        assert auth.current_user("") is None

    def test_malformed_token(self, auth):
        assert auth.current_user("sem-separadores") is None

    def test_tampered_signature(self, auth):
        token = auth.sign_in("admin@loja.com", "segredo123")
        email, ts, signature = token.rsplit(":", 2)

        assert auth.current_user(f"{email}:{int(ts) + 1}:{signature}") is None

    def test_token_from_other_secret(self, clock):
        other = AuthService("admin@loja.com", "segredo123", "outra-chave", clock=clock)
        token = other.sign_in("admin@loja.com", "segredo123")

        auth = AuthService("admin@loja.com", "segredo123", "chave-de-teste", clock=clock)
        assert auth.current_user(token) is None

    def test_expired_token(self, auth, clock):
        token = auth.sign_in("admin@loja.com", "segredo123")

        clock.now += 3600
        assert auth.current_user(token) is not None

        clock.now += 1
        assert auth.current_user(token) is None

    def test_sign_out_revokes_token(self, auth):
        token = auth.sign_in("admin@loja.com", "segredo123")

        auth.sign_out(token)

        assert auth.current_user(token) is None

    def test_sign_out_without_token(self, auth):
        auth.sign_out(None)

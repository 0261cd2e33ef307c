"""Back-office sign-in with HMAC-signed session tokens.

A token is ``<email>:<timestamp>:<signature>`` where the signature is the
HMAC-SHA256 of ``<email>:<timestamp>`` under the configured secret.
"""

import hashlib
import hmac
import logging
import secrets
import time
from typing import Callable, Optional, Set

from admin_loja.config import AuthConfig
from admin_loja.models import User

logger = logging.getLogger(__name__)

TOKEN_COOKIE = "admin_token"


class AuthService:
    """Authenticates the configured administrator account."""

    def __init__(
        self,
        admin_email: str,
        admin_password: str,
        secret: str,
        token_max_age: int = 86400,
        clock: Callable[[], float] = time.time,
    ):
        self._admin_email = admin_email
        self._admin_password = admin_password
        self._secret = secret.encode()
        self.token_max_age = token_max_age
        self._clock = clock
        self._revoked: Set[str] = set()

    @classmethod
    def from_config(cls, config: AuthConfig) -> "AuthService":
        return cls(
            admin_email=config.admin_email,
            admin_password=config.admin_password,
            secret=config.secret,
            token_max_age=config.token_max_age,
        )

    def _sign(self, data: str) -> str:
        return hmac.new(self._secret, data.encode(), hashlib.sha256).hexdigest()

    def _create_token(self, email: str) -> str:
        data = f"{email}:{int(self._clock())}"
        return f"{data}:{self._sign(data)}"

    def sign_in(self, email: str, password: str) -> Optional[str]:
        """Check credentials and return a session token, or None."""
        correct_email = secrets.compare_digest(email.strip().lower(), self._admin_email.lower())
        correct_password = secrets.compare_digest(password, self._admin_password)
        if not (correct_email and correct_password):
            logger.warning(f"Failed sign-in attempt for {email}")
            return None

        logger.info(f"Signed in {email}")
        return self._create_token(self._admin_email)

    def current_user(self, token: Optional[str]) -> Optional[User]:
        """Resolve the signed-in user from a session token."""
        if not token or token in self._revoked:
            return None

        parts = token.rsplit(":", 2)
        if len(parts) != 3:
            return None
        email, ts, signature = parts

        if not hmac.compare_digest(self._sign(f"{email}:{ts}"), signature):
            return None
        if email != self._admin_email:
            return None
        try:
            issued_at = int(ts)
        except ValueError:
            return None
        if self._clock() - issued_at > self.token_max_age:
            return None

        return User(id=email, email=email, name=email.split("@")[0])

    def sign_out(self, token: Optional[str]) -> None:
        """Invalidate a token for the rest of the process lifetime."""
        if token:
            self._revoked.add(token)

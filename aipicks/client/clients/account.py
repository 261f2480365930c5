"""Stubbed authentication and subscription management.

Sign-in stores a static token and subscription changes are only logged;
payments are handled outside this library.
"""

from __future__ import annotations

import logging
from typing import Any

from ..config import DEMO_USER_EMAIL, DEMO_USER_ID, STATIC_AUTH_TOKEN
from ..core import InvalidRequestError, SubscriptionTier
from ..models import User

logger = logging.getLogger(__name__)


class AuthSession:
    """Holds the auth token; sign-in always succeeds with the static token."""

    def __init__(self, token: str | None = None) -> None:
        self._token = token
        self.email: str | None = None

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    async def sign_in(self, email: str, password: str) -> str:
        if not email or "@" not in email:
            raise InvalidRequestError("A valid email is required")
        if not password:
            raise InvalidRequestError("Password is required")
        self._token = STATIC_AUTH_TOKEN
        self.email = email
        logger.info(f"Signed in {email}")
        return self._token

    def sign_out(self) -> None:
        self._token = None
        self.email = None


class AccountService:
    """Subscription status and usage for the signed-in user."""

    def __init__(self, session: AuthSession | None = None, *, email: str = DEMO_USER_EMAIL) -> None:
        self._session = session or AuthSession(STATIC_AUTH_TOKEN)
        self._user = User(
            id=DEMO_USER_ID,
            email=email,
            subscription_tier=SubscriptionTier.PRO,
        )

    @property
    def user(self) -> User:
        return self._user

    async def subscription_status(self) -> User:
        """Current user; a demo account on the pro tier until the backend exposes one."""
        if not self._session.is_authenticated:
            raise InvalidRequestError("Not signed in")
        if self._session.email:
            self._user = self._user.model_copy(update={"email": self._session.email})
        return self._user

    async def upgrade(self, tier: SubscriptionTier | str) -> User:
        try:
            tier = SubscriptionTier(tier)
        except ValueError as e:
            raise InvalidRequestError(f"Unknown subscription tier: {tier!r}") from e
        logger.info(f"Upgrading {self._user.id} to {tier.display_name}")
        self._user = self._user.model_copy(update={"subscription_tier": tier})
        return self._user

    def record_response(self, response: Any) -> None:
        """HTTP response hook counting API calls against today's usage."""
        self._user.usage.increment_api_call()

    def record_patterns(self, count: int) -> None:
        if count > 0:
            self._user.usage.increment_pattern(count)

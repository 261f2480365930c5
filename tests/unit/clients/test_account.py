"""Unit tests for the stubbed auth session and account service."""

import pytest

from aipicks.client.clients import AccountService, AuthSession
from aipicks.client.config import STATIC_AUTH_TOKEN
from aipicks.client.core import InvalidRequestError, SubscriptionTier


class TestAuthSession:
    @pytest.mark.asyncio
    async def test_sign_in_stores_static_token(self):
        session = AuthSession()
        assert not session.is_authenticated

        token = await session.sign_in("trader@example.com", "hunter2")

        assert token == STATIC_AUTH_TOKEN
        assert session.is_authenticated
        assert session.email == "trader@example.com"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email,password", [("", "x"), ("not-an-email", "x"), ("a@b.c", "")])
    async def test_sign_in_validates(self, email, password):
        with pytest.raises(InvalidRequestError):
            await AuthSession().sign_in(email, password)

    def test_sign_out(self):
        session = AuthSession("token")
        session.sign_out()
        assert session.token is None
        assert not session.is_authenticated


class TestAccountService:
    @pytest.mark.asyncio
    async def test_subscription_status_requires_sign_in(self):
        with pytest.raises(InvalidRequestError):
            await AccountService(AuthSession()).subscription_status()

    @pytest.mark.asyncio
    async def test_subscription_status_reflects_signed_in_email(self):
        session = AuthSession()
        await session.sign_in("trader@example.com", "pw")
        user = await AccountService(session).subscription_status()
        assert user.email == "trader@example.com"
        assert user.subscription_tier == SubscriptionTier.PRO

    @pytest.mark.asyncio
    async def test_upgrade(self):
        service = AccountService()
        user = await service.upgrade("premium")
        assert user.subscription_tier == SubscriptionTier.PREMIUM
        assert user.limits.is_unlimited("api_calls")
        assert service.user.subscription_tier == SubscriptionTier.PREMIUM

    @pytest.mark.asyncio
    async def test_upgrade_unknown_tier(self):
        with pytest.raises(InvalidRequestError):
            await AccountService().upgrade("platinum")

    def test_usage_counters(self):
        service = AccountService()
        service.record_response(object())
        service.record_response(object())
        service.record_patterns(3)
        service.record_patterns(0)

        usage = service.user.usage
        assert usage.api_calls_today == 2
        assert usage.patterns_detected_today == 3

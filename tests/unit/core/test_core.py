"""Unit tests for enums, the error taxonomy and argument validation."""

import pytest

from aipicks.client.core import (
    ClientError,
    DecodeError,
    ErrorKind,
    FeedState,
    Interval,
    InvalidRequestError,
    RateLimitError,
    ServerError,
    SubscriptionTier,
    TransportError,
    normalize_symbol,
    parse_interval,
    validate_limit,
)


class TestInterval:
    def test_supported_values(self):
        assert [i.value for i in Interval] == ["1m", "5m", "15m", "1h", "4h", "1d", "1w"]

    def test_seconds(self):
        assert Interval.M1.seconds == 60
        assert Interval.H4.seconds == 14400
        assert Interval.D1.milliseconds == 86_400_000

    def test_from_seconds_and_str(self):
        assert Interval.from_seconds(3600) == Interval.H1
        assert Interval.from_seconds(7) is None
        assert Interval.from_str("1w") == Interval.W1
        assert Interval.from_str("2d") is None

    def test_str(self):
        assert str(Interval.M15) == "15m"


def test_feed_state_activity():
    assert FeedState.OPENING.is_active
    assert FeedState.LIVE.is_active
    assert FeedState.RECONNECTING.is_active
    assert not FeedState.CLOSED.is_active
    assert not FeedState.CLOSED_WITH_ERROR.is_active


def test_subscription_tier_labels():
    assert SubscriptionTier.PRO.display_name == "Pro"
    assert SubscriptionTier.PREMIUM.price == "$99/month"
    assert SubscriptionTier("free") == SubscriptionTier.FREE


class TestExceptions:
    @pytest.mark.parametrize(
        "exc,kind",
        [
            (InvalidRequestError("x"), ErrorKind.INVALID_REQUEST),
            (TransportError("x"), ErrorKind.TRANSPORT),
            (ServerError("x", status_code=500), ErrorKind.SERVER),
            (RateLimitError("x"), ErrorKind.SERVER),
            (DecodeError("x"), ErrorKind.DECODE),
        ],
    )
    def test_kinds(self, exc, kind):
        assert isinstance(exc, ClientError)
        assert exc.kind == kind
        assert exc.user_message

    def test_rate_limit_error(self):
        exc = RateLimitError("slow down", retry_after=5)
        assert isinstance(exc, ServerError)
        assert exc.status_code == 429
        assert exc.retry_after == 5
        assert str(exc) == "slow down"


class TestValidation:
    def test_normalize_symbol(self):
        assert normalize_symbol(" aapl ") == "AAPL"
        assert normalize_symbol("brk.b") == "BRK.B"
        assert normalize_symbol("es=f") == "ES=F"

    @pytest.mark.parametrize("bad", ["", "   ", None, "AA PL", "$AAPL"])
    def test_bad_symbols(self, bad):
        with pytest.raises(InvalidRequestError):
            normalize_symbol(bad)

    def test_parse_interval(self):
        assert parse_interval("4h") == Interval.H4
        assert parse_interval(Interval.M5) == Interval.M5
        with pytest.raises(InvalidRequestError):
            parse_interval("3h")
        with pytest.raises(InvalidRequestError):
            parse_interval(60)

    def test_validate_limit(self):
        assert validate_limit(10) == 10
        for bad in (0, -1, True, 1.5, "10"):
            with pytest.raises(InvalidRequestError):
                validate_limit(bad)

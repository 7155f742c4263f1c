from datetime import UTC, datetime, timedelta

from devflow.api.identity import create_identity_token, decode_identity_token

SECRET = "test-secret"


def test_round_trip_returns_subject():
    token = create_identity_token("user_123", SECRET)
    assert decode_identity_token(token, SECRET) == "user_123"


def test_wrong_secret_is_rejected():
    token = create_identity_token("user_123", SECRET)
    assert decode_identity_token(token, "other-secret") is None


def test_expired_token_is_rejected():
    issued = datetime.now(UTC) - timedelta(hours=2)
    token = create_identity_token(
        "user_123", SECRET, expires_delta=timedelta(minutes=5), now_utc=issued
    )
    assert decode_identity_token(token, SECRET) is None


def test_garbage_token_is_rejected():
    assert decode_identity_token("not-a-jwt", SECRET) is None

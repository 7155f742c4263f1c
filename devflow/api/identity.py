from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt


def create_identity_token(
    clerk_id: str,
    secret_key: str,
    algorithm: str = "HS256",
    expires_delta: timedelta | None = None,
    now_utc: datetime | None = None,
) -> str:
    """
    Create a signed identity token for ``clerk_id``.

    Production tokens are minted by the identity provider; this is used by
    tests and local tooling.
    """
    current_time = now_utc if now_utc is not None else datetime.now(UTC)
    expire = current_time + (expires_delta or timedelta(minutes=15))
    to_encode: dict[str, Any] = {"sub": clerk_id, "exp": expire}
    encoded: str = jwt.encode(to_encode, secret_key, algorithm=algorithm)
    return encoded


def decode_identity_token(token: str, secret_key: str, algorithm: str = "HS256") -> str | None:
    """Return the token's ``sub`` claim, or None if the token is invalid."""
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError:
        return None
    sub = payload.get("sub")
    return sub if isinstance(sub, str) else None

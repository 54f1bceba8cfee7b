"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from pharmahub.core.config import settings

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

# Fixed token lifetime; not configurable.
ACCESS_TOKEN_TTL = timedelta(hours=8)

# Claims copied from the user row into the token (never the password hash).
TOKEN_USER_CLAIMS = (
    "id",
    "nome",
    "email",
    "perfil",
    "industria_id",
    "farmacia_id",
    "pbm_id",
    "industria_codigo",
    "farmacia_codigo",
    "pbm_codigo",
)


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash (constant-time compare inside bcrypt)."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


# Computed at import so the first unknown-user login costs the same as the rest.
_DUMMY_HASH = hash_password("pharmahub-timing-equalizer")


def burn_password_check(plain_password: str) -> None:
    """Spend the same bcrypt work as a real check when there is no user to check against."""
    verify_password(plain_password, _DUMMY_HASH)


def create_access_token(user: dict[str, Any], now: datetime | None = None) -> str:
    """
    Create a signed JWT carrying a snapshot of the user's identity and affiliation.

    The token expires ACCESS_TOKEN_TTL (8 hours) after `now` (defaults to the current time).
    """
    issued_at = now or datetime.now(UTC)
    expire = issued_at + ACCESS_TOKEN_TTL
    payload: dict[str, Any] = {claim: user.get(claim) for claim in TOKEN_USER_CLAIMS}
    payload.update(
        {
            "sub": str(user["id"]),
            "iat": issued_at,
            "exp": expire,
        }
    )
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate JWT; return its payload.
    Raises jwt.PyJWTError on invalid, tampered or expired token.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["exp", "iat", "sub"]},
    )

"""
Password hashing and JWT session tokens.

Tokens are stateless: a token is valid when its signature checks out and it
has not expired. There is no revocation list.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext

from app.core import config
from app.core.errors import InvalidToken, TokenExpired
from app.models.user import Role

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["argon2"],
    default="argon2",
    deprecated="auto",
)

REQUIRED_CLAIMS = ["id", "email", "role", "iat", "exp"]


@dataclass
class TokenClaims:
    """Decoded access token payload."""
    id: int
    email: str
    role: Role
    iat: datetime
    exp: datetime


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # Unknown or malformed hash
        return False


def dummy_verify_password() -> None:
    """Spend the time of a real verify when there is no stored hash to check."""
    pwd_context.dummy_verify()


def create_access_token(
    user_id: int,
    email: str,
    role: Role,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed access token for a user.

    Args:
        user_id: User ID
        email: User email
        role: User role
        expires_delta: Token lifetime, defaults to JWT_EXPIRES_IN

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta if expires_delta is not None else config.ACCESS_TOKEN_EXPIRES)

    payload = {
        "id": user_id,
        "email": email,
        "role": Role(role).value,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def verify_access_token(token: str) -> TokenClaims:
    """
    Verify signature and expiry of a token and return its claims.

    Raises:
        TokenExpired: the token was valid but its expiry has passed
        InvalidToken: bad signature, malformed token or unexpected claims
    """
    try:
        payload = jwt.decode(
            token,
            config.JWT_SECRET,
            algorithms=[config.JWT_ALGORITHM],
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired token")
        raise TokenExpired()
    except jwt.InvalidTokenError as e:
        logger.info(f"Rejected invalid token: {e}")
        raise InvalidToken()

    user_id = payload["id"]
    email = payload["email"]
    if isinstance(user_id, bool) or not isinstance(user_id, int) or not isinstance(email, str):
        raise InvalidToken()
    try:
        role = Role(payload["role"])
    except ValueError:
        raise InvalidToken()

    return TokenClaims(
        id=user_id,
        email=email,
        role=role,
        iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
        exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )

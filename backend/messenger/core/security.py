"""
Security utilities for JWT authentication and password hashing.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
import hashlib
import logging
import secrets
import bcrypt
from jose import JWTError, jwt
from messenger.core.config import settings

logger = logging.getLogger(__name__)

ADMIN_CLAIM = "isAdmin"

# Process-lifetime signing key. Tokens issued before a restart stop verifying
# unless SECRET_KEY is configured.
SIGNING_KEY = settings.SECRET_KEY or secrets.token_urlsafe(64)


@dataclass(frozen=True)
class TokenData:
    """Claims extracted from a verified access token."""
    username: str
    is_admin: bool


def _pre_hash_password(password: str) -> bytes:
    """
    Pre-hash password with SHA256 to support passwords longer than 72 bytes.
    Returns bytes (32 bytes) which is well under bcrypt's 72-byte limit.
    """
    return hashlib.sha256(password.encode('utf-8')).digest()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    if not plain_password or not hashed_password:
        return False
    try:
        return bcrypt.checkpw(_pre_hash_password(plain_password), hashed_password.encode('utf-8'))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def get_password_hash(password: str) -> str:
    """Hash a password with a fresh bcrypt salt."""
    hashed = bcrypt.hashpw(_pre_hash_password(password), bcrypt.gensalt())
    return hashed.decode('utf-8')


def create_access_token(username: str, is_admin: bool, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a signed token carrying the username and the admin claim."""
    now = datetime.utcnow()
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS)
    claims = {
        "sub": username,
        ADMIN_CLAIM: bool(is_admin),
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(claims, SIGNING_KEY, algorithm=settings.ALGORITHM)


def _decode(token: str, verify_exp: bool = True) -> Optional[dict]:
    if not token:
        return None
    try:
        return jwt.decode(
            token,
            SIGNING_KEY,
            algorithms=[settings.ALGORITHM],
            options={"verify_exp": verify_exp},
        )
    except JWTError as e:
        logger.debug(f"Rejected token: {e}")
        return None


def decode_access_token(token: str) -> Optional[TokenData]:
    """Verify signature and expiry. Returns None for any invalid token."""
    payload = _decode(token)
    if not payload or not payload.get("sub"):
        return None
    return TokenData(username=payload["sub"], is_admin=payload.get(ADMIN_CLAIM) is True)


def get_username(token: str) -> Optional[str]:
    """Username embedded in a valid token, or None."""
    data = decode_access_token(token)
    return data.username if data else None


def is_admin(token: str) -> bool:
    """True only for a valid token carrying the admin claim."""
    data = decode_access_token(token)
    return data.is_admin if data else False


def peek_username(token: str) -> Optional[str]:
    """Username of a correctly signed token, ignoring expiry."""
    payload = _decode(token, verify_exp=False)
    return payload.get("sub") if payload else None

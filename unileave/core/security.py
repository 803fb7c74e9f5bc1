"""
Security helpers
Password hashing (salted, via passlib) and JWT access tokens for the login boundary
"""
from datetime import datetime, timedelta
from typing import Optional
import logging

from jose import JWTError, jwt
from passlib.context import CryptContext

from unileave.core.config import settings

logger = logging.getLogger(__name__)


class PasswordHasher:
    """
    Salted-hash password capability.

    The rest of the code base only relies on ``hash`` and ``verify`` so the
    scheme can change without touching callers.
    """

    def __init__(self, schemes=None):
        # PBKDF2-SHA256 avoids the bcrypt backend issues seen with newer bcrypt releases
        self._context = CryptContext(schemes=schemes or ["pbkdf2_sha256"], deprecated="auto")

    def hash(self, plain: str) -> str:
        return self._context.hash(plain)

    def verify(self, plain: str, stored: Optional[str]) -> bool:
        """Return False for missing or unrecognised hashes instead of raising."""
        if not plain or not stored:
            return False
        try:
            return self._context.verify(plain, stored)
        except (ValueError, TypeError) as exc:
            logger.warning(f"[AUTH] Stored password hash could not be verified: {exc}")
            return False


password_hasher = PasswordHasher()


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify plain password against hashed password"""
    return password_hasher.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password"""
    return password_hasher.hash(password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token"""
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def decode_access_token(token: str) -> Optional[dict]:
    """Decode a JWT access token, returning None when invalid or expired"""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        return None

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict, Optional

from jose import jwt
from passlib.context import CryptContext

from user_api.core.config import Settings, get_settings


@lru_cache()
def _pwd_context(rounds: int) -> CryptContext:
    # Use bcrypt_sha256 to avoid bcrypt's 72-byte password limit while keeping bcrypt as the core KDF.
    return CryptContext(schemes=["bcrypt_sha256"], deprecated="auto", bcrypt_sha256__rounds=rounds)


def pwd_context(settings: Optional[Settings] = None) -> CryptContext:
    settings = settings or get_settings()
    return _pwd_context(settings.BCRYPT_ROUNDS)


def hash_password(password: str, settings: Optional[Settings] = None) -> str:
    return pwd_context(settings).hash(password)


def verify_password(password: str, hashed_password: str, settings: Optional[Settings] = None) -> bool:
    try:
        return pwd_context(settings).verify(password, hashed_password)
    except ValueError:
        # stored value is not a hash this context understands
        return False


def create_access_token(
    claims: Dict[str, Any],
    settings: Optional[Settings] = None,
    expires_minutes: Optional[int] = None,
    now: Optional[datetime] = None,
) -> str:
    settings = settings or get_settings()
    issued_at = now or datetime.now(timezone.utc)
    expire = issued_at + timedelta(
        minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRES_MINUTES
    )
    to_encode: Dict[str, Any] = dict(claims)
    to_encode.update({"iat": issued_at, "exp": expire})
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str, settings: Optional[Settings] = None) -> Dict[str, Any]:
    settings = settings or get_settings()
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])


@lru_cache()
def _dummy_hash(rounds: int) -> str:
    return _pwd_context(rounds).hash("not-a-real-password")


def burn_password_check(password: str, settings: Optional[Settings] = None) -> None:
    """Spend the same bcrypt work as a real verify when there is no stored hash."""
    settings = settings or get_settings()
    verify_password(password, _dummy_hash(settings.BCRYPT_ROUNDS), settings)

from datetime import datetime, timedelta, timezone

from jose import jwt
from passlib.context import CryptContext

from delivery.core.config import Settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(raw: str, hashed: str) -> bool:
    return pwd_context.verify(raw, hashed)


def create_access_token(data: dict, role: str, settings: Settings) -> str:
    now = datetime.now(timezone.utc)
    payload = data.copy()
    payload["role"] = role
    payload["iat"] = int(now.timestamp())
    payload["exp"] = int((now + timedelta(minutes=settings.jwt_expire_min)).timestamp())

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_alg)


def decode_access_token(token: str, settings: Settings) -> dict:
    """Verify signature and expiry; raises jose.JWTError on failure."""
    return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_alg])

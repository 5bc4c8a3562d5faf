# taskbridge/utils/security.py
from datetime import datetime, timedelta, timezone
from typing import Optional
import secrets

from jose import jwt
from passlib.context import CryptContext

from taskbridge.config.security import SecurityConfig

pwd_context = CryptContext(schemes=SecurityConfig.PASSWORDS['schemes'], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=SecurityConfig.TOKENS['expire_minutes'])
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SecurityConfig.TOKENS['secret_key'], algorithm=SecurityConfig.TOKENS['algorithm'])


def generate_reset_code() -> str:
    """Zero-padded numeric one-time code"""
    length = SecurityConfig.PASSWORD_RESET['code_length']
    return f"{secrets.randbelow(10 ** length):0{length}d}"

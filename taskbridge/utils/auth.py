# taskbridge/utils/auth.py
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from taskbridge.config.security import SecurityConfig
from taskbridge.database import get_db
from taskbridge.models.user import User

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    payload = verify_token(token)
    if payload is None:
        raise credentials_exception
    email: str = payload.get("sub")
    if email is None:
        raise credentials_exception

    user = db.query(User).filter(User.email == email).first()
    if user is None:
        raise credentials_exception

    # Suspended accounts keep their data but cannot act
    if user.suspended:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account has been suspended. Please contact administrator.",
        )

    return user


def verify_token(token: str) -> dict:
    """Verify JWT token and return payload without raising exceptions"""
    try:
        return jwt.decode(
            token,
            SecurityConfig.TOKENS['secret_key'],
            algorithms=[SecurityConfig.TOKENS['algorithm']]
        )
    except JWTError:
        return None

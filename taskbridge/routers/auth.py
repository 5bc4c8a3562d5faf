# taskbridge/routers/auth.py
from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.orm import Session
import logging

from taskbridge.database import get_db
from taskbridge.schemas.user import UserCreate, UserLogin, PasswordResetRequest, PasswordResetCode, PasswordReset
from taskbridge.schemas.tokens import Token
from taskbridge.services import user_service
from taskbridge.utils.security import create_access_token

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(user: UserCreate, db: Session = Depends(get_db)):
    new_user = user_service.register_user(db, user)
    return {"message": "User registered successfully", "id": new_user.id}


@router.post("/login", response_model=Token)
def login(user: UserLogin, db: Session = Depends(get_db)):
    db_user = user_service.authenticate(db, user.email, user.password)
    if not db_user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if db_user.suspended:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account has been suspended. Please contact administrator.",
        )

    token = create_access_token(data={"sub": db_user.email, "role": db_user.role.value})
    return {
        "token": token,
        "token_type": "bearer",
        "role": db_user.role,
        "user": db_user,
    }


@router.post("/forgot-password", response_model=PasswordResetCode)
def forgot_password(request: PasswordResetRequest, db: Session = Depends(get_db)):
    # No mail transport; the code is handed back for the client to display
    code = user_service.request_password_reset(db, request.email)
    logger.info("🔑 Password reset code issued for %s", request.email)
    return {"message": "Reset code generated", "code": code}


@router.post("/reset-password")
def reset_password(request: PasswordReset, db: Session = Depends(get_db)):
    user_service.reset_password(db, request.email, request.otp, request.password)
    return {"message": "Password has been reset successfully"}

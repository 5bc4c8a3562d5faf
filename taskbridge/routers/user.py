# taskbridge/routers/user.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from taskbridge.database import get_db
from taskbridge.models import user as user_model
from taskbridge.schemas.user import UserCreate, UserOut, RoleUpdate, AvailabilityUpdate
from taskbridge.services import user_service
from taskbridge.utils.auth import get_current_user

router = APIRouter()


@router.get("/", response_model=List[UserOut])
def get_all_users(
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    """Directory of all accounts (admins and managers)"""
    return user_service.list_users(db, current_user)


@router.get("/employees", response_model=List[UserOut])
def get_employees(
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    """Accounts with the USER role"""
    return user_service.list_employees(db, current_user)


@router.get("/me", response_model=UserOut)
def get_current_user_info(current_user: user_model.User = Depends(get_current_user)):
    return current_user


@router.post("/", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def provision_user(
    user: UserCreate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    """Admin creates an account with any role"""
    return user_service.provision_user(db, current_user, user)


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    user_service.delete_user(db, current_user, user_id)
    return {"message": "User deleted successfully"}


@router.put("/{user_id}/status", response_model=UserOut)
def toggle_user_status(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    return user_service.toggle_suspension(db, current_user, user_id)


@router.put("/{user_id}/role", response_model=UserOut)
def update_user_role(
    user_id: int,
    update: RoleUpdate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    return user_service.change_role(db, current_user, user_id, update.role)


@router.put("/me/availability", response_model=UserOut)
def update_availability(
    update: AvailabilityUpdate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    return user_service.set_availability(db, current_user, update.available, update.status)

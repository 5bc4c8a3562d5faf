# taskbridge/routers/message.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from taskbridge.database import get_db
from taskbridge.models import user as user_model
from taskbridge.schemas.message import MessageCreate, MessageOut
from taskbridge.services import message_service
from taskbridge.utils.auth import get_current_user

router = APIRouter()


@router.get("/", response_model=List[MessageOut])
def get_messages(
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    return message_service.list_messages(db, current_user)


@router.post("/", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
def send_message(
    message: MessageCreate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    return message_service.send_message(db, current_user, message.content)

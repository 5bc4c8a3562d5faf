# taskbridge/services/message_service.py
from typing import List
import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from taskbridge.models import ChatMessage, User
from taskbridge.services import support_bot
from taskbridge.services.errors import ValidationError
from taskbridge.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


def list_messages(db: Session, user: User) -> List[ChatMessage]:
    """The user's conversation with support, oldest first"""
    return (
        db.query(ChatMessage)
        .filter(or_(ChatMessage.sender_id == user.id, ChatMessage.receiver_id == user.id))
        .order_by(ChatMessage.timestamp.asc(), ChatMessage.id.asc())
        .all()
    )


def send_message(db: Session, user: User, content: str) -> ChatMessage:
    """Append the user's message and the support bot's reply to the log"""
    if content is None or not content.strip():
        raise ValidationError("Message content is required")

    message = ChatMessage(sender_id=user.id, content=content.strip(), type="sent")
    reply = ChatMessage(
        sender_id=None,
        receiver_id=user.id,
        content=support_bot.generate_response(content),
        type="received",
    )
    db.add(message)
    db.flush()
    db.add(reply)
    db.commit()
    db.refresh(message)

    NotificationService.notify(db, user.id, "New Support Message", "The Support Bot has replied to your query.")
    return message

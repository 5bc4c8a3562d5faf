# taskbridge/services/notification_service.py
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from taskbridge.models import Notification, Task, User
from taskbridge.services.errors import NotFoundError

logger = logging.getLogger(__name__)


class NotificationService:
    @staticmethod
    def create_notification(
        db: Session,
        user_id: int,
        title: str,
        message: str
    ) -> Notification:
        """Create a notification for a user and commit it"""
        notification = Notification(
            recipient=user_id,
            title=title,
            message=message,
            read=False
        )

        db.add(notification)
        db.commit()
        db.refresh(notification)

        logger.info("✅ Notification created for user %s: %s", user_id, title)
        return notification

    @staticmethod
    def notify(
        db: Session,
        user_id: Optional[int],
        title: str,
        message: str
    ) -> Optional[Notification]:
        """Best-effort delivery used as a side effect of task transitions.

        The transition has already been committed when this runs, so a failure
        here is logged and rolled back instead of being raised.
        """
        if user_id is None:
            return None
        try:
            return NotificationService.create_notification(db, user_id, title, message)
        except Exception as e:
            logger.warning("⚠️ Error sending notification to user %s: %s", user_id, e)
            db.rollback()
            return None

    # Task lifecycle messages

    @staticmethod
    def task_created(db: Session, task: Task) -> Optional[Notification]:
        return NotificationService.notify(
            db, task.created_by, "Task Created",
            f"Your request \"{task.title}\" has been submitted successfully."
        )

    @staticmethod
    def task_claimed(db: Session, task: Task, manager: User) -> Optional[Notification]:
        return NotificationService.notify(
            db, task.created_by, "Assigned to Agent",
            f"Field Agent {manager.name} has accepted your mission: {task.title}"
        )

    @staticmethod
    def task_started(db: Session, task: Task, manager: User) -> Optional[Notification]:
        return NotificationService.notify(
            db, task.created_by, "Operation Started",
            f"Field Agent {manager.name} has started \"{task.title}\"."
        )

    @staticmethod
    def task_rejected(db: Session, task: Task) -> Optional[Notification]:
        return NotificationService.notify(
            db, task.created_by, "Task Rejected",
            f"Your request \"{task.title}\" was rejected. Reason: {task.rejection_reason}"
        )

    @staticmethod
    def task_completed(db: Session, task: Task) -> Optional[Notification]:
        return NotificationService.notify(
            db, task.created_by, "Task Complete",
            f"Your request \"{task.title}\" has been finalized and verified."
        )

    @staticmethod
    def task_rerequested(db: Session, task: Task) -> Optional[Notification]:
        return NotificationService.notify(
            db, task.created_by, "Task Re-requested",
            f"Your request \"{task.title}\" is back in the open queue."
        )

    @staticmethod
    def task_reassigned(db: Session, task: Task) -> Optional[Notification]:
        return NotificationService.notify(
            db, task.assigned_to, "Task Reassigned",
            f"An administrator has assigned the disputed task \"{task.title}\" to you."
        )

    @staticmethod
    def dispute_resolved(db: Session, task: Task) -> Optional[Notification]:
        return NotificationService.notify(
            db, task.created_by, "Dispute Resolved",
            f"The dispute on \"{task.title}\" was resolved and the task is now complete."
        )

    @staticmethod
    def backup_assigned(db: Session, task: Task) -> Optional[Notification]:
        return NotificationService.notify(
            db, task.backup_assignee, "Backup Assignment",
            f"You have been set as the backup assignee for task \"{task.title}\"."
        )

    @staticmethod
    def quality_scored(db: Session, task: Task) -> Optional[Notification]:
        return NotificationService.notify(
            db, task.assigned_to, "Quality Review",
            f"Your work on \"{task.title}\" received a quality score of {task.quality_score}/5."
        )

    # Read side

    @staticmethod
    def list_for_user(db: Session, user: User, unread_only: bool = False) -> List[Notification]:
        """Newest first"""
        query = db.query(Notification).filter(Notification.recipient == user.id)
        if unread_only:
            query = query.filter(Notification.read == False)  # noqa: E712
        return query.order_by(Notification.timestamp.desc(), Notification.id.desc()).all()

    @staticmethod
    def unread_count(db: Session, user: User) -> int:
        """Counted from the same table the list is read from"""
        return db.query(Notification).filter(
            Notification.recipient == user.id,
            Notification.read == False  # noqa: E712
        ).count()

    @staticmethod
    def mark_read(db: Session, notification_id: int, user: User) -> Notification:
        """Flip a notification to read. Idempotent; only the recipient may do it."""
        notification = db.query(Notification).filter(
            Notification.id == notification_id,
            Notification.recipient == user.id
        ).first()

        # Someone else's notification looks exactly like a missing one
        if not notification:
            raise NotFoundError("Notification not found")

        if not notification.read:
            notification.read = True
            db.commit()
            db.refresh(notification)
        return notification

    @staticmethod
    def mark_all_read(db: Session, user: User) -> int:
        """Mark every unread notification of the user as read"""
        updated_count = db.query(Notification).filter(
            Notification.recipient == user.id,
            Notification.read == False  # noqa: E712
        ).update({Notification.read: True}, synchronize_session=False)
        db.commit()
        return updated_count

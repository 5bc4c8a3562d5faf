# taskbridge/models/task.py
from sqlalchemy import Column, Integer, String, DateTime, Date, ForeignKey, Enum, Text
from sqlalchemy.orm import relationship
from taskbridge.database import Base
from taskbridge.utils.clock import utcnow
import enum


class TaskStatus(str, enum.Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    REJECTED = "REJECTED"


class TaskPriority(str, enum.Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=False)
    category = Column(String, nullable=False, default="IT_SUPPORT")

    # Relationships
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    assigned_to = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    backup_assignee = Column(Integer, ForeignKey("users.id"), nullable=True)

    # Task properties
    status = Column(Enum(TaskStatus), default=TaskStatus.PENDING, nullable=False, index=True)
    priority = Column(Enum(TaskPriority), default=TaskPriority.MEDIUM, nullable=False)
    deadline = Column(Date, nullable=False)

    # Execution details, filled in as the task moves through the pipeline
    to_do_plan = Column(Text, nullable=True)
    feedback = Column(Text, nullable=True)
    completion_proof = Column(String, nullable=True)  # opaque reference to an uploaded file
    rejection_reason = Column(Text, nullable=True)
    quality_score = Column(Integer, nullable=True)  # 1-5, write-once

    # System dates
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
    assigned_at = Column(DateTime, nullable=True)
    started_at = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)

    creator = relationship("User", foreign_keys=[created_by], back_populates="created_tasks")
    assignee = relationship("User", foreign_keys=[assigned_to], back_populates="assigned_tasks")
    backup = relationship("User", foreign_keys=[backup_assignee])

    def __repr__(self):
        return f"<Task(id={self.id}, title='{self.title}', status='{self.status}', assigned_to={self.assigned_to})>"

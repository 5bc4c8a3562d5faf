# taskbridge/models/user.py
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum
from sqlalchemy.orm import relationship
from taskbridge.database import Base
from taskbridge.utils.clock import utcnow
import enum


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    USER = "USER"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(Enum(Role), nullable=False, default=Role.USER)

    # Account flags
    suspended = Column(Boolean, default=False, nullable=False)
    available = Column(Boolean, default=True, nullable=False)  # only meaningful for managers
    availability_status = Column(String, nullable=True)

    # Password reset one-time code
    reset_code = Column(String, nullable=True)
    reset_code_expiry = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    created_tasks = relationship("Task", back_populates="creator", foreign_keys="Task.created_by")
    assigned_tasks = relationship("Task", back_populates="assignee", foreign_keys="Task.assigned_to")
    notifications = relationship("Notification", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"

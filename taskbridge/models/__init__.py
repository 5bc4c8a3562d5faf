from .user import User, Role
from .task import Task, TaskStatus, TaskPriority
from .notification import Notification
from .audit_log import AuditLog
from .setting import SystemSetting, SettingVisibility
from .message import ChatMessage

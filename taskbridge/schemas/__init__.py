from .user import UserCreate, UserLogin, UserBasic, UserOut, RoleUpdate, AvailabilityUpdate, PasswordResetRequest, PasswordResetCode, PasswordReset
from .tokens import Token
from .task import TaskCreate, TaskClaim, TaskReject, TaskComplete, TaskReassign, BackupAssign, QualityScore, TaskOut, TaskBoard
from .notification import NotificationOut, UnreadCount, MarkAllRead
from .setting import PlatformSettings, PublicSettings, SettingUpdate, SettingOut
from .audit_log import AuditLogOut
from .message import MessageCreate, MessageOut
from .analytics import FinanceStats, AdminOverview, UserSummary

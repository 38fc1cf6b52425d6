# -------------------------
# Enums
# -------------------------
from .enums import (
    Role,
    PropertyStatus,
    BookingStatus,
    PaymentStatus,
    IssueStatus,
    IssuePriority,
    AnnouncementType,
    RsvpStatus,
)

# -------------------------
# Users & Roles
# -------------------------
from .user import (
    UserCreate,
    UserRead,
    UserUpdate,
    SignupRequest,
    LoginRequest,
    SessionUser,
    SessionResponse,
)
from .user_role import UserRoleUpsert, UserRoleRead, RoleMigrationResult

# -------------------------
# Rental Models
# -------------------------
from .property import PropertyCreate, PropertyRead, PropertyUpdate
from .booking import BookingCreate, BookingRead, BookingUpdate
from .payment import PaymentCreate, PaymentRead, PaymentUpdate
from .issue import IssueCreate, IssueRead, IssueUpdate

# -------------------------
# Community Models
# -------------------------
from .announcement import AnnouncementCreate, AnnouncementRead
from .poll import PollCreate, PollRead, VoteRequest
from .event import EventCreate, EventRead, RsvpRequest
from .chat import MessageCreate, MessageRead, RoomRead, JoinRoomResponse

from .report import ReportSummary

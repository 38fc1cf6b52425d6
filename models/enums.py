from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# USER ROLE
# -----------------------------------------------------
class Role(BaseStrEnum):
    tenant = "tenant"
    owner = "owner"
    admin = "admin"


# -----------------------------------------------------
# PROPERTY STATUS
# -----------------------------------------------------
class PropertyStatus(BaseStrEnum):
    active = "active"
    inactive = "inactive"


# -----------------------------------------------------
# BOOKING STATUS
# -----------------------------------------------------
class BookingStatus(BaseStrEnum):
    """Created pending; owner confirms or rejects, tenant may cancel."""

    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"


# -----------------------------------------------------
# PAYMENT STATUS
# -----------------------------------------------------
class PaymentStatus(BaseStrEnum):
    pending = "pending"
    completed = "completed"
    failed = "failed"


# -----------------------------------------------------
# ISSUE STATUS / PRIORITY
# -----------------------------------------------------
class IssueStatus(BaseStrEnum):
    """Workflow state of a maintenance issue, advanced by the owner."""

    reported = "reported"
    investigating = "investigating"
    resolved = "resolved"
    closed = "closed"


class IssuePriority(BaseStrEnum):
    low = "low"
    medium = "medium"
    high = "high"


# -----------------------------------------------------
# ANNOUNCEMENT TYPE
# -----------------------------------------------------
class AnnouncementType(BaseStrEnum):
    festival = "festival"
    maintenance = "maintenance"
    event = "event"
    general = "general"


# -----------------------------------------------------
# EVENT RSVP
# -----------------------------------------------------
class RsvpStatus(BaseStrEnum):
    yes = "yes"
    no = "no"

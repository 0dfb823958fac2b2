"""
Account roles and guest categories
"""

from enum import Enum


class Role(str, Enum):
    """Account roles, highest first"""
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    EVENT_MANAGER = "event_manager"
    ORGANIZER = "organizer"


class GuestCategory(str, Enum):
    REGULAR = "regular"
    VIP = "vip"
    MEDIA = "media"
    SPONSOR = "sponsor"

    @classmethod
    def normalize(cls, value) -> "GuestCategory":
        """Map free-form spreadsheet text to a category, defaulting to regular"""
        if value is None:
            return cls.REGULAR
        text = str(value).strip().lower()
        for category in cls:
            if category.value == text:
                return category
        return cls.REGULAR


# Who may create whom. Creation is the only way an account gets a creator.
CREATABLE_ROLES = {
    Role.SUPER_ADMIN: frozenset({Role.ADMIN, Role.EVENT_MANAGER}),
    Role.ADMIN: frozenset({Role.EVENT_MANAGER}),
    Role.EVENT_MANAGER: frozenset({Role.ORGANIZER}),
    Role.ORGANIZER: frozenset(),
}

STAFF_ROLES = frozenset({Role.SUPER_ADMIN, Role.ADMIN})

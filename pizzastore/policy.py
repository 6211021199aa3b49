"""who may change which user field"""

import logging
from enum import Enum

from .database import DatabaseManager
from .session import Role, Session

logger = logging.getLogger(__name__)


class ProfileField(Enum):
    """editable user fields mapped to their column in `users`"""
    PHONE_NUMBER = "phoneNum"
    PASSWORD = "password"
    FAVORITE_ITEMS = "favoriteItems"
    LOGIN = "login"
    ROLE = "role"

    @property
    def label(self) -> str:
        """human name shown in prompts"""
        return self.name.lower().replace("_", " ")


SELF_SERVICE_FIELDS = frozenset({
    ProfileField.PHONE_NUMBER,
    ProfileField.PASSWORD,
    ProfileField.FAVORITE_ITEMS,
})


def can_mutate(role: Role, field: ProfileField, target_is_self: bool) -> bool:
    """managers may change anything on anyone; others only self-service fields on themselves"""
    if role is Role.MANAGER:
        return True
    return target_is_self and field in SELF_SERVICE_FIELDS


def editable_fields(role: Role) -> list[ProfileField]:
    """fields offered in the update prompt, in menu order"""
    if role is Role.MANAGER:
        return list(ProfileField)
    return [f for f in ProfileField if f in SELF_SERVICE_FIELDS]


def resolve_role(db: DatabaseManager, login: str) -> Role | None:
    """read the stored role for a login; none if the user does not exist"""
    rows = db.query("SELECT role FROM users WHERE login = ?;", (login,))
    if not rows:
        return None
    return Role.from_stored(rows[0]["role"])


def refresh_role(db: DatabaseManager, session: Session) -> Role | None:
    """re-read the caller's role before a mutation and update the session"""
    role = resolve_role(db, session.login)
    if role is not None and role is not session.role:
        logger.info("role of %s changed from %s to %s", session.login, session.role.value, role.value)
        session.role = role
    return role

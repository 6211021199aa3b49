import logging

from .database import DatabaseManager
from .errors import NotFound, Unauthorized
from .helpers import require_text
from .policy import ProfileField, can_mutate, refresh_role
from .session import Session

logger = logging.getLogger(__name__)

# column names come only from ProfileField, never from user input
_UPDATE_SQL = {f: f"UPDATE users SET {f.value} = ? WHERE login = ?;" for f in ProfileField}


class ProfileUpdater:
    """apply single-field edits to user records behind the role policy"""
    def __init__(self, db: DatabaseManager):
        self.db = db

    def update_field(self, session: Session, target_login: str, field: ProfileField, new_value: str) -> None:
        """overwrite one field of one user.

        raises NotFound when the target does not exist, Unauthorized when the
        caller's (freshly re-read) role does not allow the change, and
        StorageFailure when the statement itself fails. nothing is written
        unless every check passes.
        """
        value = require_text(new_value, f"new {field.label}")
        target_login = target_login.strip()
        role = refresh_role(self.db, session)
        if role is None:
            raise Unauthorized(f"session user '{session.login}' no longer exists")
        target_is_self = session.is_self(target_login)
        if not can_mutate(role, field, target_is_self):
            logger.warning("refused: %s (%s) tried to change %s of %s",
                           session.login, role.value, field.value, target_login)
            if target_is_self:
                raise Unauthorized(f"only managers can change {field.label}")
            raise Unauthorized("only managers can update other users")
        if not self.db.user_exists(target_login):
            raise NotFound(f"user '{target_login}' not found")

        self.db.execute(_UPDATE_SQL[field], (value, target_login))
        logger.info("%s updated %s of %s", session.login, field.value, target_login)

        # keep the session pointing at the caller's record after self-edits
        if target_is_self and field is ProfileField.LOGIN:
            session.login = value
        elif target_is_self and field is ProfileField.ROLE:
            refresh_role(self.db, session)

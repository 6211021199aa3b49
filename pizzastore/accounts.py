import logging
from dataclasses import dataclass

from termcolor import cprint, colored

from .config import MAX_LOGIN_LENGTH
from .database import DatabaseManager
from .errors import NotFound, ValidationFailure
from .helpers import require_text
from .policy import resolve_role
from .session import Role, Session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Profile:
    """public view of a user record (no password)"""
    login: str
    phone_number: str | None
    role: str
    favorite_items: str | None


# accounts/auth
class AccountManager:
    """manage user accounts and the current session (plain text passwords, compared exactly)"""
    def __init__(self, db: DatabaseManager):
        self.db = db
        self.session: Session | None = None

    def register(self, login: str, password: str, phone_number: str) -> None:
        """create a customer account"""
        login = require_text(login, "login")
        password = require_text(password, "password")
        phone_number = require_text(phone_number, "phone number")
        if len(login) > MAX_LOGIN_LENGTH:
            raise ValidationFailure(f"login must be at most {MAX_LOGIN_LENGTH} characters")
        if self.db.user_exists(login):
            raise ValidationFailure("login already taken")
        self.db.execute(
            """--sql
            INSERT INTO users(login, password, role, favoriteItems, phoneNum)
            VALUES (?, ?, ?, NULL, ?);
            """,
            (login, password, Role.CUSTOMER.value, phone_number)
        )
        logger.info("registered %s", login)

    def login(self, login: str, password: str) -> Session | None:
        """start a session if the credentials match exactly"""
        rows = self.db.query(
            "SELECT login FROM users WHERE login = ? AND password = ?;",
            (login, password)
        )
        if not rows:
            logger.info("failed login for %s", login)
            return None
        role = resolve_role(self.db, login)
        self.session = Session(login, role)
        logger.info("%s logged in as %s", login, role.value)
        return self.session

    def logout(self):
        """end the current session"""
        if self.session is None:
            cprint("no user logged in", "red"); return
        logger.info("%s logged out", self.session.login)
        cprint(f"logged out {self.session.login}", "green")
        self.session = None

    def profile(self, login: str) -> Profile:
        """look up any user's profile by login"""
        rows = self.db.query(
            "SELECT login, phoneNum, role, favoriteItems FROM users WHERE login = ?;",
            (login.strip(),)
        )
        if not rows:
            raise NotFound(f"user '{login.strip()}' not found")
        r = rows[0]
        return Profile(r["login"], r["phoneNum"], r["role"], r["favoriteItems"])

    def whoami(self):
        """print current user identity"""
        if self.session is None:
            cprint("no user currently logged in", "red"); return
        prefix = f"{self.session.role.value}: " if self.session.role is not Role.CUSTOMER else ""
        cprint(f"you are logged in as {prefix}{colored(self.session.login, 'yellow', attrs=['bold'])}", "green")

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    """access tier of a user"""
    CUSTOMER = "customer"
    DRIVER = "driver"
    MANAGER = "manager"

    @classmethod
    def from_stored(cls, raw: str | None) -> "Role":
        """map a stored role value (trimmed, case-insensitive); unknown values are customers"""
        value = (raw or "").strip().lower()
        try:
            return cls(value)
        except ValueError:
            return cls.CUSTOMER


@dataclass
class Session:
    """authenticated login plus the role resolved for it"""
    login: str
    role: Role

    def is_self(self, login: str) -> bool:
        """true if login names the session user"""
        return self.login == login

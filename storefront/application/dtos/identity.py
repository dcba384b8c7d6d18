"""Authenticated caller as handed over by the identity provider."""

from dataclasses import dataclass
from typing import Optional


ADMIN_ROLE = "ADMIN"


@dataclass(frozen=True)
class CustomerIdentity:
    user_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return (self.role or "").upper() == ADMIN_ROLE

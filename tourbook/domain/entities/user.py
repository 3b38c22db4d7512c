"""Entidad User - turista, guía o staff (vista mínima que usa el motor)."""

from dataclasses import dataclass
from datetime import datetime

from tourbook.domain.constants import ROLE_TOURIST


@dataclass
class User:
    id: str | None = None
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str | None = None
    role: str = ROLE_TOURIST
    is_verified: bool = False
    is_active: bool = True
    is_guest: bool = False
    created_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def has_role(self, *roles: str) -> bool:
        return self.role in roles

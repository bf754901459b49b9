from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import AppUser


class UserRepository(Protocol):
    """Repository interface for application users.

    Services depend on this protocol, not on a concrete database.
    """

    def get_by_id(self, user_id: str) -> Optional[AppUser]:
        raise NotImplementedError

    def create(self, *, user_id: str, email: str, name: str, role: Role) -> str:
        raise NotImplementedError

    def update(self, user_id: str, *, email: Optional[str] = None, name: Optional[str] = None) -> bool:
        """Change the given profile fields; None leaves a field as is."""
        raise NotImplementedError

    def delete_by_id(self, user_id: str) -> bool:
        raise NotImplementedError

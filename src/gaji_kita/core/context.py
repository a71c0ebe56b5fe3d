from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .enums import Role
from .exceptions import AuthorizationError


@dataclass(frozen=True)
class SessionContext:
    """Who is calling a use case.

    Built by the HTTP layer from the Flask session (operators) or from a
    verified API key (attendance machine), then passed explicitly to services.
    """

    user_id: Optional[int]
    full_name: str
    role: Role
    api_key_id: Optional[int] = None

    def require(self, *roles: Role) -> None:
        if self.role not in roles:
            raise AuthorizationError("Anda tidak memiliki akses untuk tindakan ini")

    @classmethod
    def system(cls, name: str = "system") -> "SessionContext":
        return cls(user_id=None, full_name=name, role=Role.ADMIN)

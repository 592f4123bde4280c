from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class Account:
    """
    A registered user account.

    This model is intentionally independent of the HTTP layer and of any
    particular database schema. `password_hash` always has the
    `<salt>:<hash>` shape produced by the password hasher and must never
    leave the backend.
    """

    id: int = 0
    name: str = ""
    email: str = ""
    password_hash: str = ""
    created_at: int = 0
    updated_at: int = 0

    def to_public_dict(self) -> Dict[str, Any]:
        """The subset of fields that may be returned to clients."""

        return {"id": self.id, "name": self.name, "email": self.email}


class AuthErrorKind(str, enum.Enum):
    """Why a register/login call failed."""

    VALIDATION = "validation"
    CONFLICT = "conflict"
    INVALID_CREDENTIALS = "invalid_credentials"
    HASHING_UNAVAILABLE = "hashing_unavailable"
    STORAGE = "storage"


@dataclass
class AuthResult:
    """Outcome of a register or login call."""

    success: bool
    message: str
    token: str = ""
    account: Account = field(default_factory=Account)
    error_kind: Optional[AuthErrorKind] = None

    @classmethod
    def failure(cls, kind: AuthErrorKind, message: str) -> "AuthResult":
        return cls(success=False, message=message, error_kind=kind)

    def to_payload(self) -> Dict[str, Any]:
        if not self.success:
            return {"success": False, "message": self.message}
        return {
            "success": True,
            "message": self.message,
            "token": self.token,
            "user": self.account.to_public_dict(),
        }

"""
Identity context: the authenticated actor every decision is taken for
"""

from enum import Enum
from pydantic import BaseModel, ConfigDict
from typing import Any, Optional


class Role(str, Enum):
    OWNER = "owner"
    SUPER = "super"
    TEXTER = "texter"


SERVICE_SUBJECT_ID = "service_role"


class Subject(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    role: Optional[Role] = None  # None only for the service identity
    team_id: Optional[str] = None
    is_active: bool = True
    is_paused: bool = False
    is_service: bool = False

    @classmethod
    def service(cls, subject_id: str = SERVICE_SUBJECT_ID) -> "Subject":
        """Administrative identity outside the Owner/Super/Texter role set"""
        return cls(id=subject_id, is_service=True)

    @classmethod
    def from_user(cls, user: Any) -> "Subject":
        """Build a subject from a users row (UserSnapshot or dict)"""
        if isinstance(user, dict):
            return cls(
                id=user["id"],
                role=Role(user["role"]),
                team_id=user.get("team_id"),
                is_active=user.get("is_active", True),
                is_paused=user.get("is_paused", False),
            )
        return cls(
            id=user.id,
            role=user.role,
            team_id=user.team_id,
            is_active=user.is_active,
            is_paused=user.is_paused,
        )

    @property
    def is_owner(self) -> bool:
        return self.role == Role.OWNER

    @property
    def is_texter(self) -> bool:
        return self.role == Role.TEXTER

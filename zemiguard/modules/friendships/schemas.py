from enum import Enum
from pydantic import BaseModel, ConfigDict
from typing import Optional


class FriendshipStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DENIED = "denied"


class FriendshipSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[str] = None
    requester_id: str
    addressee_id: str
    status: FriendshipStatus = FriendshipStatus.PENDING
    approved_by: Optional[str] = None

    def involves(self, user_id: str) -> bool:
        return user_id in (self.requester_id, self.addressee_id)


class DeniedFriendRequestSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[str] = None
    texter_id: str
    denied_user_id: str
    denied_by: Optional[str] = None

from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional


class ChatSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[str] = None
    created_by: str
    name: Optional[str] = None
    is_group: bool = False


class ChatMemberSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    chat_id: str
    user_id: str
    left_at: Optional[datetime] = None
    is_muted: bool = False
    is_pinned: bool = False

    @property
    def is_active(self) -> bool:
        return self.left_at is None

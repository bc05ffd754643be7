from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional


class MessageSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[str] = None
    chat_id: str
    sender_id: str
    type: str = "text"
    content: Optional[str] = None
    is_edited: bool = False
    edited_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[str] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


class MessageEditSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[str] = None
    message_id: str
    old_content: str


class MessageReactionSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[str] = None
    message_id: str
    user_id: str
    emoji: str


class StarredMessageSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[str] = None
    user_id: str
    message_id: str


class MessageReadReceiptSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[str] = None
    message_id: str
    user_id: str

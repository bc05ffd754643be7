from enum import Enum
from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional


class CallType(str, Enum):
    VOICE = "voice"
    VIDEO = "video"


class CallLogSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[str] = None
    chat_id: str
    initiator_id: str
    type: CallType = CallType.VOICE
    status: Optional[str] = None
    ended_at: Optional[datetime] = None
    duration_seconds: Optional[int] = None

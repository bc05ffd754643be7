from pydantic import BaseModel, ConfigDict
from typing import Optional


class PushTokenSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[str] = None
    user_id: str
    token: str = ""
    platform: Optional[str] = None


class UserSessionSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[str] = None
    user_id: str
    device_name: Optional[str] = None

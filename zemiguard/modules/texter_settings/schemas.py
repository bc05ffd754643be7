from pydantic import BaseModel, ConfigDict
from typing import List, Optional


class TexterSettingsSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[str] = None
    user_id: str
    can_send_images: bool = True
    can_send_voice: bool = True
    can_send_video: bool = True
    can_send_documents: bool = True
    can_share_location: bool = True
    can_voice_call: bool = True
    can_video_call: bool = True
    can_screen_share: bool = True
    can_access_wall: bool = True
    quiet_hours_start: Optional[str] = None
    quiet_hours_end: Optional[str] = None
    quiet_hours_days: Optional[List[int]] = None

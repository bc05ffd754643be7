from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional

from zemiguard.core.subject import Role


class UserSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    role: Role
    team_id: Optional[str] = None
    is_active: bool = True
    is_paused: bool = False
    display_name: Optional[str] = None
    status_message: Optional[str] = None
    avatar_url: Optional[str] = None
    zemi_number: Optional[str] = None
    last_seen_at: Optional[datetime] = None
    wall_enabled: Optional[bool] = None
    consent_accepted_at: Optional[datetime] = None

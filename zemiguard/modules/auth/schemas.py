from pydantic import BaseModel
from typing import List, Optional

from zemiguard.core.subject import Role


class SubjectResponse(BaseModel):
    id: str
    role: Optional[Role] = None
    team_id: Optional[str] = None
    is_active: bool
    is_paused: bool
    is_service: bool
    resources: List[str]

from pydantic import BaseModel, ConfigDict
from typing import Optional


class TeamSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[str] = None
    owner_id: str
    name: Optional[str] = None
    plan: Optional[str] = None

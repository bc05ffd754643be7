from pydantic import BaseModel, ConfigDict
from typing import Optional


class QuickMessageSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[str] = None
    user_id: str
    created_by: str
    content: str = ""
    sort_order: int = 0

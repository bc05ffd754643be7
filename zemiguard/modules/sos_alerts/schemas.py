from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional


class SOSAlertSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[str] = None
    texter_id: str
    acknowledged_at: Optional[datetime] = None
    acknowledged_by: Optional[str] = None

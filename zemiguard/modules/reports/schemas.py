from enum import Enum
from pydantic import BaseModel, ConfigDict
from typing import Optional


class ReportStatus(str, Enum):
    PENDING = "pending"
    REVIEWED = "reviewed"


class ReportSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[str] = None
    reporter_id: str
    reported_user_id: str
    reason: str = ""
    status: ReportStatus = ReportStatus.PENDING
    reviewed_by: Optional[str] = None

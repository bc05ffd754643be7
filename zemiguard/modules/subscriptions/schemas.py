from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional


class ManualSubscriptionSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[str] = None
    user_id: str
    plan_type: str = "pro"
    expires_at: Optional[datetime] = None
    granted_by: Optional[str] = None
    reason: Optional[str] = None

    @property
    def is_permanent(self) -> bool:
        return self.expires_at is None


class ManualSubscriptionGrant(BaseModel):
    user_id: str
    plan_type: str = "pro"
    expires_at: Optional[datetime] = None
    granted_by: Optional[str] = None
    reason: Optional[str] = None

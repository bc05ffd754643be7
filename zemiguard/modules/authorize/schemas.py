from pydantic import BaseModel
from typing import Any, Dict, List, Optional

from zemiguard.core.decisions import Decision
from zemiguard.core.policy import Operation


class AuthorizeRequest(BaseModel):
    operation: Operation
    resource_type: str
    before: Optional[Dict[str, Any]] = None
    after: Optional[Dict[str, Any]] = None
    changed_fields: Optional[List[str]] = None
    # Only the service identity may ask on behalf of another user
    subject_id: Optional[str] = None


class AuthorizeResponse(BaseModel):
    allowed: bool
    decision: Decision


class PolicyResource(BaseModel):
    name: str
    table: str
    operations: List[str]
    description: str


class PolicyMatrixResponse(BaseModel):
    resources: List[PolicyResource]
    permissions: List[str]

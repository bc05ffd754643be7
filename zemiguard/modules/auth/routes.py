from fastapi import APIRouter, Depends

from zemiguard.config.policy_config import RESOURCE_FAMILIES
from zemiguard.core.dependencies import get_current_subject
from zemiguard.core.subject import Subject
from zemiguard.modules.auth.schemas import SubjectResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", response_model=SubjectResponse)
async def get_me(subject: Subject = Depends(get_current_subject)):
    """Get the resolved subject and the resource families the gateway decides on"""
    return SubjectResponse(
        **subject.model_dump(),
        resources=list(RESOURCE_FAMILIES),
    )

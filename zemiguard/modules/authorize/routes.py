from fastapi import APIRouter, Depends, HTTPException, status

from zemiguard.config.policy_config import POLICY_MATRIX
from zemiguard.core.decisions import Decision
from zemiguard.core.dependencies import get_current_subject, get_gateway, raise_for_decision
from zemiguard.core.errors import InvalidDecisionRequest
from zemiguard.core.gateway import DecisionRequest, Gateway
from zemiguard.core.subject import Subject
from zemiguard.modules.authorize.schemas import (
    AuthorizeRequest, AuthorizeResponse, PolicyMatrixResponse
)

router = APIRouter(prefix="/authorize", tags=["authorize"])


def _decide(body: AuthorizeRequest, subject: Subject, gateway: Gateway) -> Decision:
    if body.subject_id and body.subject_id != subject.id:
        if not subject.is_service:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only the service identity can ask on behalf of another user"
            )
        request = DecisionRequest(subject_id=body.subject_id, **body.model_dump(exclude={"subject_id"}))
    else:
        request = DecisionRequest(subject=subject, **body.model_dump(exclude={"subject_id"}))
    try:
        return gateway.authorize(request)
    except InvalidDecisionRequest as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.post("", response_model=AuthorizeResponse)
async def authorize(
    body: AuthorizeRequest,
    subject: Subject = Depends(get_current_subject),
    gateway: Gateway = Depends(get_gateway)
):
    """Evaluate one operation and return the decision, allowed or not"""
    decision = _decide(body, subject, gateway)
    return AuthorizeResponse(allowed=decision.allowed, decision=decision)


@router.post("/enforce", response_model=AuthorizeResponse)
async def enforce(
    body: AuthorizeRequest,
    subject: Subject = Depends(get_current_subject),
    gateway: Gateway = Depends(get_gateway)
):
    """Evaluate one operation; denials come back as HTTP errors"""
    decision = _decide(body, subject, gateway)
    raise_for_decision(decision, body.operation)
    return AuthorizeResponse(allowed=True, decision=decision)


@router.get("/policies", response_model=PolicyMatrixResponse)
async def list_policies(subject: Subject = Depends(get_current_subject)):
    """Resource families and the operations a policy exists for"""
    return POLICY_MATRIX

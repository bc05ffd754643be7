"""
Core dependencies for subject resolution and decision enforcement
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from supabase import Client
from typing import Optional
import logging

from zemiguard.config import settings
from zemiguard.core.decisions import Decision
from zemiguard.core.errors import ERRORS_BY_KIND
from zemiguard.core.gateway import Gateway
from zemiguard.core.graph import RelationshipGraph
from zemiguard.core.policy import Operation
from zemiguard.core.subject import Subject
from zemiguard.database.supabase_client import get_service_supabase, get_supabase
from zemiguard.database.supabase_graph import SupabaseRelationshipGraph
from zemiguard.modules.auth.service import IdentityService

logger = logging.getLogger(__name__)

# auto_error off: a missing header is answered with 401, not the default 403
security = HTTPBearer(auto_error=False)


def get_identity_service(
    supabase: Client = Depends(get_supabase),
    service_supabase: Client = Depends(get_service_supabase)
) -> IdentityService:
    return IdentityService(supabase, service_supabase)


def get_current_subject(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    identity_service: IdentityService = Depends(get_identity_service)
) -> Subject:
    """Resolve the bearer token into the acting Subject"""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity_service.resolve_subject(credentials.credentials)


def get_graph(
    request: Request,
    supabase: Client = Depends(get_service_supabase)
) -> RelationshipGraph:
    """Request-scoped relationship graph; its read cache lives as long as the request"""
    if not hasattr(request.state, "graph"):
        request.state.graph = SupabaseRelationshipGraph(supabase)
    return request.state.graph


def get_gateway(graph: RelationshipGraph = Depends(get_graph)) -> Gateway:
    return Gateway(graph)


def raise_for_decision(decision: Decision, operation: Operation) -> None:
    """Turn a denial into the HTTPException matching its reason"""
    if decision.allowed:
        return
    if operation == Operation.SELECT and settings.select_denial_as_not_found:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resource not found")
    error_class = ERRORS_BY_KIND[decision.reason]
    raise HTTPException(
        status_code=error_class.status_code,
        detail={"reason": decision.reason.value, "detail": decision.detail or error_class.default_detail}
    )

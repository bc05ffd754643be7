"""
Decision gateway

Single entry point for authorization decisions. The gateway resolves the
subject, short-circuits the service identity, builds typed snapshots for the
resource family and hands a PolicyContext to the family's policy.
"""

import logging
from pydantic import BaseModel, ValidationError
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from zemiguard.config import Settings, settings as default_settings
from zemiguard.config.policy_config import is_operation_defined
from zemiguard.core.decisions import Decision, allow, deny
from zemiguard.core.errors import ErrorKind, InvalidDecisionRequest
from zemiguard.core.graph import RelationshipGraph
from zemiguard.core.policy import Operation, PolicyContext, ResourcePolicy
from zemiguard.core.subject import Subject

logger = logging.getLogger(__name__)


class DecisionRequest(BaseModel):
    """
    One question for the gateway.

    Either subject (already resolved, e.g. by the HTTP transport) or subject_id
    (resolved through the relationship graph) identifies the actor. before is the
    stored row, after the proposed row for inserts or the patch for updates.
    """
    subject: Optional[Subject] = None
    subject_id: Optional[str] = None
    operation: Operation
    resource_type: str
    before: Optional[Dict[str, Any]] = None
    after: Optional[Dict[str, Any]] = None
    changed_fields: Optional[List[str]] = None


class Gateway:
    def __init__(
        self,
        graph: RelationshipGraph,
        policies: Optional[Dict[str, ResourcePolicy]] = None,
        settings: Optional[Settings] = None
    ):
        if policies is None:
            # Imported here: the registry pulls in every policy module
            from zemiguard.modules.registry import default_policies
            policies = default_policies()
        self.graph = graph
        self.policies = policies
        self.settings = settings or default_settings

    def resolve_subject(self, request: DecisionRequest) -> Optional[Subject]:
        if request.subject is not None:
            return request.subject
        if not request.subject_id:
            return None
        user = self.graph.get_user(request.subject_id)
        if user is None:
            return None
        return Subject.from_user(user)

    def authorize(self, request: DecisionRequest) -> Decision:
        subject = self.resolve_subject(request)
        if subject is None:
            return self._log(request, None, deny(
                "No authenticated subject", ErrorKind.AUTHENTICATION_REQUIRED
            ))

        policy = self.policies.get(request.resource_type)
        if policy is None:
            return self._log(request, subject, deny(f"Unknown resource type '{request.resource_type}'"))

        if not is_operation_defined(request.resource_type, request.operation.value):
            return self._log(request, subject, deny(
                f"{request.operation.value} is not permitted on {request.resource_type}"
            ))

        # Service role bypasses row policies; uniqueness stays with storage
        if subject.is_service:
            return self._log(request, subject, allow())

        before, after, changed_fields = self._build_snapshots(policy, request)
        ctx = PolicyContext(
            subject=subject,
            operation=request.operation,
            graph=self.graph,
            before=before,
            after=after,
            changed_fields=changed_fields,
            settings=self.settings,
        )
        return self._log(request, subject, policy.evaluate(ctx))

    def _build_snapshots(
        self, policy: ResourcePolicy, request: DecisionRequest
    ) -> Tuple[Optional[BaseModel], Optional[BaseModel], FrozenSet[str]]:
        operation = request.operation
        needs_before = operation in (Operation.SELECT, Operation.UPDATE, Operation.DELETE)
        needs_after = operation in (Operation.INSERT, Operation.UPDATE)

        if needs_before and request.before is None:
            raise InvalidDecisionRequest(f"{operation.value} on {request.resource_type} requires 'before'")
        if needs_after and request.after is None:
            raise InvalidDecisionRequest(f"{operation.value} on {request.resource_type} requires 'after'")

        before_row = request.before if needs_before else None
        after_row = None
        changed_fields: FrozenSet[str] = frozenset()

        if operation == Operation.INSERT:
            after_row = request.after
            changed_fields = frozenset(after_row)
        elif operation == Operation.UPDATE:
            # after may be a partial patch; the proposed row is before with the patch applied
            after_row = {**before_row, **request.after}
            # Declared fields can widen the diff but never hide a key the patch changes
            changed_fields = frozenset(
                key for key, value in request.after.items()
                if before_row.get(key) != value
            )
            if request.changed_fields is not None:
                changed_fields |= frozenset(request.changed_fields)

        return (
            self._validate(policy, before_row, "before"),
            self._validate(policy, after_row, "after"),
            changed_fields,
        )

    def _validate(self, policy: ResourcePolicy, row: Optional[Dict[str, Any]], name: str) -> Optional[BaseModel]:
        if row is None:
            return None
        try:
            return policy.snapshot.model_validate(row)
        except ValidationError as e:
            raise InvalidDecisionRequest(f"Invalid '{name}' for {policy.resource_type}: {e}") from e

    def _log(self, request: DecisionRequest, subject: Optional[Subject], decision: Decision) -> Decision:
        actor = subject.id if subject is not None else "anonymous"
        if decision.allowed:
            logger.debug(
                f"Allowed {actor} {request.operation.value} on {request.resource_type} ({decision.effect})"
            )
        else:
            logger.info(
                f"Denied {actor} {request.operation.value} on {request.resource_type}: "
                f"{decision.reason.value} {decision.detail}"
            )
        return decision


def authorize(
    request: DecisionRequest,
    graph: RelationshipGraph,
    settings: Optional[Settings] = None
) -> Decision:
    """Evaluate one request with the default policy registry"""
    return Gateway(graph, settings=settings).authorize(request)

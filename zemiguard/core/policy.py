"""
Policy building blocks

Every resource family implements a ResourcePolicy. A policy is a pure function
of the PolicyContext: it never writes, never raises for a denial and reads
other rows only through the relationship graph.
"""

from dataclasses import dataclass, field
from enum import Enum
from pydantic import BaseModel
from typing import Any, FrozenSet, Iterable, Optional, Type

from zemiguard.config import Settings, settings as default_settings
from zemiguard.core.decisions import Decision, allow, allow_fields, deny
from zemiguard.core.errors import ErrorKind
from zemiguard.core.graph import RelationshipGraph
from zemiguard.core.subject import Subject


class Operation(str, Enum):
    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class PolicyContext:
    subject: Subject
    operation: Operation
    graph: RelationshipGraph
    before: Optional[Any] = None
    after: Optional[Any] = None
    changed_fields: FrozenSet[str] = frozenset()
    settings: Settings = field(default_factory=lambda: default_settings)

    @property
    def resource(self) -> Any:
        """Proposed row for inserts, stored row for everything else"""
        if self.operation == Operation.INSERT:
            return self.after
        return self.before

    def touches(self, *fields: str) -> bool:
        return bool(self.changed_fields.intersection(fields))


class ResourcePolicy:
    """Base strategy: every operation is denied unless a family overrides it"""
    resource_type: str = ""
    snapshot: Type[BaseModel] = BaseModel

    def evaluate(self, ctx: PolicyContext) -> Decision:
        handler = getattr(self, ctx.operation.value)
        return handler(ctx)

    def select(self, ctx: PolicyContext) -> Decision:
        return deny(f"{self.resource_type} rows cannot be read")

    def insert(self, ctx: PolicyContext) -> Decision:
        return deny(f"{self.resource_type} rows cannot be created")

    def update(self, ctx: PolicyContext) -> Decision:
        return deny(f"{self.resource_type} rows cannot be updated")

    def delete(self, ctx: PolicyContext) -> Decision:
        return deny(f"{self.resource_type} rows cannot be deleted")


def require(condition: bool, detail: str, reason: ErrorKind = ErrorKind.NOT_AUTHORIZED) -> Decision:
    if condition:
        return allow()
    return deny(detail, reason)


def restrict_fields(
    ctx: PolicyContext,
    writable: Optional[Iterable[str]] = None,
    immutable: Iterable[str] = ()
) -> Decision:
    """Check the changed fields of an update against the actor's writable mask.

    Touching an immutable field is an ImmutableFieldViolation, touching any
    other field outside the mask is NotAuthorized. With no mask the update is
    a plain Allow; otherwise the mask is handed back to the storage executor.
    """
    touched_immutable = ctx.changed_fields.intersection(immutable)
    if touched_immutable:
        return deny(
            f"Cannot change {', '.join(sorted(touched_immutable))}",
            ErrorKind.IMMUTABLE_FIELD_VIOLATION
        )
    if writable is None:
        return allow()
    writable = frozenset(writable)
    not_writable = ctx.changed_fields - writable
    if not_writable:
        return deny(f"Fields not writable: {', '.join(sorted(not_writable))}")
    return allow_fields(writable)


# Shared relationship predicates

def is_team_owner_of(subject: Subject, user_id: Optional[str], graph: RelationshipGraph) -> bool:
    """True if subject is an Owner and user_id belongs to the Owner's team"""
    if not subject.is_owner or not user_id or subject.team_id is None:
        return False
    user = graph.get_user(user_id)
    return user is not None and user.team_id == subject.team_id


def is_oversight_eligible(subject: Subject, chat_id: str, graph: RelationshipGraph) -> bool:
    """True if subject is an Owner and an active Texter of the Owner's team is in the chat"""
    if not subject.is_owner or subject.team_id is None:
        return False
    return graph.chat_has_team_texter(chat_id, subject.team_id)


def can_view_chat(subject: Subject, chat_id: str, graph: RelationshipGraph) -> bool:
    return graph.is_active_member(chat_id, subject.id) or is_oversight_eligible(subject, chat_id, graph)

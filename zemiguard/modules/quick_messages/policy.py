from zemiguard.core.decisions import Decision, allow, deny
from zemiguard.core.policy import (
    PolicyContext, ResourcePolicy, is_team_owner_of, require, restrict_fields
)
from zemiguard.core.subject import Role
from zemiguard.modules.quick_messages.schemas import QuickMessageSnapshot

WRITABLE_FIELDS = frozenset({"content", "sort_order", "updated_at"})


class QuickMessagePolicy(ResourcePolicy):
    """Canned replies. Texters only pick and send them; self or their Owner manages them."""
    resource_type = "quick_message"
    snapshot = QuickMessageSnapshot

    def _can_manage(self, ctx: PolicyContext, row: QuickMessageSnapshot) -> bool:
        subject = ctx.subject
        if row.created_by != subject.id:
            return False
        if row.user_id == subject.id and subject.role != Role.TEXTER:
            return True
        return is_team_owner_of(subject, row.user_id, ctx.graph)

    def _check_writer(self, ctx: PolicyContext, row: QuickMessageSnapshot) -> Decision:
        if not ctx.subject.is_active:
            return deny("Deactivated users cannot manage quick messages")
        if not self._can_manage(ctx, row):
            return deny("Quick messages are managed by their author for self, or by the Owner for a Texter")
        return allow()

    def select(self, ctx: PolicyContext) -> Decision:
        row = ctx.before
        if row.user_id == ctx.subject.id:
            return allow()
        return require(
            is_team_owner_of(ctx.subject, row.user_id, ctx.graph),
            "Quick messages are visible to their user and the team Owner only"
        )

    def insert(self, ctx: PolicyContext) -> Decision:
        return self._check_writer(ctx, ctx.after)

    def update(self, ctx: PolicyContext) -> Decision:
        # Both the stored and the proposed row must be manageable
        decision = self._check_writer(ctx, ctx.before)
        if not decision.allowed:
            return decision
        decision = self._check_writer(ctx, ctx.after)
        if not decision.allowed:
            return decision
        return restrict_fields(ctx, WRITABLE_FIELDS, immutable=("id", "user_id", "created_by"))

    def delete(self, ctx: PolicyContext) -> Decision:
        return self._check_writer(ctx, ctx.before)

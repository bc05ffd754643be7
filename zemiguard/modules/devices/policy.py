from zemiguard.core.decisions import Decision, allow, deny
from zemiguard.core.policy import (
    PolicyContext, ResourcePolicy, is_team_owner_of, require, restrict_fields
)
from zemiguard.modules.devices.schemas import PushTokenSnapshot, UserSessionSnapshot


class PushTokenPolicy(ResourcePolicy):
    resource_type = "push_token"
    snapshot = PushTokenSnapshot

    def _own(self, ctx: PolicyContext, row: PushTokenSnapshot) -> Decision:
        return require(row.user_id == ctx.subject.id, "Push tokens belong to their user only")

    def select(self, ctx: PolicyContext) -> Decision:
        return self._own(ctx, ctx.before)

    def insert(self, ctx: PolicyContext) -> Decision:
        return self._own(ctx, ctx.after)

    def update(self, ctx: PolicyContext) -> Decision:
        if ctx.before.user_id != ctx.subject.id:
            return deny("Push tokens belong to their user only")
        return restrict_fields(ctx, immutable=("id", "user_id"))

    def delete(self, ctx: PolicyContext) -> Decision:
        return self._own(ctx, ctx.before)


class UserSessionPolicy(ResourcePolicy):
    """Device sessions. The team Owner may see them and log a member out remotely."""
    resource_type = "user_session"
    snapshot = UserSessionSnapshot

    def _own_or_owner(self, ctx: PolicyContext, row: UserSessionSnapshot) -> bool:
        return row.user_id == ctx.subject.id or is_team_owner_of(ctx.subject, row.user_id, ctx.graph)

    def select(self, ctx: PolicyContext) -> Decision:
        return require(self._own_or_owner(ctx, ctx.before), "Sessions are visible to their user and the team Owner")

    def insert(self, ctx: PolicyContext) -> Decision:
        return require(ctx.after.user_id == ctx.subject.id, "Sessions can only be opened as yourself")

    def update(self, ctx: PolicyContext) -> Decision:
        if ctx.before.user_id != ctx.subject.id:
            return deny("Only your own sessions can be updated")
        return restrict_fields(ctx, immutable=("id", "user_id"))

    def delete(self, ctx: PolicyContext) -> Decision:
        if self._own_or_owner(ctx, ctx.before):
            return allow()
        return deny("Only the user or the team Owner can end a session")

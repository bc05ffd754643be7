from zemiguard.core.decisions import Decision, allow, deny
from zemiguard.core.policy import PolicyContext, ResourcePolicy, is_team_owner_of, require
from zemiguard.modules.subscriptions.schemas import ManualSubscriptionSnapshot

SERVICE_ONLY_DETAIL = "Manual subscriptions are granted by administrators only"


class ManualSubscriptionPolicy(ResourcePolicy):
    """Read access for the user and their Owner. Writes happen with the service identity only."""
    resource_type = "manual_subscription"
    snapshot = ManualSubscriptionSnapshot

    def select(self, ctx: PolicyContext) -> Decision:
        user_id = ctx.before.user_id
        if user_id == ctx.subject.id:
            return allow()
        return require(
            is_team_owner_of(ctx.subject, user_id, ctx.graph),
            "Subscriptions are visible to the user and their Owner only"
        )

    def insert(self, ctx: PolicyContext) -> Decision:
        return deny(SERVICE_ONLY_DETAIL)

    def update(self, ctx: PolicyContext) -> Decision:
        return deny(SERVICE_ONLY_DETAIL)

    def delete(self, ctx: PolicyContext) -> Decision:
        return deny(SERVICE_ONLY_DETAIL)

from zemiguard.core.decisions import Decision, allow, deny
from zemiguard.core.policy import (
    PolicyContext, ResourcePolicy, is_team_owner_of, require, restrict_fields
)
from zemiguard.core.subject import Role
from zemiguard.modules.texter_settings.schemas import TexterSettingsSnapshot


class TexterSettingsPolicy(ResourcePolicy):
    """Capability switches and quiet hours the Owner sets for a Texter. Supers never see them."""
    resource_type = "texter_settings"
    snapshot = TexterSettingsSnapshot

    def _owns_texter(self, ctx: PolicyContext, user_id: str) -> bool:
        if not is_team_owner_of(ctx.subject, user_id, ctx.graph):
            return False
        texter = ctx.graph.get_user(user_id)
        return texter is not None and texter.role == Role.TEXTER

    def select(self, ctx: PolicyContext) -> Decision:
        user_id = ctx.before.user_id
        if user_id == ctx.subject.id:
            return allow()
        return require(
            is_team_owner_of(ctx.subject, user_id, ctx.graph),
            "Texter settings are visible to the Texter and their Owner only"
        )

    def insert(self, ctx: PolicyContext) -> Decision:
        return require(
            self._owns_texter(ctx, ctx.after.user_id),
            "Only the Texter's Owner can create their settings"
        )

    def update(self, ctx: PolicyContext) -> Decision:
        if not self._owns_texter(ctx, ctx.before.user_id):
            return deny("Only the Texter's Owner can change their settings")
        return restrict_fields(ctx, immutable=("id", "user_id"))

from zemiguard.core.decisions import Decision, deny
from zemiguard.core.policy import PolicyContext, ResourcePolicy, require, restrict_fields
from zemiguard.modules.teams.schemas import TeamSnapshot


class TeamPolicy(ResourcePolicy):
    resource_type = "team"
    snapshot = TeamSnapshot

    def select(self, ctx: PolicyContext) -> Decision:
        team = ctx.before
        return require(
            ctx.subject.team_id is not None and ctx.subject.team_id == team.id,
            "Teams are visible to their own members only"
        )

    def insert(self, ctx: PolicyContext) -> Decision:
        # Any role may found a team; the founder becomes its Owner
        return require(
            ctx.after.owner_id == ctx.subject.id,
            "A new team must be owned by its creator"
        )

    def update(self, ctx: PolicyContext) -> Decision:
        if ctx.subject.id != ctx.before.owner_id:
            return deny("Only the team Owner can update the team")
        return restrict_fields(ctx, immutable=("id", "owner_id"))

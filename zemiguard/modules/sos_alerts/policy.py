from zemiguard.core.decisions import Decision, allow, deny
from zemiguard.core.errors import ErrorKind
from zemiguard.core.policy import (
    PolicyContext, ResourcePolicy, is_team_owner_of, require, restrict_fields
)
from zemiguard.core.subject import Role
from zemiguard.modules.sos_alerts.schemas import SOSAlertSnapshot

ACKNOWLEDGE_FIELDS = frozenset({"acknowledged_at", "acknowledged_by", "updated_at"})


class SOSAlertPolicy(ResourcePolicy):
    """
    Emergency alerts raised by a Texter.

    Insert deliberately ignores is_active: a deactivated or paused Texter can
    always raise an alarm.
    """
    resource_type = "sos_alert"
    snapshot = SOSAlertSnapshot

    def select(self, ctx: PolicyContext) -> Decision:
        texter_id = ctx.before.texter_id
        if texter_id == ctx.subject.id:
            return allow()
        return require(
            is_team_owner_of(ctx.subject, texter_id, ctx.graph),
            "SOS alerts are visible to the Texter and their Owner only"
        )

    def insert(self, ctx: PolicyContext) -> Decision:
        subject = ctx.subject
        if subject.role != Role.TEXTER:
            return deny("Only Texters can raise SOS alerts")
        return require(ctx.after.texter_id == subject.id, "SOS alerts can only be raised as yourself")

    def update(self, ctx: PolicyContext) -> Decision:
        subject, before, after = ctx.subject, ctx.before, ctx.after
        if not is_team_owner_of(subject, before.texter_id, ctx.graph):
            return deny("Only the Texter's Owner can acknowledge an SOS alert")
        if before.acknowledged_at is not None:
            return deny("SOS alert is already acknowledged", ErrorKind.INVALID_STATE_TRANSITION)
        if after.acknowledged_at is None:
            return deny("Acknowledging must set acknowledged_at", ErrorKind.INVALID_STATE_TRANSITION)
        if after.acknowledged_by != subject.id:
            return deny("acknowledged_by must be the acting Owner", ErrorKind.IMMUTABLE_FIELD_VIOLATION)
        return restrict_fields(ctx, ACKNOWLEDGE_FIELDS, immutable=("id", "texter_id"))

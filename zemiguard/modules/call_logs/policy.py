import logging

from zemiguard.core.decisions import Decision, allow, deny
from zemiguard.core.policy import (
    PolicyContext, ResourcePolicy, can_view_chat, require, restrict_fields
)
from zemiguard.core.subject import Role
from zemiguard.modules.call_logs.schemas import CallLogSnapshot, CallType

logger = logging.getLogger(__name__)

END_CALL_FIELDS = frozenset({"ended_at", "duration_seconds", "status", "updated_at"})

CAPABILITY_BY_CALL_TYPE = {
    CallType.VOICE: "can_voice_call",
    CallType.VIDEO: "can_video_call",
}


class CallLogPolicy(ResourcePolicy):
    resource_type = "call_log"
    snapshot = CallLogSnapshot

    def select(self, ctx: PolicyContext) -> Decision:
        return require(
            can_view_chat(ctx.subject, ctx.before.chat_id, ctx.graph),
            "Call logs are visible to chat members and oversight Owners only"
        )

    def insert(self, ctx: PolicyContext) -> Decision:
        subject, call = ctx.subject, ctx.after
        if not subject.is_active:
            return deny("Deactivated users cannot start calls")
        if call.initiator_id != subject.id:
            return deny("Calls can only be started as yourself")
        if not ctx.graph.is_active_member(call.chat_id, subject.id):
            return deny("Only active chat members can start calls")
        return self._check_capability(ctx, call)

    def update(self, ctx: PolicyContext) -> Decision:
        if not ctx.graph.is_active_member(ctx.before.chat_id, ctx.subject.id):
            return deny("Only active chat members can end calls")
        return restrict_fields(ctx, END_CALL_FIELDS, immutable=("id", "chat_id", "initiator_id", "type"))

    def _check_capability(self, ctx: PolicyContext, call: CallLogSnapshot) -> Decision:
        if not ctx.settings.enforce_call_capabilities or ctx.subject.role != Role.TEXTER:
            return allow()
        texter_settings = ctx.graph.get_texter_settings(ctx.subject.id)
        if texter_settings is None:
            # No settings row yet means the defaults, which allow everything
            return allow()
        capability = CAPABILITY_BY_CALL_TYPE[call.type]
        if not getattr(texter_settings, capability):
            logger.info(f"Texter {ctx.subject.id} blocked from {call.type.value} call by {capability}")
            return deny(f"{call.type.value.capitalize()} calls are disabled for this Texter")
        return allow()

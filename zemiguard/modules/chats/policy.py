from zemiguard.core.decisions import Decision, deny
from zemiguard.core.policy import (
    PolicyContext, ResourcePolicy, can_view_chat, require, restrict_fields
)
from zemiguard.modules.chats.schemas import ChatMemberSnapshot, ChatSnapshot

MEMBER_WRITABLE_FIELDS = frozenset({"is_muted", "is_pinned"})


class ChatPolicy(ResourcePolicy):
    resource_type = "chat"
    snapshot = ChatSnapshot

    def select(self, ctx: PolicyContext) -> Decision:
        # An Owner sees no chat without a Texter of their own team, even one full of their Supers
        return require(
            can_view_chat(ctx.subject, ctx.before.id, ctx.graph),
            "Chat is visible to its members and oversight Owners only"
        )

    def insert(self, ctx: PolicyContext) -> Decision:
        if ctx.after.created_by != ctx.subject.id:
            return deny("Chats can only be created as yourself")
        return require(ctx.subject.is_active, "Deactivated users cannot create chats")

    def update(self, ctx: PolicyContext) -> Decision:
        if ctx.subject.id != ctx.before.created_by:
            return deny("Only the chat creator can update the chat")
        return restrict_fields(ctx, immutable=("id", "created_by"))


class ChatMemberPolicy(ResourcePolicy):
    resource_type = "chat_member"
    snapshot = ChatMemberSnapshot

    def select(self, ctx: PolicyContext) -> Decision:
        return require(
            can_view_chat(ctx.subject, ctx.before.chat_id, ctx.graph),
            "Chat members are visible to members and oversight Owners only"
        )

    def insert(self, ctx: PolicyContext) -> Decision:
        chat = ctx.graph.get_chat(ctx.after.chat_id)
        return require(
            chat is not None and chat.created_by == ctx.subject.id,
            "Only the chat creator can add members"
        )

    def update(self, ctx: PolicyContext) -> Decision:
        member = ctx.before
        if member.user_id != ctx.subject.id:
            return deny("Members can only change their own chat settings")
        return restrict_fields(ctx, MEMBER_WRITABLE_FIELDS, immutable=("chat_id", "user_id"))

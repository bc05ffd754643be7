from typing import Optional

from zemiguard.core.decisions import Decision, allow, deny
from zemiguard.core.errors import ErrorKind
from zemiguard.core.policy import (
    PolicyContext,
    ResourcePolicy,
    can_view_chat,
    is_oversight_eligible,
    require,
    restrict_fields,
)
from zemiguard.modules.messages.schemas import (
    MessageEditSnapshot,
    MessageReactionSnapshot,
    MessageReadReceiptSnapshot,
    MessageSnapshot,
    StarredMessageSnapshot,
)

EDIT_FIELDS = frozenset({"content", "is_edited", "edited_at"})
SOFT_DELETE_FIELDS = frozenset({"deleted_at", "deleted_by"})
MESSAGE_IMMUTABLE_FIELDS = ("id", "chat_id", "sender_id", "type")


class MessagePolicy(ResourcePolicy):
    """Messages are soft-deleted: the row and its content stay for the sender and oversight."""
    resource_type = "message"
    snapshot = MessageSnapshot

    def select(self, ctx: PolicyContext) -> Decision:
        subject, message = ctx.subject, ctx.before
        if message.is_deleted:
            if message.sender_id == subject.id:
                return allow()
            return require(
                is_oversight_eligible(subject, message.chat_id, ctx.graph),
                "Deleted messages are visible to their sender and oversight Owners only"
            )
        return require(
            can_view_chat(subject, message.chat_id, ctx.graph),
            "Messages are visible to chat members and oversight Owners only"
        )

    def insert(self, ctx: PolicyContext) -> Decision:
        subject, message = ctx.subject, ctx.after
        if not subject.is_active:
            return deny("Deactivated users cannot send messages")
        if message.sender_id != subject.id:
            return deny("Messages can only be sent as yourself")
        return require(
            ctx.graph.is_active_member(message.chat_id, subject.id),
            "Only active chat members can send messages"
        )

    def update(self, ctx: PolicyContext) -> Decision:
        subject, before, after = ctx.subject, ctx.before, ctx.after
        if before.sender_id != subject.id:
            return deny("Only the sender can change a message")

        if ctx.touches(*SOFT_DELETE_FIELDS):
            return self._soft_delete(ctx)

        if before.is_deleted:
            return deny("Soft-deleted messages cannot be edited", ErrorKind.INVALID_STATE_TRANSITION)
        if ctx.touches("content") and not after.is_edited:
            return deny("Edited messages must be flagged is_edited", ErrorKind.INVALID_STATE_TRANSITION)
        return restrict_fields(ctx, EDIT_FIELDS | {"updated_at"}, immutable=MESSAGE_IMMUTABLE_FIELDS)

    def _soft_delete(self, ctx: PolicyContext) -> Decision:
        subject, before, after = ctx.subject, ctx.before, ctx.after
        if before.is_deleted:
            return deny("Message is already deleted", ErrorKind.INVALID_STATE_TRANSITION)
        if after.deleted_at is None:
            return deny("A soft-delete must set deleted_at", ErrorKind.INVALID_STATE_TRANSITION)
        if after.deleted_by != subject.id:
            return deny("deleted_by must be the sender", ErrorKind.IMMUTABLE_FIELD_VIOLATION)
        return restrict_fields(ctx, SOFT_DELETE_FIELDS | {"updated_at"}, immutable=MESSAGE_IMMUTABLE_FIELDS)


class MessageEditPolicy(ResourcePolicy):
    """Append-only edit history, one row per edit."""
    resource_type = "message_edit"
    snapshot = MessageEditSnapshot

    def select(self, ctx: PolicyContext) -> Decision:
        message = ctx.graph.get_message(ctx.before.message_id)
        if message is None:
            return deny("Message not found")
        if message.sender_id == ctx.subject.id:
            return allow()
        # Chat members who can read the message still cannot read its history
        return require(
            is_oversight_eligible(ctx.subject, message.chat_id, ctx.graph),
            "Edit history is visible to the sender and oversight Owners only"
        )

    def insert(self, ctx: PolicyContext) -> Decision:
        message = ctx.graph.get_message(ctx.after.message_id)
        if message is None or message.sender_id != ctx.subject.id:
            return deny("Only the sender can record an edit")
        if message.is_deleted:
            return deny("Soft-deleted messages cannot be edited", ErrorKind.INVALID_STATE_TRANSITION)
        # Authorized before the message update, so the stored content is the pre-edit text
        return require(
            ctx.after.old_content == message.content,
            "old_content must match the message content being replaced",
            ErrorKind.INVALID_STATE_TRANSITION
        )

    def update(self, ctx: PolicyContext) -> Decision:
        return deny("Edit history is append-only", ErrorKind.INVALID_STATE_TRANSITION)

    def delete(self, ctx: PolicyContext) -> Decision:
        return deny("Edit history is append-only", ErrorKind.INVALID_STATE_TRANSITION)


def _message_chat_id(ctx: PolicyContext, message_id: str) -> Optional[str]:
    message = ctx.graph.get_message(message_id)
    return message.chat_id if message is not None else None


class MessageReactionPolicy(ResourcePolicy):
    resource_type = "message_reaction"
    snapshot = MessageReactionSnapshot

    def select(self, ctx: PolicyContext) -> Decision:
        chat_id = _message_chat_id(ctx, ctx.before.message_id)
        return require(
            chat_id is not None and can_view_chat(ctx.subject, chat_id, ctx.graph),
            "Reactions are visible to chat members and oversight Owners only"
        )

    def insert(self, ctx: PolicyContext) -> Decision:
        if ctx.after.user_id != ctx.subject.id:
            return deny("Reactions can only be added as yourself")
        chat_id = _message_chat_id(ctx, ctx.after.message_id)
        return require(
            chat_id is not None and ctx.graph.is_active_member(chat_id, ctx.subject.id),
            "Only active chat members can react"
        )

    def delete(self, ctx: PolicyContext) -> Decision:
        return require(ctx.before.user_id == ctx.subject.id, "Only your own reactions can be removed")


class StarredMessagePolicy(ResourcePolicy):
    """Stars are personal bookmarks, nobody else sees them."""
    resource_type = "starred_message"
    snapshot = StarredMessageSnapshot

    def select(self, ctx: PolicyContext) -> Decision:
        return require(ctx.before.user_id == ctx.subject.id, "Stars are private")

    def insert(self, ctx: PolicyContext) -> Decision:
        return require(ctx.after.user_id == ctx.subject.id, "Messages can only be starred as yourself")

    def delete(self, ctx: PolicyContext) -> Decision:
        return require(ctx.before.user_id == ctx.subject.id, "Only your own stars can be removed")


class MessageReadReceiptPolicy(ResourcePolicy):
    resource_type = "message_read_receipt"
    snapshot = MessageReadReceiptSnapshot

    def select(self, ctx: PolicyContext) -> Decision:
        chat_id = _message_chat_id(ctx, ctx.before.message_id)
        return require(
            chat_id is not None and can_view_chat(ctx.subject, chat_id, ctx.graph),
            "Read receipts are visible to chat members and oversight Owners only"
        )

    def insert(self, ctx: PolicyContext) -> Decision:
        if ctx.after.user_id != ctx.subject.id:
            return deny("Messages can only be marked read as yourself")
        chat_id = _message_chat_id(ctx, ctx.after.message_id)
        return require(
            chat_id is not None and ctx.graph.is_active_member(chat_id, ctx.subject.id),
            "Only active chat members can mark messages read"
        )

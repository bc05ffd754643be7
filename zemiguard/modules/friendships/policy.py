from zemiguard.core.decisions import Decision, allow, deny
from zemiguard.core.errors import ErrorKind
from zemiguard.core.policy import (
    PolicyContext, ResourcePolicy, is_team_owner_of, require, restrict_fields
)
from zemiguard.core.subject import Role
from zemiguard.modules.friendships.schemas import (
    DeniedFriendRequestSnapshot, FriendshipSnapshot, FriendshipStatus
)

ANSWER_WRITABLE_FIELDS = frozenset({"status", "approved_by", "updated_at"})


class FriendshipPolicy(ResourcePolicy):
    """Friend requests: pending -> accepted | denied, terminal once answered."""
    resource_type = "friendship"
    snapshot = FriendshipSnapshot

    def _is_party_or_owner(self, ctx: PolicyContext, friendship: FriendshipSnapshot) -> bool:
        subject = ctx.subject
        if friendship.involves(subject.id):
            return True
        return (
            is_team_owner_of(subject, friendship.requester_id, ctx.graph)
            or is_team_owner_of(subject, friendship.addressee_id, ctx.graph)
        )

    def select(self, ctx: PolicyContext) -> Decision:
        return require(
            self._is_party_or_owner(ctx, ctx.before),
            "Friendships are visible to both parties and their Owners"
        )

    def insert(self, ctx: PolicyContext) -> Decision:
        subject, proposed = ctx.subject, ctx.after
        if proposed.requester_id != subject.id:
            return deny("Friend requests can only be sent as yourself")
        if not subject.is_active:
            return deny("Deactivated users cannot send friend requests")
        return require(
            proposed.status == FriendshipStatus.PENDING,
            "Friend requests must be created as pending",
            ErrorKind.INVALID_STATE_TRANSITION
        )

    def update(self, ctx: PolicyContext) -> Decision:
        subject, before, after = ctx.subject, ctx.before, ctx.after

        if before.status != FriendshipStatus.PENDING:
            return deny(
                f"A {before.status.value} friendship cannot change state",
                ErrorKind.INVALID_STATE_TRANSITION
            )
        if after.status == FriendshipStatus.PENDING:
            return deny(
                "Friend requests only move from pending to accepted or denied",
                ErrorKind.INVALID_STATE_TRANSITION
            )
        # Holds even when the requester is also authorized some other way
        if subject.id == before.requester_id:
            return deny("The requester cannot answer their own friend request")

        addressee = ctx.graph.get_user(before.addressee_id)
        addressee_is_texter = addressee is not None and addressee.role == Role.TEXTER

        answers_as_addressee = subject.id == before.addressee_id
        if answers_as_addressee and addressee_is_texter and not ctx.settings.texter_self_accept_friendships:
            answers_as_addressee = False
        answers_for_texter = (
            not answers_as_addressee
            and addressee_is_texter
            and is_team_owner_of(subject, before.addressee_id, ctx.graph)
        )

        if not (answers_as_addressee or answers_for_texter):
            return deny("Only the addressee or the Owner of a Texter addressee can answer")

        if answers_as_addressee and after.approved_by is not None:
            return deny(
                "approved_by is only recorded when an Owner answers for a Texter",
                ErrorKind.INVALID_STATE_TRANSITION
            )
        if answers_for_texter and after.approved_by != subject.id:
            return deny(
                "approved_by must be the Owner answering for the Texter",
                ErrorKind.INVALID_STATE_TRANSITION
            )

        return restrict_fields(ctx, ANSWER_WRITABLE_FIELDS, immutable=("id", "requester_id", "addressee_id"))

    def delete(self, ctx: PolicyContext) -> Decision:
        return require(
            self._is_party_or_owner(ctx, ctx.before),
            "Only either party or their Owners can remove a friendship"
        )


class DeniedFriendRequestPolicy(ResourcePolicy):
    """Standing blocks an Owner records for a Texter; the Texter has no access."""
    resource_type = "denied_friend_request"
    snapshot = DeniedFriendRequestSnapshot

    def _owns_texter(self, ctx: PolicyContext, denial: DeniedFriendRequestSnapshot) -> bool:
        return is_team_owner_of(ctx.subject, denial.texter_id, ctx.graph)

    def select(self, ctx: PolicyContext) -> Decision:
        return require(self._owns_texter(ctx, ctx.before), "Only the Texter's Owner can see denials")

    def insert(self, ctx: PolicyContext) -> Decision:
        if not self._owns_texter(ctx, ctx.after):
            return deny("Only the Texter's Owner can deny friend requests")
        if ctx.after.denied_by != ctx.subject.id:
            return deny("denied_by must be the Owner recording the denial", ErrorKind.IMMUTABLE_FIELD_VIOLATION)
        return allow()

    def delete(self, ctx: PolicyContext) -> Decision:
        return require(self._owns_texter(ctx, ctx.before), "Only the Texter's Owner can lift a denial")

from zemiguard.core.decisions import Decision, allow, deny
from zemiguard.core.policy import PolicyContext, ResourcePolicy, require, restrict_fields
from zemiguard.modules.friendships.schemas import FriendshipStatus
from zemiguard.modules.users.schemas import UserSnapshot

# Never writable through a self-update, whatever the payload
IMMUTABLE_FIELDS = ("id", "role", "team_id")

SELF_WRITABLE_FIELDS = frozenset({
    "display_name",
    "avatar_url",
    "status_message",
    "last_seen_at",
    "wall_enabled",
    "consent_accepted_at",
    "updated_at",
})

# Owner administration: deactivate/reactivate and pause/unpause
ADMIN_WRITABLE_FIELDS = frozenset({"is_active", "is_paused", "updated_at"})


class UserPolicy(ResourcePolicy):
    resource_type = "user"
    snapshot = UserSnapshot

    def select(self, ctx: PolicyContext) -> Decision:
        subject, user = ctx.subject, ctx.before
        if user.id == subject.id:
            return allow()
        if subject.team_id is not None and user.team_id == subject.team_id:
            return allow()
        # Pending requests are visible to both sides so either can review them
        return require(
            ctx.graph.has_friendship(
                subject.id, user.id, FriendshipStatus.ACCEPTED, FriendshipStatus.PENDING
            ),
            "User is not in your team and not a friend"
        )

    def insert(self, ctx: PolicyContext) -> Decision:
        return require(ctx.after.id == ctx.subject.id, "A user can only create their own identity row")

    def update(self, ctx: PolicyContext) -> Decision:
        subject, user = ctx.subject, ctx.before
        is_admin = subject.is_owner and subject.team_id is not None and user.team_id == subject.team_id

        if is_admin and ctx.touches("is_active", "is_paused"):
            writable = ADMIN_WRITABLE_FIELDS
            if user.id == subject.id:
                writable = writable | SELF_WRITABLE_FIELDS
            return restrict_fields(ctx, writable, immutable=IMMUTABLE_FIELDS)

        if user.id == subject.id:
            return restrict_fields(ctx, SELF_WRITABLE_FIELDS, immutable=IMMUTABLE_FIELDS)

        if ctx.touches("is_active", "is_paused"):
            return deny("Only the team Owner can deactivate or pause members")
        return deny("Users can only update their own profile")

from zemiguard.core.decisions import Decision, allow, deny
from zemiguard.core.errors import ErrorKind
from zemiguard.core.policy import (
    PolicyContext, ResourcePolicy, is_team_owner_of, require, restrict_fields
)
from zemiguard.modules.reports.schemas import ReportSnapshot, ReportStatus

REVIEW_FIELDS = frozenset({"status", "reviewed_by", "updated_at"})


class ReportPolicy(ResourcePolicy):
    resource_type = "report"
    snapshot = ReportSnapshot

    def _owns_either_party(self, ctx: PolicyContext, report: ReportSnapshot) -> bool:
        return (
            is_team_owner_of(ctx.subject, report.reporter_id, ctx.graph)
            or is_team_owner_of(ctx.subject, report.reported_user_id, ctx.graph)
        )

    def select(self, ctx: PolicyContext) -> Decision:
        report = ctx.before
        if ctx.subject.id in (report.reporter_id, report.reported_user_id):
            return allow()
        return require(
            self._owns_either_party(ctx, report),
            "Reports are visible to both parties and their Owners only"
        )

    def insert(self, ctx: PolicyContext) -> Decision:
        subject, report = ctx.subject, ctx.after
        if not subject.is_active:
            return deny("Deactivated users cannot file reports")
        if report.reporter_id != subject.id:
            return deny("Reports can only be filed as yourself")
        return require(
            report.status == ReportStatus.PENDING,
            "Reports must be filed as pending",
            ErrorKind.INVALID_STATE_TRANSITION
        )

    def update(self, ctx: PolicyContext) -> Decision:
        subject, before, after = ctx.subject, ctx.before, ctx.after
        if not self._owns_either_party(ctx, before):
            return deny("Only an Owner of either party can review a report")
        if before.status != ReportStatus.PENDING:
            return deny("Report is already reviewed", ErrorKind.INVALID_STATE_TRANSITION)
        if after.status != ReportStatus.REVIEWED:
            return deny("Reports only move from pending to reviewed", ErrorKind.INVALID_STATE_TRANSITION)
        if after.reviewed_by != subject.id:
            return deny("reviewed_by must be the reviewing Owner", ErrorKind.IMMUTABLE_FIELD_VIOLATION)
        return restrict_fields(
            ctx, REVIEW_FIELDS, immutable=("id", "reporter_id", "reported_user_id", "reason")
        )

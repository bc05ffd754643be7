from factories import IDS, assert_denied, assert_masked, set_user
from zemiguard.core.errors import ErrorKind


def report(status="pending", **fields):
    return {
        "id": "report-1",
        "reporter_id": IDS["texter1"],
        "reported_user_id": IDS["super2"],
        "reason": "spam",
        "status": status,
        **fields,
    }


def test_active_user_files_pending_report(decide):
    assert decide("texter1", "insert", "report", after=report()).allowed
    assert_denied(decide("super1", "insert", "report", after=report()))
    assert_denied(decide("texter1", "insert", "report", after=report("reviewed")), ErrorKind.INVALID_STATE_TRANSITION)


def test_deactivated_user_cannot_report(decide, graph):
    set_user(graph, "texter1", is_active=False)
    assert_denied(decide("texter1", "insert", "report", after=report()))


def test_parties_and_their_owners_see_report(decide):
    for actor in ("texter1", "super2", "owner1", "owner2"):
        assert decide(actor, "select", "report", before=report()).allowed
    for actor in ("super1", "texter2"):
        assert_denied(decide(actor, "select", "report", before=report()))


def test_owner_reviews_report(decide):
    decision = decide("owner1", "update", "report", before=report(),
                      after={"status": "reviewed", "reviewed_by": IDS["owner1"]})
    assert_masked(decision, "status", "reviewed_by")
    assert decide("owner2", "update", "report", before=report(),
                  after={"status": "reviewed", "reviewed_by": IDS["owner2"]}).allowed


def test_reviewer_must_be_self(decide):
    decision = decide("owner1", "update", "report", before=report(),
                      after={"status": "reviewed", "reviewed_by": IDS["owner2"]})
    assert_denied(decision, ErrorKind.IMMUTABLE_FIELD_VIOLATION)


def test_non_owners_cannot_review(decide):
    for actor in ("texter1", "super1", "super2"):
        assert_denied(decide(actor, "update", "report", before=report(),
                             after={"status": "reviewed", "reviewed_by": IDS[actor]}))


def test_reviewed_report_is_final(decide):
    reviewed = report("reviewed", reviewed_by=IDS["owner1"])
    decision = decide("owner1", "update", "report", before=reviewed, after={"status": "pending"})
    assert_denied(decision, ErrorKind.INVALID_STATE_TRANSITION)


def test_reported_reason_is_immutable(decide):
    decision = decide("owner1", "update", "report", before=report(),
                      after={"status": "reviewed", "reviewed_by": IDS["owner1"], "reason": "other"})
    assert_denied(decision, ErrorKind.IMMUTABLE_FIELD_VIOLATION)

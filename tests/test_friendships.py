import pytest

from factories import IDS, assert_denied, assert_masked, row, set_user
from zemiguard.config import Settings
from zemiguard.core.errors import ErrorKind
from zemiguard.core.gateway import DecisionRequest, Gateway


@pytest.fixture
def pending(graph):
    friendship = next(f for f in graph.friendships if f.id == IDS["friendship_pending"])
    return row(friendship)


@pytest.fixture
def accepted(graph):
    friendship = next(f for f in graph.friendships if f.id == IDS["friendship_accepted"])
    return row(friendship)


def test_parties_and_their_owners_see_friendship(decide, pending):
    for actor in ("texter1", "super2", "owner1", "owner2"):
        assert decide(actor, "select", "friendship", before=pending).allowed
    for actor in ("super1", "texter2"):
        assert_denied(decide(actor, "select", "friendship", before=pending))


def test_request_is_created_pending_by_requester(decide):
    request = {"requester_id": IDS["texter1"], "addressee_id": IDS["super1"], "status": "pending"}
    assert decide("texter1", "insert", "friendship", after=request).allowed
    assert_denied(decide("super1", "insert", "friendship", after=request))


def test_request_cannot_be_created_accepted(decide):
    request = {"requester_id": IDS["texter1"], "addressee_id": IDS["super1"], "status": "accepted"}
    assert_denied(decide("texter1", "insert", "friendship", after=request), ErrorKind.INVALID_STATE_TRANSITION)


def test_deactivated_user_cannot_send_requests(decide, graph):
    set_user(graph, "texter1", is_active=False)
    request = {"requester_id": IDS["texter1"], "addressee_id": IDS["super1"]}
    assert_denied(decide("texter1", "insert", "friendship", after=request))


def test_addressee_accepts(decide, pending):
    decision = decide("texter1", "update", "friendship", before=pending, after={"status": "accepted"})
    assert_masked(decision, "status", "approved_by")


def test_owner_accepts_for_texter_and_records_approval(decide, pending):
    decision = decide("owner1", "update", "friendship", before=pending,
                      after={"status": "accepted", "approved_by": IDS["owner1"]})
    assert_masked(decision, "status")


def test_owner_must_record_self_as_approver(decide, pending):
    decision = decide("owner1", "update", "friendship", before=pending, after={"status": "accepted"})
    assert_denied(decision, ErrorKind.INVALID_STATE_TRANSITION)


def test_addressee_cannot_claim_owner_approval(decide, pending):
    decision = decide("texter1", "update", "friendship", before=pending,
                      after={"status": "accepted", "approved_by": IDS["owner1"]})
    assert_denied(decision, ErrorKind.INVALID_STATE_TRANSITION)


def test_requester_cannot_accept_own_request(decide, pending):
    assert_denied(decide("super2", "update", "friendship", before=pending, after={"status": "accepted"}))


def test_requester_owner_cannot_accept(decide, pending):
    decision = decide("owner2", "update", "friendship", before=pending,
                      after={"status": "accepted", "approved_by": IDS["owner2"]})
    assert_denied(decision)


def test_deny_uses_the_same_actors(decide, pending):
    assert decide("texter1", "update", "friendship", before=pending, after={"status": "denied"}).allowed
    assert_denied(decide("super1", "update", "friendship", before=pending, after={"status": "denied"}))


def test_answered_friendship_is_terminal(decide, accepted):
    decision = decide("texter2", "update", "friendship", before=accepted, after={"status": "denied"})
    assert_denied(decision, ErrorKind.INVALID_STATE_TRANSITION)


def test_pending_to_pending_is_not_a_transition(decide, pending):
    decision = decide("texter1", "update", "friendship", before=pending, after={"status": "pending"})
    assert_denied(decision, ErrorKind.INVALID_STATE_TRANSITION)


def test_parties_are_immutable(decide, pending):
    decision = decide("texter1", "update", "friendship", before=pending,
                      after={"status": "accepted", "requester_id": IDS["super1"]})
    assert_denied(decision, ErrorKind.IMMUTABLE_FIELD_VIOLATION)


def test_owner_cannot_answer_for_non_texter(decide, graph):
    friendship = row(graph.add_friendship(
        id="eeee0003", requester_id=IDS["texter2"], addressee_id=IDS["super1"]
    ))
    decision = decide("owner1", "update", "friendship", before=friendship,
                      after={"status": "accepted", "approved_by": IDS["owner1"]})
    assert_denied(decision)
    assert decide("super1", "update", "friendship", before=friendship, after={"status": "accepted"}).allowed


def test_texter_self_accept_can_be_switched_off(graph, subject_for, pending):
    gateway = Gateway(graph, settings=Settings(_env_file=None, texter_self_accept_friendships=False))

    def answer(actor, patch):
        return gateway.authorize(DecisionRequest(
            subject=subject_for(actor), operation="update", resource_type="friendship",
            before=pending, after=patch,
        ))

    assert_denied(answer("texter1", {"status": "accepted"}))
    assert answer("owner1", {"status": "accepted", "approved_by": IDS["owner1"]}).allowed


def test_either_party_or_owner_removes_friendship(decide, pending):
    for actor in ("texter1", "super2", "owner1", "owner2"):
        assert decide(actor, "delete", "friendship", before=pending).allowed
    assert_denied(decide("super1", "delete", "friendship", before=pending))


def denial(denied_by="owner1"):
    return {"texter_id": IDS["texter1"], "denied_user_id": IDS["super2"], "denied_by": IDS[denied_by]}


def test_owner_manages_denied_requests_for_texter(decide):
    assert decide("owner1", "insert", "denied_friend_request", after=denial()).allowed
    assert decide("owner1", "select", "denied_friend_request", before=denial()).allowed
    assert decide("owner1", "delete", "denied_friend_request", before=denial()).allowed


def test_denied_by_must_be_acting_owner(decide):
    decision = decide("owner1", "insert", "denied_friend_request", after=denial("super1"))
    assert_denied(decision, ErrorKind.IMMUTABLE_FIELD_VIOLATION)


def test_texter_and_others_have_no_access_to_denials(decide):
    for actor in ("texter1", "super1", "owner2"):
        assert_denied(decide(actor, "select", "denied_friend_request", before=denial()))
        assert_denied(decide(actor, "insert", "denied_friend_request", after=denial(actor)))
        assert_denied(decide(actor, "delete", "denied_friend_request", before=denial()))

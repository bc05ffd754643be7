import pytest

from factories import IDS, assert_denied
from fake_supabase import FakeSupabase
from zemiguard.core.errors import UniquenessViolation
from zemiguard.core.subject import Subject
from zemiguard.modules.subscriptions.schemas import ManualSubscriptionGrant
from zemiguard.modules.subscriptions.service import ManualSubscriptionService


def subscription(user="texter1"):
    return {"id": "sub-1", "user_id": IDS[user], "plan_type": "pro", "expires_at": None}


def test_user_and_owner_read_subscription(decide):
    assert decide("texter1", "select", "manual_subscription", before=subscription()).allowed
    assert decide("owner1", "select", "manual_subscription", before=subscription()).allowed
    for actor in ("super1", "owner2"):
        assert_denied(decide(actor, "select", "manual_subscription", before=subscription()))


def test_no_member_writes_subscriptions(decide):
    for actor in ("owner1", "texter1"):
        assert_denied(decide(actor, "insert", "manual_subscription", after=subscription()))
        assert_denied(decide(actor, "update", "manual_subscription", before=subscription(),
                             after={"plan_type": "family"}))
        assert_denied(decide(actor, "delete", "manual_subscription", before=subscription()))


def test_service_identity_writes_subscriptions(decide):
    service = Subject.service()
    assert decide(service, "insert", "manual_subscription", after=subscription()).allowed
    assert decide(service, "delete", "manual_subscription", before=subscription()).allowed


@pytest.fixture
def service():
    client = FakeSupabase(unique={"manual_subscriptions": "user_id"})
    return ManualSubscriptionService(client)


def test_grant_and_read_back(service):
    granted = service.grant(ManualSubscriptionGrant(user_id=IDS["owner1"], reason="beta tester"))
    assert granted.user_id == IDS["owner1"]
    assert granted.is_permanent
    assert service.get_for_user(IDS["owner1"]).reason == "beta tester"
    assert service.get_for_user(IDS["owner2"]) is None


def test_second_grant_is_uniqueness_violation(service):
    service.grant(ManualSubscriptionGrant(user_id=IDS["owner1"]))
    with pytest.raises(UniquenessViolation) as exc_info:
        service.grant(ManualSubscriptionGrant(user_id=IDS["owner1"], plan_type="family"))
    assert exc_info.value.status_code == 409


def test_revoke_allows_new_grant(service):
    service.grant(ManualSubscriptionGrant(user_id=IDS["owner1"]))
    assert service.revoke(IDS["owner1"])
    assert not service.revoke(IDS["owner1"])
    assert service.grant(ManualSubscriptionGrant(user_id=IDS["owner1"], plan_type="family")).plan_type == "family"

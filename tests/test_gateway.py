import logging

import pytest
from pydantic import TypeAdapter

from factories import IDS, assert_denied, assert_masked, user_row
from zemiguard.config.policy_config import RESOURCE_FAMILIES
from zemiguard.core.decisions import Allow, Decision, Deny, allow_fields
from zemiguard.core.errors import ErrorKind, InvalidDecisionRequest, InvalidStateTransition
from zemiguard.core.gateway import DecisionRequest, authorize
from zemiguard.core.subject import Subject
from zemiguard.modules.registry import default_policies


def test_missing_subject_requires_authentication(gateway):
    decision = gateway.authorize(DecisionRequest(
        operation="select", resource_type="team", before={"id": IDS["team1"], "owner_id": IDS["owner1"]}
    ))
    assert_denied(decision, ErrorKind.AUTHENTICATION_REQUIRED)


def test_unknown_subject_id_requires_authentication(gateway):
    decision = gateway.authorize(DecisionRequest(
        subject_id="nobody", operation="select", resource_type="team",
        before={"id": IDS["team1"], "owner_id": IDS["owner1"]}
    ))
    assert_denied(decision, ErrorKind.AUTHENTICATION_REQUIRED)


def test_subject_id_is_resolved_through_graph(gateway):
    decision = gateway.authorize(DecisionRequest(
        subject_id=IDS["owner1"], operation="select", resource_type="team",
        before={"id": IDS["team1"], "owner_id": IDS["owner1"]}
    ))
    assert decision.allowed


def test_unknown_resource_type_is_denied(decide):
    assert_denied(decide("owner1", "select", "billing_invoice", before={"id": "x"}))


def test_undefined_operation_is_denied_before_policy(decide):
    assert_denied(decide("owner1", "delete", "sos_alert", before={"texter_id": IDS["texter1"]}))


def test_service_identity_bypasses_policies(decide):
    decision = decide(Subject.service(), "update", "team", before={"id": IDS["team1"], "owner_id": IDS["owner1"]},
                      after={"owner_id": IDS["owner2"]})
    assert isinstance(decision, Allow)


def test_service_identity_cannot_run_undefined_operations(decide):
    team = {"id": IDS["team1"], "owner_id": IDS["owner1"]}
    assert_denied(decide(Subject.service(), "delete", "team", before=team), ErrorKind.NOT_AUTHORIZED)
    assert_denied(decide(Subject.service(), "delete", "message", before={"id": IDS["msg_normal"]}))


def test_service_identity_still_needs_known_resource(decide):
    assert_denied(decide(Subject.service(), "select", "billing_invoice", before={"id": "x"}))


def test_missing_snapshot_is_a_malformed_request(decide):
    with pytest.raises(InvalidDecisionRequest):
        decide("owner1", "select", "team")
    with pytest.raises(InvalidDecisionRequest):
        decide("owner1", "update", "team", before={"id": IDS["team1"], "owner_id": IDS["owner1"]})


def test_invalid_snapshot_is_a_malformed_request(decide):
    with pytest.raises(InvalidDecisionRequest):
        decide("owner1", "insert", "team", after={"name": "no owner"})


def test_unchanged_values_in_patch_are_not_changes(decide, graph):
    decision = decide("texter1", "update", "user", before=user_row(graph, "texter1"),
                      after={"role": "texter", "team_id": IDS["team1"], "display_name": "T1"})
    assert_masked(decision, "display_name")


def test_explicit_changed_fields_widen_the_diff(decide, graph):
    decision = decide("texter1", "update", "user", before=user_row(graph, "texter1"),
                      after={"display_name": "T1"}, changed_fields=["role"])
    assert_denied(decision, ErrorKind.IMMUTABLE_FIELD_VIOLATION)


def test_declared_changed_fields_cannot_hide_patched_keys(decide, graph):
    decision = decide("texter1", "update", "user", before=user_row(graph, "texter1"),
                      after={"role": "owner"}, changed_fields=["display_name"])
    assert_denied(decision, ErrorKind.IMMUTABLE_FIELD_VIOLATION)


def test_denials_are_logged(decide, caplog):
    with caplog.at_level(logging.INFO, logger="zemiguard.core.gateway"):
        decide("owner2", "select", "team", before={"id": IDS["team1"], "owner_id": IDS["owner1"]})
    assert "Denied" in caplog.text
    assert IDS["owner2"] in caplog.text


def test_module_level_authorize(graph, settings):
    decision = authorize(DecisionRequest(
        subject_id=IDS["texter1"], operation="insert", resource_type="sos_alert",
        after={"texter_id": IDS["texter1"]}
    ), graph, settings)
    assert decision.allowed


def test_registry_covers_every_resource_family():
    policies = default_policies()
    assert set(policies) == set(RESOURCE_FAMILIES)
    for resource_type, policy in policies.items():
        assert policy.resource_type == resource_type


def test_decision_union_round_trips_by_effect():
    adapter = TypeAdapter(Decision)
    assert isinstance(adapter.validate_python({"effect": "allow"}), Allow)
    mask = adapter.validate_python({"effect": "allow_with_field_mask", "allowed_fields": ["is_muted"]})
    assert mask == allow_fields(["is_muted"])
    deny = adapter.validate_python({"effect": "deny", "reason": "invalid_state_transition"})
    assert isinstance(deny, Deny)
    assert not deny.allowed


def test_deny_raises_matching_error():
    deny = Deny(reason=ErrorKind.INVALID_STATE_TRANSITION, detail="already answered")
    with pytest.raises(InvalidStateTransition) as exc_info:
        deny.raise_error()
    assert exc_info.value.status_code == 409
    assert exc_info.value.detail == "already answered"

from factories import IDS, assert_denied, assert_masked, row, set_user
from zemiguard.core.errors import ErrorKind


def chat_row(graph, key):
    return row(graph.get_chat(IDS[key]))


def member_row(graph, chat, user):
    return row(graph.members[(IDS[chat], IDS[user])])


def test_members_see_their_chat(decide, graph):
    chat = chat_row(graph, "chat_super_to_texter")
    assert decide("super1", "select", "chat", before=chat).allowed
    assert decide("texter1", "select", "chat", before=chat).allowed


def test_owner_oversees_chat_with_own_texter(decide, graph):
    assert decide("owner1", "select", "chat", before=chat_row(graph, "chat_super_to_texter")).allowed


def test_owner_has_no_oversight_without_a_texter(decide, graph):
    chat = chat_row(graph, "chat_super_to_super")
    assert_denied(decide("owner1", "select", "chat", before=chat))
    assert_denied(decide("owner2", "select", "chat", before=chat))
    assert decide("super2", "select", "chat", before=chat).allowed


def test_both_owners_oversee_cross_team_texter_chat(decide, graph):
    chat = chat_row(graph, "chat_texter_to_texter")
    assert decide("owner1", "select", "chat", before=chat).allowed
    assert decide("owner2", "select", "chat", before=chat).allowed
    assert_denied(decide("super1", "select", "chat", before=chat))


def test_other_team_cannot_see_chat(decide, graph):
    chat = chat_row(graph, "chat_super_to_texter")
    for actor in ("owner2", "super2", "texter2"):
        assert_denied(decide(actor, "select", "chat", before=chat))


def test_oversight_ends_when_texter_leaves(decide, graph):
    graph.add_member(IDS["chat_super_to_texter"], IDS["texter1"], left_at="2026-01-16T00:00:00Z")
    chat = chat_row(graph, "chat_super_to_texter")
    assert_denied(decide("owner1", "select", "chat", before=chat))
    assert_denied(decide("texter1", "select", "chat", before=chat))
    assert decide("super1", "select", "chat", before=chat).allowed


def test_active_user_creates_chat_as_self(decide, graph):
    assert decide("texter1", "insert", "chat", after={"created_by": IDS["texter1"]}).allowed
    assert_denied(decide("texter1", "insert", "chat", after={"created_by": IDS["super1"]}))
    set_user(graph, "texter1", is_active=False)
    assert_denied(decide("texter1", "insert", "chat", after={"created_by": IDS["texter1"]}))


def test_creator_updates_chat(decide, graph):
    chat = chat_row(graph, "chat_super_to_texter")
    assert decide("super1", "update", "chat", before=chat, after={"name": "Renamed"}).allowed
    assert_denied(decide("texter1", "update", "chat", before=chat, after={"name": "Renamed"}))
    decision = decide("super1", "update", "chat", before=chat, after={"created_by": IDS["texter1"]})
    assert_denied(decision, ErrorKind.IMMUTABLE_FIELD_VIOLATION)


def test_member_rows_follow_chat_visibility(decide, graph):
    member = member_row(graph, "chat_super_to_texter", "super1")
    assert decide("texter1", "select", "chat_member", before=member).allowed
    assert decide("owner1", "select", "chat_member", before=member).allowed
    assert_denied(decide("owner2", "select", "chat_member", before=member))


def test_only_creator_adds_members(decide):
    new_member = {"chat_id": IDS["chat_super_to_super"], "user_id": IDS["owner1"]}
    assert decide("super1", "insert", "chat_member", after=new_member).allowed
    assert_denied(decide("super2", "insert", "chat_member", after=new_member))
    assert_denied(decide("owner1", "insert", "chat_member", after=new_member))


def test_member_mutes_and_pins_own_row(decide, graph):
    member = member_row(graph, "chat_super_to_texter", "texter1")
    decision = decide("texter1", "update", "chat_member", before=member, after={"is_muted": True})
    assert_masked(decision, "is_muted", "is_pinned")


def test_member_cannot_touch_other_fields_or_rows(decide, graph):
    own = member_row(graph, "chat_super_to_texter", "texter1")
    assert_denied(decide("texter1", "update", "chat_member", before=own,
                         after={"left_at": "2026-01-16T00:00:00Z"}))
    assert_denied(decide("texter1", "update", "chat_member", before=own, after={"user_id": IDS["super1"]}),
                  ErrorKind.IMMUTABLE_FIELD_VIOLATION)
    other = member_row(graph, "chat_super_to_texter", "super1")
    assert_denied(decide("texter1", "update", "chat_member", before=other, after={"is_muted": True}))

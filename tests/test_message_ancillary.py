from factories import IDS, assert_denied


def reaction(user="texter1", message="msg_normal"):
    return {"message_id": IDS[message], "user_id": IDS[user], "emoji": "+1"}


def test_reactions_visible_with_chat(decide):
    for actor in ("super1", "texter1", "owner1"):
        assert decide(actor, "select", "message_reaction", before=reaction()).allowed
    for actor in ("super2", "owner2"):
        assert_denied(decide(actor, "select", "message_reaction", before=reaction()))


def test_member_reacts_as_self(decide):
    assert decide("super1", "insert", "message_reaction", after=reaction("super1")).allowed
    assert_denied(decide("super1", "insert", "message_reaction", after=reaction("texter1")))
    assert_denied(decide("super2", "insert", "message_reaction", after=reaction("super2")))


def test_oversight_owner_cannot_react(decide):
    assert_denied(decide("owner1", "insert", "message_reaction", after=reaction("owner1")))


def test_reactions_removed_by_author_only(decide):
    assert decide("texter1", "delete", "message_reaction", before=reaction()).allowed
    assert_denied(decide("super1", "delete", "message_reaction", before=reaction()))
    assert_denied(decide("texter1", "update", "message_reaction", before=reaction(), after={"emoji": "x"}))


def test_reaction_on_unknown_message_is_denied(decide):
    assert_denied(decide("texter1", "select", "message_reaction",
                         before={"message_id": "missing", "user_id": IDS["texter1"], "emoji": "+1"}))


def star(user="texter1"):
    return {"user_id": IDS[user], "message_id": IDS["msg_normal"]}


def test_stars_are_private(decide):
    assert decide("texter1", "insert", "starred_message", after=star()).allowed
    assert decide("texter1", "select", "starred_message", before=star()).allowed
    assert decide("texter1", "delete", "starred_message", before=star()).allowed
    for actor in ("owner1", "super1"):
        assert_denied(decide(actor, "select", "starred_message", before=star()))
        assert_denied(decide(actor, "delete", "starred_message", before=star()))
    assert_denied(decide("owner1", "insert", "starred_message", after=star()))


def receipt(user="super1"):
    return {"message_id": IDS["msg_normal"], "user_id": IDS[user]}


def test_read_receipts_visible_with_chat(decide):
    assert decide("texter1", "select", "message_read_receipt", before=receipt()).allowed
    assert decide("owner1", "select", "message_read_receipt", before=receipt()).allowed
    assert_denied(decide("super2", "select", "message_read_receipt", before=receipt()))


def test_member_marks_read_as_self(decide):
    assert decide("texter1", "insert", "message_read_receipt", after=receipt("texter1")).allowed
    assert_denied(decide("texter1", "insert", "message_read_receipt", after=receipt("super1")))
    assert_denied(decide("texter2", "insert", "message_read_receipt", after=receipt("texter2")))


def test_read_receipts_are_permanent(decide):
    assert_denied(decide("super1", "delete", "message_read_receipt", before=receipt()))

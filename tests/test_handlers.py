from groupsplit.handlers.settlement import build_settlement_text
from groupsplit.state import store


def test_settlement_text_for_empty_chat():
    store.drop(-100)
    assert "No participants yet" in build_settlement_text(-100)


def test_settlement_text_escapes_names():
    chat_id = -101
    store.drop(chat_id)
    session = store.get(chat_id)
    amy = session.add_participant("<Amy>")
    session.add_participant("Ben")
    session.add_expense("Pizza", 20, amy.id)

    text = build_settlement_text(chat_id)

    assert "&lt;Amy&gt;" in text
    assert "Ben → &lt;Amy&gt;: $10.00" in text
    store.drop(chat_id)

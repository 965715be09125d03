import dataclasses

import pytest

from groupsplit.models import LinkError, Participant, SettlementResult, new_id, validate_links


def test_is_dependent():
    assert Participant(id="b", name="Ben", linked_payer_id="a").is_dependent
    assert not Participant(id="a", name="Amy").is_dependent
    assert not Participant(id="a", name="Amy", linked_payer_id="a").is_dependent


def test_participant_is_immutable():
    participant = Participant(id="a", name="Amy")
    with pytest.raises(dataclasses.FrozenInstanceError):
        participant.name = "Bob"  # type: ignore[misc]


def test_validate_links_accepts_couples():
    validate_links(
        [
            Participant(id="a", name="Amy"),
            Participant(id="b", name="Ben", linked_payer_id="a"),
            Participant(id="c", name="Cat", linked_payer_id="a"),
            Participant(id="d", name="Dan", linked_payer_id="d"),
        ]
    )


def test_validate_links_rejects_chain():
    with pytest.raises(LinkError):
        validate_links(
            [
                Participant(id="a", name="Amy"),
                Participant(id="b", name="Ben", linked_payer_id="a"),
                Participant(id="c", name="Cat", linked_payer_id="b"),
            ]
        )


def test_validate_links_rejects_cycle():
    with pytest.raises(LinkError):
        validate_links(
            [
                Participant(id="a", name="Amy", linked_payer_id="b"),
                Participant(id="b", name="Ben", linked_payer_id="a"),
            ]
        )


def test_validate_links_rejects_missing_payer():
    with pytest.raises(LinkError, match="does not exist"):
        validate_links([Participant(id="b", name="Ben", linked_payer_id="zzz")])


def test_link_error_is_value_error():
    assert issubclass(LinkError, ValueError)


def test_empty_result():
    result = SettlementResult.empty()
    assert result.transactions == ()
    assert len(result.balances) == 0


def test_new_id_is_unique():
    assert len({new_id() for _ in range(100)}) == 100

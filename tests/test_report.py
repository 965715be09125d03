from groupsplit.models import Participant
from groupsplit.services.report import (
    build_report,
    format_balances,
    format_expenses,
    format_participants,
    format_transactions,
    total_spent,
)
from groupsplit.services.settlement import calculate_settlement

from conftest import make_expense


def test_report_lists_transfers(abc):
    expenses = [make_expense(30, "a", ["a", "b", "c"]), make_expense(6, "b", ["b", "c"], title="Taxi")]
    result = calculate_settlement(abc, expenses)

    report = build_report(abc, expenses, result)

    assert "Total spent: $36.00" in report
    assert "1. Dinner: $30.00 (paid by Amy, shared by 3)" in report
    assert "2. Taxi: $6.00 (paid by Ben, shared by 2)" in report
    assert "• Amy: +$20.00" in report
    assert "• Ben → Amy: $7.00" in report
    assert "• Cat → Amy: $13.00" in report


def test_balances_sorted_and_settled_hidden():
    people = [Participant(id="a", name="Amy"), Participant(id="b", name="Ben", linked_payer_id="a"),
              Participant(id="c", name="Cat")]
    result = calculate_settlement(people, [make_expense(30, "c", ["a", "b", "c"])])

    text = format_balances(result, people)

    assert text.splitlines() == ["Net balance:", "• Cat: +$20.00", "• Amy: -$20.00"]


def test_nothing_to_settle(abc):
    result = calculate_settlement(abc, [])
    assert "everyone is settled" in format_balances(result, abc)
    assert "No transfers needed" in format_transactions(result, abc)


def test_format_expenses(abc):
    assert "no expenses yet" in format_expenses([], abc)
    text = format_expenses([make_expense(12.5, "b", ["a", "b"], title="Taxi")], abc, symbol="HK$")
    assert "1. Taxi: HK$12.50 (paid by Ben, shared by 2)" in text


def test_format_participants():
    people = [
        Participant(id="a", name="Amy", is_birthday=True),
        Participant(id="b", name="Ben", linked_payer_id="a"),
    ]
    text = format_participants(people)
    assert "• Amy 🎂" in text
    assert "• Ben (paid by Amy)" in text
    assert "No participants" in format_participants([])


def test_total_spent():
    assert total_spent([make_expense(10, "a", ["a"]), make_expense(2.5, "a", ["a"])]) == 12.5

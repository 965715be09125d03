import pytest

from groupsplit.utils.parse import parse_amount, parse_names, split_args


@pytest.mark.parametrize(
    ("text", "expected"),
    [("120", 120.0), ("120.5", 120.5), ("$120.50", 120.5), ("120,50", 120.5), (" 7 ", 7.0)],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "-5", "1.2.3"])
def test_parse_amount_invalid(text):
    with pytest.raises(ValueError):
        parse_amount(text)


def test_split_args():
    assert split_args("/addexpense Dinner | 30 | Amy", "addexpense") == ["Dinner", "30", "Amy"]
    assert split_args("/addexpense@groupsplit_bot Taxi|12|Ben", "addexpense") == ["Taxi", "12", "Ben"]
    assert split_args("/settle", "settle") == []


def test_parse_names():
    assert parse_names("Amy, Ben ,Cat") == ["Amy", "Ben", "Cat"]
    assert parse_names("Amy Ben") == ["Amy", "Ben"]
    assert parse_names("Mary Jane, Ben") == ["Mary Jane", "Ben"]
    assert parse_names("  ") == []

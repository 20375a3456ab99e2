import json

import pytest

from expense_analytics import Category, InvalidArgument
from expense_analytics.utils.loader import load_records

rows = [
    {"user_id": "user-1", "title": "Lunch", "category": "Food", "amount": 18.75, "date": "2024-08-08"},
    {"user_id": "user-1", "title": "Bus Ticket", "category": "Transport", "amount": 3.5, "date": "2024-08-07T08:30:00Z"},
]


def test_load_json_list(tmp_path):
    path = tmp_path / "expenses.json"
    path.write_text(json.dumps(rows))

    records = load_records(path)

    assert [r.amount for r in records] == [18.75, 3.5]
    assert records[1].category is Category.TRANSPORT
    assert records[1].date.isoformat() == "2024-08-07"


def test_load_json_wrapped(tmp_path):
    path = tmp_path / "export.json"
    path.write_text(json.dumps({"expenses": rows}))

    assert len(load_records(path)) == 2


def test_load_csv(tmp_path):
    path = tmp_path / "expenses.csv"
    path.write_text(
        "user_id,title,category,amount,date\n"
        "user-1,Lunch,Food,18.75,2024-08-08\n"
        "user-1,,Others,12,2024-08-09\n"
    )

    records = load_records(path)

    assert [r.amount for r in records] == [18.75, 12.0]
    assert records[1].title == ""
    assert records[1].category is Category.OTHERS


def test_unsupported_or_broken_files(tmp_path):
    text = tmp_path / "expenses.txt"
    text.write_text("nope")
    with pytest.raises(InvalidArgument):
        load_records(text)

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(InvalidArgument):
        load_records(broken)

    with pytest.raises(InvalidArgument):
        load_records(tmp_path / "missing.json")

    not_utf8 = tmp_path / "latin.csv"
    not_utf8.write_bytes(b"user_id,title,category,amount,date\n\xff\xfe,Lunch,Food,5,2024-01-01\n")
    with pytest.raises(InvalidArgument):
        load_records(not_utf8)

    not_utf8_json = tmp_path / "latin.json"
    not_utf8_json.write_bytes(b'[{"title": "\xff"}]')
    with pytest.raises(InvalidArgument):
        load_records(not_utf8_json)


def test_non_finite_json_amount_is_rejected(tmp_path):
    path = tmp_path / "expenses.json"
    path.write_text('[{"user_id": "user-1", "category": "Food", "amount": Infinity, "date": "2024-01-01"}]')

    with pytest.raises(InvalidArgument):
        load_records(path)

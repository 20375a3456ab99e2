import pytest

from expense_analytics import InvalidArgument, compute_heatmap


def expense(day, amount, category="Food"):
    return {"user_id": "user-1", "category": category, "amount": amount, "date": day}


def test_same_day_expenses_are_one_entry():
    result = compute_heatmap(
        [expense("2024-03-05", 10.0), expense("2024-03-05", 20.0), expense("2024-03-05", 30.5)],
        2024,
        3,
    )

    assert result["heatmap"] == [{"date": "2024-03-05", "value": 60.5, "count": 3}]
    assert result["stats"]["total_days"] == 1
    assert result["stats"]["total_spent"] == 60.5


def test_max_day_and_averages():
    records = [
        expense("2024-03-01", 50.0),
        expense("2024-03-02", 80.0),
        expense("2024-03-03", 20.0),
    ]
    result = compute_heatmap(records, 2024, 3)

    assert [day["date"] for day in result["heatmap"]] == ["2024-03-01", "2024-03-02", "2024-03-03"]
    assert result["stats"]["max_day"] == {"date": "2024-03-02", "value": 80.0}
    assert result["stats"]["total_spent"] == 150.0
    assert result["stats"]["avg_per_day"] == 50.0


def test_max_day_tie_goes_to_earliest_date():
    result = compute_heatmap([expense("2024-03-04", 40.0), expense("2024-03-01", 40.0)], 2024, 3)
    assert result["stats"]["max_day"] == {"date": "2024-03-01", "value": 40.0}


def test_weekday_stats_are_sunday_based():
    # 2024-03-03 is a Sunday, 2024-03-04 and 2024-03-11 are Mondays.
    records = [
        expense("2024-03-03", 30.0),
        expense("2024-03-04", 10.0),
        expense("2024-03-11", 20.0),
    ]
    result = compute_heatmap(records, 2024, 3)

    assert result["weekday_stats"] == [
        {"day_of_week": 0, "name": "Sunday", "total": 30.0, "count": 1, "average": 30.0},
        {"day_of_week": 1, "name": "Monday", "total": 30.0, "count": 2, "average": 15.0},
    ]


def test_period_filters_records():
    records = [
        expense("2024-03-01", 50.0),
        expense("2024-04-01", 70.0),
        expense("2023-03-01", 90.0),
    ]

    month_view = compute_heatmap(records, 2024, 3)
    assert [day["date"] for day in month_view["heatmap"]] == ["2024-03-01"]
    assert month_view["period"] == {"year": 2024, "month": 3}

    year_view = compute_heatmap(records, 2024)
    assert [day["date"] for day in year_view["heatmap"]] == ["2024-03-01", "2024-04-01"]
    assert year_view["period"] == {"year": 2024, "month": None}


def test_empty_period():
    result = compute_heatmap([expense("2023-01-01", 5.0)], 2024, 6)

    assert result["heatmap"] == []
    assert result["weekday_stats"] == []
    assert result["stats"] == {
        "max_day": {"date": None, "value": 0.0},
        "total_spent": 0.0,
        "total_days": 0,
        "avg_per_day": 0.0,
    }


@pytest.mark.parametrize("year,month", [(2024, 0), (2024, 13), (24, None), (2024, "3"), ("2024", 1)])
def test_invalid_period_is_rejected(year, month):
    with pytest.raises(InvalidArgument):
        compute_heatmap([], year, month)

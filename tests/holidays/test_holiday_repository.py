from __future__ import annotations

from dataclasses import replace

import pytest

from src.worktrack_store.worktrack_store.core.enums import HolidayType
from src.worktrack_store.worktrack_store.core.exceptions import ValidationError
from src.worktrack_store.worktrack_store.holidays.model import Holiday


def test_recurring_flag_round_trips_as_bool(container):
    holiday = Holiday(date="2024-09-02", name="National Day", holiday_type=HolidayType.NATIONAL, is_recurring=True)

    new_id = container.holidays_repo.insert(holiday)
    fetched = container.holidays_repo.get(new_id)

    assert fetched == replace(holiday, holiday_id=new_id)
    assert fetched.is_recurring is True


def test_range_query_on_date(container):
    repo = container.holidays_repo
    repo.insert(Holiday(date="2024-01-01", name="New Year", holiday_type=HolidayType.NATIONAL, is_recurring=True))
    repo.insert(Holiday(date="2024-02-14", name="Team day"))
    repo.insert(Holiday(date="2024-12-25", name="Christmas", holiday_type="national"))

    rows = repo.query_by_range("2024-01-01", "2024-06-30")

    assert [r.name for r in rows] == ["Team day", "New Year"]
    assert rows[0].holiday_type is HolidayType.CUSTOM
    assert rows[0].is_recurring is False


@pytest.mark.parametrize(
    "holiday,field",
    [
        (Holiday(date="2024-01-01", name=""), "name"),
        (Holiday(date="", name="Party"), "date"),
        (Holiday(date="2024-01-01", name="Party", holiday_type="regional"), "holiday_type"),
    ],
)
def test_invalid_holiday_is_rejected(container, row_count, holiday, field):
    with pytest.raises(ValidationError) as exc:
        container.holidays_repo.insert(holiday)

    assert exc.value.field == field
    assert row_count("holidays") == 0

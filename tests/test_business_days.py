"""
tests/test_business_days.py

Covers:
  - Weekend-only counting and adding, both directions
  - CN public holidays and make-up workdays (2024 Spring Festival)
  - Excluded-day list cap vs. full excluded count
  - Year preloading for add across year boundaries
  - Timezone-aware parsing of full ISO timestamps
  - Invalid input handling
"""

import asyncio

import pytest

from infra.errors import InvalidInputError
from service.business.service import EXCLUDED_LIMIT, BusinessDayService
from conftest import CN_2024, FakeHolidayClient


@pytest.fixture
def business(holiday_service):
    return BusinessDayService(holiday_service)


def run(coro):
    return asyncio.run(coro)


# ── Weekends only ─────────────────────────────────────────────────────────────

class TestWeekendsOnly:

    def test_add_one_from_friday_lands_on_monday(self, business):
        shift = run(business.add_business_days("2024-01-05", 1))
        assert shift.result == "2024-01-08"
        assert shift.weekday == "Monday"
        assert shift.excluded_days == 2
        assert [e.reason for e in shift.excluded] == ["weekend", "weekend"]

    def test_subtract_one_from_monday_lands_on_friday(self, business):
        shift = run(business.add_business_days("2024-01-08", -1))
        assert shift.result == "2024-01-05"
        assert shift.business_days_added == -1
        assert [e.date for e in shift.excluded] == ["2024-01-07", "2024-01-06"]

    def test_add_zero_returns_start(self, business):
        shift = run(business.add_business_days("2024-01-06", 0))
        assert shift.result == "2024-01-06"
        assert shift.excluded_days == 0

    def test_count_one_week(self, business):
        count = run(business.count_business_days("2024-01-01", "2024-01-08"))
        assert count.business_days == 5
        assert count.calendar_days == 7
        assert count.excluded_days == 2
        assert count.country is None

    def test_count_empty_range(self, business):
        count = run(business.count_business_days("2024-03-15", "2024-03-15"))
        assert count.business_days == 0
        assert count.calendar_days == 0
        assert count.excluded == []

    def test_no_country_never_touches_holiday_source(self, business, fake_client):
        run(business.count_business_days("2024-02-01", "2024-03-01"))
        assert fake_client.calls == []


# ── CN holidays ───────────────────────────────────────────────────────────────

class TestChinaHolidays:

    def test_makeup_sunday_is_business_day(self, business):
        status = run(business.is_business_day("2024-02-04", "CN"))
        assert status.is_business is True

    def test_holiday_and_weekend_reasons(self, business):
        assert run(business.is_business_day("2024-02-10", "CN")).reason == "春节"
        assert run(business.is_business_day("2024-02-03", "CN")).reason == "weekend"

    def test_count_across_spring_festival(self, business):
        count = run(business.count_business_days("2024-02-01", "2024-02-20", "cn"))
        assert count.country == "CN"
        assert count.calendar_days == 19
        assert count.business_days == 10
        assert count.excluded_days == 9
        assert count.excluded[0].date == "2024-02-03"
        assert {e.reason for e in count.excluded} == {"weekend", "春节"}

    def test_add_across_spring_festival(self, business):
        shift = run(business.add_business_days("2024-02-08", 3, "CN"))
        assert shift.result == "2024-02-19"
        assert shift.excluded_days == 8
        assert all(e.reason == "春节" for e in shift.excluded)

    def test_without_country_holidays_are_ignored(self, business):
        shift = run(business.add_business_days("2024-02-08", 3))
        assert shift.result == "2024-02-13"


# ── Excluded list cap ─────────────────────────────────────────────────────────

class TestExcludedCap:

    def test_full_leap_year(self, business):
        count = run(business.count_business_days("2024-01-01", "2025-01-01"))
        assert count.calendar_days == 366
        assert count.business_days == 262
        assert count.excluded_days == 104
        assert len(count.excluded) == EXCLUDED_LIMIT

    def test_add_long_span_caps_list(self, business):
        shift = run(business.add_business_days("2024-01-01", 200))
        assert shift.excluded_days > EXCLUDED_LIMIT
        assert len(shift.excluded) == EXCLUDED_LIMIT


# ── Preloading ────────────────────────────────────────────────────────────────

class TestPreload:

    def test_forward_add_loads_next_year(self, make_service):
        client = FakeHolidayClient({("CN", 2024): CN_2024})
        business = BusinessDayService(make_service(client))
        run(business.add_business_days("2024-12-30", 3, "CN"))
        assert client.calls == [("CN", 2024), ("CN", 2025)]

    def test_backward_add_loads_previous_year(self, make_service):
        client = FakeHolidayClient({("CN", 2024): CN_2024})
        business = BusinessDayService(make_service(client))
        run(business.add_business_days("2024-01-02", -3, "CN"))
        assert client.calls == [("CN", 2023), ("CN", 2024)]

    def test_long_add_loads_extra_years(self, make_service):
        client = FakeHolidayClient()
        business = BusinessDayService(make_service(client))
        run(business.add_business_days("2024-01-02", 400, "US"))
        assert [y for _, y in client.calls] == [2024, 2025, 2026, 2027]

    def test_count_loads_each_year_in_range(self, make_service):
        client = FakeHolidayClient()
        business = BusinessDayService(make_service(client))
        run(business.count_business_days("2023-12-01", "2025-01-10", "US"))
        assert [y for _, y in client.calls] == [2023, 2024, 2025]


# ── Parsing ───────────────────────────────────────────────────────────────────

class TestParsing:

    def test_offset_timestamp_converted_to_timezone(self, business):
        # 纽约周五晚 23:30 是上海周六中午
        shift = run(business.add_business_days("2024-01-05T23:30:00-05:00", 1, timezone="Asia/Shanghai"))
        assert shift.from_date == "2024-01-06"
        assert shift.result == "2024-01-08"

    def test_offset_timestamp_in_utc_keeps_friday(self, business):
        shift = run(business.add_business_days("2024-01-05T10:00:00-05:00", 1))
        assert shift.from_date == "2024-01-05"

    def test_naive_timestamp_keeps_its_date(self, business):
        count = run(business.count_business_days("2024-01-01T08:00:00", "2024-01-03"))
        assert count.from_date == "2024-01-01"
        assert count.business_days == 2


# ── Invalid input ─────────────────────────────────────────────────────────────

class TestInvalidInput:

    def test_to_before_from(self, business):
        with pytest.raises(InvalidInputError) as exc:
            run(business.count_business_days("2024-01-08", "2024-01-01"))
        assert exc.value.code == "CHRONO_INPUT_INVALID"

    @pytest.mark.parametrize("value", ["2024-02-30", "tomorrow", "", "2024/01/01"])
    def test_bad_dates(self, business, value):
        with pytest.raises(InvalidInputError):
            run(business.count_business_days(value, "2024-03-01"))

    def test_bad_timezone(self, business):
        with pytest.raises(InvalidInputError):
            run(business.add_business_days("2024-01-05", 1, timezone="Mars/Olympus"))

    def test_bad_country(self, business):
        with pytest.raises(InvalidInputError):
            run(business.add_business_days("2024-01-05", 1, "CHN"))

    @pytest.mark.parametrize("value", ["3", 1.5, True, None])
    def test_bad_business_days(self, business, value):
        with pytest.raises(InvalidInputError):
            run(business.add_business_days("2024-01-05", value))

    def test_result_past_max_date(self, business):
        with pytest.raises(InvalidInputError):
            run(business.add_business_days("9999-12-30", 5))

# tests/test_ranges.py
from datetime import date, datetime

import pytest

from issuefilter.query.ranges import DateRange, NumberRange, _Range


def test_closed_range_includes_bounds():
    r = NumberRange(2, 5)
    assert r.encloses(2)
    assert r.encloses(5)
    assert r.encloses(3)
    assert not r.encloses(1)
    assert not r.encloses(6)


def test_exclusive_bounds():
    r = NumberRange(2, 5, start_inclusive=False, end_inclusive=False)
    assert not r.encloses(2)
    assert not r.encloses(5)
    assert r.encloses(4)


def test_open_ended_ranges():
    assert NumberRange(end=3, end_inclusive=False).encloses(2)
    assert not NumberRange(end=3, end_inclusive=False).encloses(3)
    assert NumberRange(start=10).encloses(10_000)
    assert not NumberRange(start=10).encloses(9)


def test_range_needs_a_bound():
    with pytest.raises(ValueError):
        NumberRange()


def test_range_start_after_end():
    with pytest.raises(ValueError):
        NumberRange(5, 2)
    with pytest.raises(ValueError):
        DateRange(date(2015, 2, 1), date(2015, 1, 1))


def test_date_range_encloses_dates_and_datetimes():
    r = DateRange(date(2015, 1, 1), date(2015, 1, 31))
    assert r.encloses(date(2015, 1, 1))
    assert r.encloses(datetime(2015, 1, 31, 23, 59))
    assert not r.encloses(date(2015, 2, 1))


def test_number_range_str():
    assert str(NumberRange(1, 5)) == "1..5"
    assert str(NumberRange(end=24, end_inclusive=False)) == "<24"
    assert str(NumberRange(end=24)) == "<=24"
    assert str(NumberRange(start=3, start_inclusive=False)) == ">3"
    assert str(NumberRange(start=3)) == ">=3"


def test_closed_range_str_uses_inclusive_bounds():
    r = NumberRange(1, 5, start_inclusive=False, end_inclusive=False)
    assert str(r) == "2..4"


def test_date_range_str():
    assert str(DateRange(date(2015, 1, 1), date(2015, 2, 1))) == "2015-01-01..2015-02-01"
    assert str(DateRange(start=date(2015, 3, 10), start_inclusive=False)) == ">2015-03-10"
    assert str(DateRange(end=date(2015, 1, 1), start_inclusive=True)) == "<=2015-01-01"


def test_ranges_are_hashable():
    assert hash(NumberRange(1, 2)) == hash(NumberRange(1, 2))
    assert NumberRange(1, 2) == NumberRange(1, 2)
    assert NumberRange(1, 2) != NumberRange(1, 3)


def test_base_range_cannot_be_instantiated():
    with pytest.raises(TypeError):
        _Range(1, 2)

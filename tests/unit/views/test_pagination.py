import pytest
from pydantic import ValidationError

from src.app.views import PatientFilters, ReportFilters, paginate


def test_slice_and_total():
    page, total = paginate(list(range(25)), limit=10, offset=20)

    assert page == [20, 21, 22, 23, 24]
    assert total == 25


def test_offset_past_end():
    page, total = paginate([1, 2, 3], limit=10, offset=50)

    assert page == []
    assert total == 3


def test_non_positive_limit():
    assert paginate([1, 2, 3], limit=0) == ([], 3)


def test_filters_carry_page_window():
    filters = PatientFilters(search="smith", limit=5, offset=10)

    assert filters.search == "smith"
    assert (filters.limit, filters.offset) == (5, 10)
    assert (ReportFilters().limit, ReportFilters().offset) == (20, 0)


@pytest.mark.parametrize("window", [{"limit": 0}, {"limit": 101}, {"offset": -1}])
def test_filters_reject_out_of_range_window(window):
    with pytest.raises(ValidationError):
        PatientFilters(**window)

"""Tests for view state controls."""

import pytest

from medicare.core.exceptions import ValidationException
from medicare.schemas.patients import Gender
from medicare.schemas.views import (
    DoctorFilters,
    PatientFilters,
    SortDirection,
    SortSpec,
    ViewResult,
)
from medicare.services.view_pipeline import PATIENT_SORT_COLUMNS
from medicare.services.view_state import ViewState


@pytest.fixture
def state():
    return ViewState(
        PatientFilters(),
        sort=SortSpec(column="name"),
        page_size=10,
        columns=PATIENT_SORT_COLUMNS,
    )


def test_sort_by_same_column_toggles_direction(state):
    """Test that sorting the active column flips its direction."""
    assert state.sort_by("name").direction == SortDirection.DESC
    assert state.sort_by("name").direction == SortDirection.ASC


def test_sort_by_new_column_starts_ascending(state):
    """Test switching the sort column."""
    state.sort_by("name")

    sort = state.sort_by("age")

    assert sort == SortSpec(column="age", direction=SortDirection.ASC)


def test_sort_without_initial_sort():
    state = ViewState(DoctorFilters())

    assert state.sort_by("name") == SortSpec(column="name")


def test_filter_and_sort_changes_reset_page(state):
    """Test that any query change returns to page 1."""
    state.page = 3
    state.set_filters(search="rohan")
    assert state.page == 1

    state.page = 2
    state.sort_by("age")
    assert state.page == 1

    state.page = 2
    state.clear_filters()
    assert state.page == 1
    assert state.filters == PatientFilters()


def test_set_filters_merges_fields(state):
    state.set_filters(search="rohan")

    filters = state.set_filters(gender="Male")

    assert filters.search == "rohan"
    assert filters.gender == Gender.MALE


def test_set_filters_rejects_invalid_values(state):
    """Test that invalid filters leave the state unchanged."""
    with pytest.raises(ValidationException):
        state.set_filters(gender="Unknown")

    with pytest.raises(ValidationException):
        state.set_filters(ward="ICU")

    assert state.filters == PatientFilters()


def test_next_page_stops_at_last_page(state):
    """Test paging forward against the latest result."""
    middle = ViewResult(items=[1] * 10, total=25, page=2, page_size=10)
    last = ViewResult(items=[1] * 5, total=25, page=3, page_size=10)

    state.page = 2
    assert state.next_page(middle) == 3
    assert state.next_page(last) == 3


def test_previous_page_stops_at_first_page(state):
    state.page = 2

    assert state.previous_page() == 1
    assert state.previous_page() == 1


def test_query_builds_page_spec(state):
    """Test the pipeline arguments built from the state."""
    query = state.query()

    assert query["filters"] == PatientFilters()
    assert query["sort"] == SortSpec(column="name")
    assert query["page"].page == 1
    assert query["page"].page_size == 10


def test_unpaginated_state_has_no_page_spec():
    state = ViewState(DoctorFilters())

    assert state.page_spec() is None
    assert state.query()["page"] is None


def test_sort_by_unknown_column_leaves_state_unchanged(state):
    """Test that an unsortable column is rejected before anything changes."""
    state.page = 2

    with pytest.raises(ValidationException) as exc_info:
        state.sort_by("ward")

    assert "sort" in exc_info.value.errors
    assert state.sort == SortSpec(column="name")
    assert state.page == 2


def test_initial_sort_must_be_sortable():
    with pytest.raises(ValidationException):
        ViewState(PatientFilters(), sort=SortSpec(column="ward"), columns=PATIENT_SORT_COLUMNS)

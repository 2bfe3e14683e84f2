"""Filter, sort and page controls for one collection view."""

from collections.abc import Iterable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from medicare.core.exceptions import ValidationException
from medicare.schemas.views import PageSpec, SortSpec, ViewResult

FiltersT = TypeVar("FiltersT", bound=BaseModel)


class ViewState(Generic[FiltersT]):
    """
    Mutable query parameters behind a table or grid.

    Any filter or sort change returns to page 1. Paging forward stops at the
    last page of the most recent result. Rejected changes leave the state
    as it was.
    """

    def __init__(
        self,
        filters: FiltersT,
        sort: SortSpec | None = None,
        page_size: int | None = None,
        columns: Iterable[str] | None = None,
    ):
        """
        Initialize view state.

        Args:
            filters: Initial filters
            sort: Initial sort, or None for collection order
            page_size: Rows per page; None shows every match
            columns: Sortable columns; None accepts any column
        """
        self.columns = frozenset(columns) if columns is not None else None
        if sort is not None:
            self._check_column(sort.column)
        self.filters = filters
        self.sort = sort
        self.page_size = page_size
        self.page = 1

    def set_filters(self, **changes: Any) -> FiltersT:
        """
        Change filter fields and reset to the first page.

        Raises:
            ValidationException: If a filter value is invalid
        """
        try:
            self.filters = type(self.filters).model_validate(
                {**self.filters.model_dump(), **changes}
            )
        except ValidationError as e:
            raise ValidationException.from_validation_error(e) from e
        self.page = 1
        return self.filters

    def clear_filters(self) -> FiltersT:
        self.filters = type(self.filters)()
        self.page = 1
        return self.filters

    def sort_by(self, column: str) -> SortSpec:
        """
        Toggle direction on the current column, else sort ascending by column.

        Raises:
            ValidationException: If the column is not sortable
        """
        self._check_column(column)
        self.sort = self.sort.toggled(column) if self.sort else SortSpec(column=column)
        self.page = 1
        return self.sort

    def next_page(self, result: ViewResult) -> int:
        if result.has_next:
            self.page = result.page + 1
        return self.page

    def previous_page(self) -> int:
        if self.page > 1:
            self.page -= 1
        return self.page

    def page_spec(self) -> PageSpec | None:
        if self.page_size is None:
            return None
        return PageSpec(page=self.page, page_size=self.page_size)

    def query(self) -> dict[str, Any]:
        """Keyword arguments for the matching ViewPipeline method."""
        return {"filters": self.filters, "sort": self.sort, "page": self.page_spec()}

    def _check_column(self, column: str) -> None:
        if self.columns is not None and column not in self.columns:
            raise ValidationException(
                "Unknown sort column",
                errors={"sort": f"Cannot sort by {column}"},
            )

from typing import Generic, TypeVar
from pydantic import BaseModel, computed_field

from supervision_api.core.constraints import is_date_string, max_value, min_value, one_of
from supervision_api.core.shapes import define_shape, field

T = TypeVar("T")

SORT_ORDERS = ("ASC", "DESC")


PaginationShape = define_shape(
    "Pagination",
    field("page", int, min_value(1), optional=True, default=1),
    field("limit", int, min_value(1), max_value(100), optional=True, default=10),
    field("sort_by", str, optional=True, default="created_at"),
    field("sort_order", str, one_of(SORT_ORDERS), optional=True, default="DESC"),
    field("search", str, optional=True),
)

DateRangeShape = define_shape(
    "DateRange",
    field("start_date", str, is_date_string(), optional=True),
    field("end_date", str, is_date_string(), optional=True),
)

# Query of GET /validation/shapes: same paging, sortable only by what a shape has
ShapeListQueryShape = define_shape(
    "ShapeListQuery",
    field("page", int, min_value(1), optional=True, default=1),
    field("limit", int, min_value(1), max_value(100), optional=True, default=10),
    field("sort_by", str, one_of(("name", "fields")), optional=True, default="name"),
    field("sort_order", str, one_of(SORT_ORDERS), optional=True, default="ASC"),
    field("search", str, optional=True),
)


class PaginationMeta(BaseModel):
    """Pagination metadata"""
    page: int
    limit: int
    total_items: int

    @computed_field
    @property
    def total_pages(self) -> int:
        """Calculate total number of pages"""
        if self.limit == 0:
            return 1
        return (self.total_items + self.limit - 1) // self.limit

    @computed_field
    @property
    def has_next_page(self) -> bool:
        return self.page * self.limit < self.total_items

    @computed_field
    @property
    def has_previous_page(self) -> bool:
        return self.page > 1


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic paginated response wrapper"""
    items: list[T]
    pagination: PaginationMeta

"""
Generic page envelope returned by the paginated list endpoints.
"""
import math
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Generic, List, Sequence, TypeVar

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One page of results; serialized in camelCase (totalPages, totalElements, ...)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    content: List[T]
    number: int
    size: int
    total_elements: int
    total_pages: int
    number_of_elements: int
    first: bool
    last: bool
    empty: bool

    @classmethod
    def build(cls, items: Sequence, page: int, size: int, total: int) -> "Page":
        """Assemble a page from the rows of one slice and the total match count."""
        total_pages = math.ceil(total / size) if size else 0
        return cls(
            content=list(items),
            number=page,
            size=size,
            total_elements=total,
            total_pages=total_pages,
            number_of_elements=len(items),
            first=page == 0,
            last=page >= total_pages - 1,
            empty=len(items) == 0,
        )

from pydantic import BaseModel, ConfigDict, Field


class PaginationCursor(BaseModel):
    """Client-owned page position."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, gt=0)

    def as_params(self) -> dict[str, int]:
        return {"page": self.page, "limit": self.limit}


class PaginationResult(BaseModel):
    """Server-derived pagination totals. Never recomputed on the client."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total: int = Field(ge=0)
    total_pages: int = Field(alias="totalPages", ge=0)
    limit: int = Field(gt=0)


class PageWindow(BaseModel):
    """The 1-based item range shown for a page."""

    model_config = ConfigDict(frozen=True)

    first: int
    last: int
    total: int
    page: int
    total_pages: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def describe(self) -> str:
        return f"Showing {self.first} to {self.last} of {self.total} results"


def page_window(page: int, result: PaginationResult) -> PageWindow:
    """Compute the visible item range from the server's limit and total."""
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")

    if result.total == 0:
        first = last = 0
    else:
        first = (page - 1) * result.limit + 1
        last = min(page * result.limit, result.total)

    return PageWindow(
        first=first,
        last=last,
        total=result.total,
        page=page,
        total_pages=result.total_pages,
    )

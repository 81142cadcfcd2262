import math
from dataclasses import dataclass

@dataclass(frozen=True)
class PageWindow:
    page: int
    page_size: int

    def __post_init__(self):
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.page_size < 1:
            raise ValueError("page_size must be >= 1")

    @property
    def offset(self) -> int:
        # No clamp: a page past the end just selects nothing
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size

def total_pages(total_count: int, page_size: int) -> int:
    if total_count <= 0:
        return 0
    return math.ceil(total_count / page_size)

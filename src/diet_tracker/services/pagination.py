"""Page/limit helpers shared by list endpoints."""

import math


def clamp_page(page: int | None) -> int:
    return max(page or 1, 1)


def clamp_limit(limit: int | None, default: int, maximum: int = 100) -> int:
    return min(max(limit or default, 1), maximum)


def page_count(total: int, limit: int) -> int:
    """Return the number of pages, never less than one."""
    return max(math.ceil(total / limit), 1)

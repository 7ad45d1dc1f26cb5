from typing import Optional

from fastapi import Query


def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None or value.strip() == "":
        return None
    try:
        return int(value)
    except ValueError:
        return None


class PageParams:
    """``recordPerPage``, ``page`` and ``startIndex`` query parameters.

    Missing, non-numeric or out of range values fall back to the defaults
    instead of rejecting the request.
    """

    def __init__(
        self,
        recordPerPage: Optional[str] = Query(None, description="Records per page, default 10"),
        page: Optional[str] = Query(None, description="1-based page number, default 1"),
        startIndex: Optional[str] = Query(None, description="Explicit offset, overrides page"),
    ):
        page_size = _parse_int(recordPerPage)
        self.page_size = page_size if page_size is not None and page_size >= 1 else 10
        page_number = _parse_int(page)
        self.page = page_number if page_number is not None and page_number >= 1 else 1
        start_index = _parse_int(startIndex)
        self.start_index = max(0, start_index) if start_index is not None else None

# backend/utils/pagination.py
import math
from typing import Dict, Tuple

from sqlalchemy.orm import Query

from utils.exceptions import APIException


def resolve_sort(sort_map: Dict[str, object], sort_by: str, sort_order: str):
    """Pick the column for `sort_by` and apply the direction.

    Ascending only when `sort_order` equals "asc" ignoring case, descending otherwise.
    """
    col = sort_map.get(sort_by)
    if col is None:
        raise APIException(f"Invalid sort field: {sort_by}")
    return col.asc() if (sort_order or "").lower() == "asc" else col.desc()


def paginate(query: Query, page_number: int, page_size: int, order_by, tie_breaker=None) -> Tuple[list, dict]:
    """Run a zero-based page of `query`.

    Returns the rows and the page metadata used by every *Response envelope.
    """
    if tie_breaker is not None:
        query = query.order_by(order_by, tie_breaker)
    else:
        query = query.order_by(order_by)

    total = query.count()
    rows = query.offset(page_number * page_size).limit(page_size).all()
    total_pages = math.ceil(total / page_size) if page_size else 0

    return rows, {
        "page_number": page_number,
        "page_size": page_size,
        "total_elements": total,
        "total_pages": total_pages,
        "last_page": page_number + 1 >= total_pages,
    }

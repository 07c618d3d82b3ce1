# wellnest/utils/pagination.py
from typing import Any, List, Optional, Tuple

from sqlalchemy import and_, or_

from wellnest.utils.datetime_utils import DateTimeUtils

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50


def paginate_by_cursor(query, id_column, created_column, limit: int,
                       cursor_row: Optional[Any] = None) -> Tuple[List[Any], bool, Optional[str]]:
    """
    (created_at DESC, id DESC) 순서의 커서 기반 페이지네이션.

    limit + 1 개를 조회해 다음 페이지 존재 여부를 판단합니다.

    Returns:
        (items, has_more, next_cursor)
    """
    if cursor_row is not None:
        cursor_created = DateTimeUtils.to_utc(getattr(cursor_row, created_column.key))
        cursor_id = getattr(cursor_row, id_column.key)
        query = query.filter(or_(
            created_column < cursor_created,
            and_(created_column == cursor_created, id_column < cursor_id),
        ))

    rows = query.order_by(created_column.desc(), id_column.desc()).limit(limit + 1).all()
    has_more = len(rows) > limit
    items = rows[:limit]
    next_cursor = getattr(items[-1], id_column.key) if has_more and items else None
    return items, has_more, next_cursor

"""
Shared list contract for tenant-scoped resources.

Callers build the base query (tenant predicate and any joins already
applied); this module layers search, exact filters, ordering and paging on
top and shapes the response envelope.
"""
from flask import current_app
from sqlalchemy import false, or_

from validation.field_rules import as_id

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20


def _positive_int(value, default):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def _is_integer_column(column):
    try:
        return column.type.python_type is int
    except NotImplementedError:
        return False


def paginated_list(query, args, search_columns=(), sort_columns=None, default_sort=None,
                   filters=None, serialize=None):
    """Apply the list query-string contract to ``query`` and return the envelope.

    ``args`` is the request's query mapping, ``filters`` maps query-string
    names to columns matched exactly, ``sort_columns`` is the ``sortBy``
    allow-list. Unknown ``sortBy`` values fall back to ``default_sort``.
    """
    sort_columns = sort_columns or {}
    filters = filters or {}

    search = (args.get('search') or '').strip()
    if search and search_columns:
        pattern = f'%{search}%'
        query = query.filter(or_(*[column.ilike(pattern) for column in search_columns]))

    for name, column in filters.items():
        value = args.get(name)
        if value in (None, ''):
            continue
        if _is_integer_column(column):
            value = as_id(value)
            if value is None:
                query = query.filter(false())
                continue
        query = query.filter(column == value)

    sort_column = sort_columns.get(args.get('sortBy'), default_sort)
    if sort_column is not None:
        ascending = (args.get('sortOrder') or '').lower() == 'asc'
        query = query.order_by(sort_column.asc() if ascending else sort_column.desc())

    page = _positive_int(args.get('page'), DEFAULT_PAGE)
    page_size = _positive_int(
        args.get('pageSize'),
        current_app.config.get('DEFAULT_PAGE_SIZE', DEFAULT_PAGE_SIZE),
    )

    paginated = query.paginate(page=page, per_page=page_size, error_out=False)
    serialize = serialize or (lambda row: row.to_dict())
    return {
        'count': paginated.total,
        'page': page,
        'pageSize': page_size,
        'totalPages': paginated.pages,
        'data': [serialize(row) for row in paginated.items],
    }

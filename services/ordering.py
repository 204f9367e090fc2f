from enum import Enum

from sqlalchemy import func


class SortOrder(str, Enum):
    DATE_DESC = "date_desc"
    DATE_ASC = "date_asc"
    ALPHA_ASC = "alpha_asc"
    ALPHA_DESC = "alpha_desc"


DEFAULT_SORT = SortOrder.DATE_DESC
SORT_VALUES = tuple(order.value for order in SortOrder)


def parse_sort(value: str | SortOrder | None, fallback: SortOrder = DEFAULT_SORT) -> SortOrder:
    if value is None or value == "":
        return fallback
    try:
        return SortOrder(value)
    except ValueError:
        return fallback


def order_by_clauses(model, order: SortOrder) -> list:
    """ORDER BY clauses for an entry model; ties fall back to insertion order."""
    if order is SortOrder.ALPHA_ASC:
        return [func.lower(model.word).asc(), model.id.asc()]
    if order is SortOrder.ALPHA_DESC:
        return [func.lower(model.word).desc(), model.id.desc()]
    if order is SortOrder.DATE_ASC:
        return [model.created_at.asc(), model.id.asc()]
    return [model.created_at.desc(), model.id.desc()]

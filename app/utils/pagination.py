import math
from typing import Generic, List, Optional, Sequence, Tuple, TypeVar

from pydantic import BaseModel
from sqlalchemy.orm import Query

from app.config.settings import settings

T = TypeVar("T")

DIRECTIONS = ("asc", "desc")


# ============= ENVOLTORIO DE PAGINACIÓN =============
class Pagination(BaseModel):
    current: int
    limit: int
    records: int
    pages: int


class Page(BaseModel, Generic[T]):
    pagination: Pagination
    data: List[T]


def resolve_page(page: Optional[int], limit: Optional[int], default_limit: Optional[int] = None) -> Tuple[int, int]:
    """Normalizar page/limit: páginas desde 1, límite por defecto del endpoint"""
    default_limit = default_limit or settings.DEFAULT_PAGE_LIMIT
    page = page if page and page > 0 else 1
    limit = limit if limit and limit > 0 else default_limit
    return page, min(limit, settings.MAX_PAGE_LIMIT)


def build_page(data: Sequence, records: int, page: int, limit: int) -> dict:
    return {
        "pagination": {
            "current": page,
            "limit": limit,
            "records": records,
            "pages": math.ceil(records / limit) if limit else 0,
        },
        "data": list(data),
    }


def empty_page(page: Optional[int] = None, limit: Optional[int] = None, default_limit: Optional[int] = None) -> dict:
    page, limit = resolve_page(page, limit, default_limit)
    return build_page([], 0, page, limit)


def paginate(
    query: Query,
    page: Optional[int],
    limit: Optional[int],
    order_by: Sequence,
    default_limit: Optional[int] = None,
    with_count: bool = True,
) -> dict:
    """Ejecutar count + find many sobre la misma consulta filtrada.

    Con ``with_count=False`` se omite el conteo: ``records`` es el número de
    filas devueltas y ``pages`` queda en 0.
    """
    page, limit = resolve_page(page, limit, default_limit)
    rows = query.order_by(*order_by).offset((page - 1) * limit).limit(limit).all()

    if not with_count:
        return {
            "pagination": {"current": page, "limit": limit, "records": len(rows), "pages": 0},
            "data": rows,
        }

    records = query.order_by(None).count()
    return build_page(rows, records, page, limit)


# ============= ORDENAMIENTO =============
def normalize_direction(direction: Optional[str], default: str = "desc") -> str:
    if direction and direction.lower() in DIRECTIONS:
        return direction.lower()
    return default


def sort_clause(model, field: Optional[str], direction: Optional[str], allowed: Sequence[str],
                default_field: str = "created_at", default_direction: str = "desc") -> list:
    """ORDER BY con lista blanca de columnas; columna desconocida => valor por defecto"""
    if field in allowed:
        column = getattr(model, field)
        direction = normalize_direction(direction, default_direction)
    else:
        column = getattr(model, default_field)
        direction = default_direction
    return [column.asc() if direction == "asc" else column.desc()]


def parse_sort_expression(expression: Optional[str], separator: str = " ") -> Tuple[Optional[str], Optional[str]]:
    """'created_at desc' / 'created_at:desc' -> ('created_at', 'desc')"""
    if not expression:
        return None, None
    parts = [part for part in expression.strip().split(separator) if part]
    if not parts:
        return None, None
    return parts[0], (parts[1] if len(parts) > 1 else None)


def parse_signed_sort(expression: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """'-created_at' -> desc, '+name' / 'name' -> asc"""
    if not expression:
        return None, None
    if expression.startswith("-"):
        return expression[1:], "desc"
    if expression.startswith("+"):
        return expression[1:], "asc"
    return expression, "asc"

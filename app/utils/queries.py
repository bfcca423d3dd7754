from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from app.utils.dates import as_naive_utc


# ============= FILTROS OPCIONALES =============
def filter_eq(query: Query, column, value) -> Query:
    if value is None:
        return query
    return query.filter(column == value)


def filter_in(query: Query, column, values) -> Query:
    if not values:
        return query
    return query.filter(column.in_(values))


def filter_contains(query: Query, column, value: Optional[str]) -> Query:
    if value is None or value == "":
        return query
    return query.filter(column.contains(value, autoescape=True))


def filter_search(query: Query, value: Optional[str], *columns) -> Query:
    """Texto libre sobre varias columnas (OR)"""
    if not value:
        return query
    return query.filter(or_(*[column.contains(value, autoescape=True) for column in columns]))


def filter_range(query: Query, column, gte=None, lte=None) -> Query:
    """Rango con límites independientes"""
    if isinstance(gte, datetime):
        gte = as_naive_utc(gte)
    if isinstance(lte, datetime):
        lte = as_naive_utc(lte)
    if gte is not None:
        query = query.filter(column >= gte)
    if lte is not None:
        query = query.filter(column <= lte)
    return query


def live(query: Query, model) -> Query:
    return query.filter(model.deleted_at.is_(None))


# ============= BÚSQUEDAS PUNTUALES =============
def find_or_404(db: Session, model, record_id: str, detail: str, include_deleted: bool = False):
    query = db.query(model).filter(model.id == record_id)
    if not include_deleted and hasattr(model, "deleted_at"):
        query = live(query, model)
    record = query.first()
    if not record:
        raise HTTPException(status_code=404, detail=detail)
    return record


def apply_changes(record, changes: dict):
    """Copiar al registro los campos enviados en el body"""
    for field, value in changes.items():
        if isinstance(value, datetime):
            value = as_naive_utc(value)
        setattr(record, field, value)
    return record

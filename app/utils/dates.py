from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic import PlainSerializer


def utcnow() -> datetime:
    """Hora actual en UTC sin tzinfo (así se guarda en la BD)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """2024-05-01T10:00:00.000Z"""
    if value is None:
        return None
    value = as_naive_utc(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


# Fechas de respuesta: ISO-8601 UTC con milisegundos
IsoDatetime = Annotated[datetime, PlainSerializer(to_iso, return_type=str)]

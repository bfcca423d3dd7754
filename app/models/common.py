from typing import Optional

from pydantic import BaseModel

from app.utils.dates import IsoDatetime


class OrmModel(BaseModel):
    """DTO de respuesta construido desde una entidad SQLAlchemy"""

    class Config:
        from_attributes = True


class Timestamps(OrmModel):
    created_at: IsoDatetime
    updated_at: IsoDatetime


class SoftDeleteTimestamps(Timestamps):
    deleted_at: Optional[IsoDatetime] = None


class PageRequest(BaseModel):
    """page / limit comunes a todas las búsquedas"""
    page: Optional[int] = None
    limit: Optional[int] = None

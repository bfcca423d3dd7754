from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from app.models.common import PageRequest, SoftDeleteTimestamps


# ============= VENTAS =============
class SaleSearchRequest(PageRequest):
    status: Optional[str] = None
    channel_id: Optional[str] = None
    seller_user_id: Optional[str] = None
    section_id: Optional[str] = None
    search: Optional[str] = None
    sort: Optional[str] = None

class SaleCreateRequest(BaseModel):
    shopping_mall_channel_id: str
    shopping_mall_section_id: Optional[str] = None
    code: str
    name: str
    description: Optional[str] = None
    price: float
    status: str = "active"

class Sale(SoftDeleteTimestamps):
    id: str
    shopping_mall_channel_id: str
    shopping_mall_section_id: Optional[str] = None
    shopping_mall_seller_user_id: str
    code: str
    status: str
    name: str
    description: Optional[str] = None
    price: float


# ============= UNIDADES =============
class SaleUnitSearchRequest(PageRequest):
    search: Optional[str] = None
    sortBy: Optional[str] = None
    order: Optional[str] = None

class SaleUnit(SoftDeleteTimestamps):
    id: str
    shopping_mall_sale_id: str
    code: str
    name: str
    description: Optional[str] = None


# ============= OPCIONES DE UNIDAD =============
class SaleUnitOptionSearchRequest(PageRequest):
    saleOptionId: Optional[str] = None
    # código o nombre de la opción
    filter: Optional[str] = None
    sort: Optional[str] = None

class SaleUnitOption(SoftDeleteTimestamps):
    id: str
    shopping_mall_sale_unit_id: str
    shopping_mall_sale_option_id: str
    additional_price: float
    stock_quantity: int


# ============= SNAPSHOTS =============
class SnapshotFilter(BaseModel):
    searchText: Optional[str] = None
    createdAfter: Optional[datetime] = None
    createdBefore: Optional[datetime] = None
    statuses: Optional[List[str]] = None
    minPrice: Optional[float] = None
    maxPrice: Optional[float] = None

class SaleSnapshotSearchRequest(PageRequest):
    filter: Optional[SnapshotFilter] = None

class SaleSnapshot(SoftDeleteTimestamps):
    id: str
    shopping_mall_sale_id: str
    code: str
    status: str
    name: str
    description: Optional[str] = None
    price: float

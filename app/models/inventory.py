from datetime import datetime
from typing import Optional

from app.models.common import OrmModel, PageRequest, SoftDeleteTimestamps
from app.utils.dates import IsoDatetime


# ============= INVENTARIO =============
class InventorySearchRequest(PageRequest):
    saleId: Optional[str] = None
    optionCombinationCode: Optional[str] = None
    minQuantity: Optional[int] = None
    maxQuantity: Optional[int] = None
    # created_at | stock_quantity (descendente)
    orderBy: Optional[str] = None

class Inventory(SoftDeleteTimestamps):
    id: str
    shopping_mall_sale_id: str
    option_combination_code: str
    stock_quantity: int


# ============= AUDITORÍA DE INVENTARIO =============
class InventoryAuditSearchRequest(PageRequest):
    inventory_id: Optional[str] = None
    actor_user_id: Optional[str] = None
    change_type: Optional[str] = None
    changed_at_from: Optional[datetime] = None
    changed_at_to: Optional[datetime] = None

class InventoryAudit(OrmModel):
    id: str
    inventory_id: str
    actor_user_id: Optional[str] = None
    change_type: str
    quantity_changed: int
    change_reason: Optional[str] = None
    changed_at: IsoDatetime


# ============= PRECIOS DINÁMICOS =============
class DynamicPricingSearchRequest(PageRequest):
    status: Optional[str] = None
    pricing_rule_id: Optional[str] = None
    effective_from_from: Optional[datetime] = None
    effective_from_to: Optional[datetime] = None
    orderBy: Optional[str] = None
    orderDirection: Optional[str] = None

class DynamicPricing(SoftDeleteTimestamps):
    id: str
    product_id: str
    pricing_rule_id: str
    adjusted_price: float
    algorithm_version: Optional[str] = None
    status: str
    effective_from: IsoDatetime
    effective_to: Optional[IsoDatetime] = None

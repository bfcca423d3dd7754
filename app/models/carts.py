from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from app.models.common import PageRequest, SoftDeleteTimestamps


# ============= ÍTEMS DEL CARRITO =============
class CartItemSearchRequest(PageRequest):
    status: Optional[str] = None
    # "created_at desc"
    orderBy: Optional[str] = None

class CartItemUpdateRequest(BaseModel):
    quantity: Optional[int] = None
    unit_price: Optional[float] = None
    status: Optional[str] = None
    deleted_at: Optional[datetime] = None

class CartItem(SoftDeleteTimestamps):
    id: str
    shopping_mall_shopping_cart_id: str
    shopping_mall_sale_snapshot_id: str
    quantity: int
    unit_price: float
    status: str


# ============= OPCIONES DE ÍTEM =============
class CartItemOptionSearchRequest(PageRequest):
    shopping_mall_sale_option_group_id: Optional[str] = None
    shopping_mall_sale_option_id: Optional[str] = None

class CartItemOptionCreateRequest(BaseModel):
    shopping_mall_sale_option_group_id: str
    shopping_mall_sale_option_id: str

class CartItemOptionUpdateRequest(BaseModel):
    shopping_mall_sale_option_group_id: Optional[str] = None
    shopping_mall_sale_option_id: Optional[str] = None

class CartItemOption(SoftDeleteTimestamps):
    id: str
    shopping_mall_cart_item_id: str
    shopping_mall_sale_option_group_id: str
    shopping_mall_sale_option_id: str

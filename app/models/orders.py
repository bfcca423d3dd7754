from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from app.models.common import OrmModel, PageRequest, SoftDeleteTimestamps
from app.utils.dates import IsoDatetime


# ============= PAGOS =============
class PaymentSearchRequest(PageRequest):
    payment_method: Optional[str] = None
    payment_status: Optional[str] = None
    created_at_from: Optional[datetime] = None
    created_at_to: Optional[datetime] = None

class PaymentCreateRequest(BaseModel):
    payment_method: str
    payment_status: str = "pending"
    payment_amount: float
    transaction_id: Optional[str] = None

class PaymentUpdateRequest(BaseModel):
    payment_method: Optional[str] = None
    payment_status: Optional[str] = None
    payment_amount: Optional[float] = None
    transaction_id: Optional[str] = None
    cancelled_at: Optional[datetime] = None

class Payment(SoftDeleteTimestamps):
    id: str
    shopping_mall_order_id: str
    payment_method: str
    payment_status: str
    payment_amount: float
    transaction_id: Optional[str] = None
    cancelled_at: Optional[IsoDatetime] = None


# ============= ENTREGAS =============
class DeliverySearchRequest(PageRequest):
    delivery_status: Optional[str] = None
    delivery_stage: Optional[str] = None
    # "delivery_status asc"
    orderBy: Optional[str] = None

class DeliveryUpdateRequest(BaseModel):
    delivery_status: Optional[str] = None
    delivery_stage: Optional[str] = None
    expected_delivery_date: Optional[datetime] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

class Delivery(SoftDeleteTimestamps):
    id: str
    shopping_mall_order_id: str
    delivery_status: str
    delivery_stage: str
    expected_delivery_date: Optional[IsoDatetime] = None
    start_time: Optional[IsoDatetime] = None
    end_time: Optional[IsoDatetime] = None


# ============= ÍTEMS DEL PEDIDO =============
class OrderItemSearchRequest(PageRequest):
    order_item_status: Optional[str] = None

class OrderItemUpdateRequest(BaseModel):
    quantity: Optional[int] = None
    price: Optional[float] = None
    order_item_status: Optional[str] = None

class OrderItem(SoftDeleteTimestamps):
    id: str
    shopping_mall_order_id: str
    shopping_mall_sale_snapshot_id: str
    quantity: int
    price: float
    order_item_status: str


# ============= HISTORIAL Y AUDITORÍA =============
class OrderStatusHistorySearchRequest(PageRequest):
    shopping_mall_order_id: Optional[str] = None
    old_status: Optional[str] = None
    new_status: Optional[str] = None
    changed_at_from: Optional[datetime] = None
    changed_at_to: Optional[datetime] = None

class OrderStatusHistory(OrmModel):
    id: str
    shopping_mall_order_id: str
    old_status: str
    new_status: str
    changed_at: IsoDatetime
    created_at: IsoDatetime

class OrderAuditLogSearchRequest(PageRequest):
    shopping_mall_order_id: Optional[str] = None
    actor_user_id: Optional[str] = None
    action: Optional[str] = None
    performed_at_from: Optional[datetime] = None
    performed_at_to: Optional[datetime] = None

class OrderAuditLog(OrmModel):
    id: str
    shopping_mall_order_id: str
    actor_user_id: Optional[str] = None
    action: str
    action_details: Optional[str] = None
    performed_at: IsoDatetime

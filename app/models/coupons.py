from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel

from app.models.common import OrmModel, PageRequest, SoftDeleteTimestamps, Timestamps
from app.utils.dates import IsoDatetime


# ============= CUPONES =============
class CouponSearchRequest(PageRequest):
    coupon_code: Optional[str] = None
    coupon_name: Optional[str] = None
    status: Optional[str] = None
    start_date_from: Optional[datetime] = None
    end_date_to: Optional[datetime] = None
    # "-created_at" => descendente
    order_by: Optional[str] = None

class CouponCreateRequest(BaseModel):
    shopping_mall_channel_id: Optional[str] = None
    coupon_code: str
    coupon_name: str
    coupon_description: Optional[str] = None
    discount_type: Literal["amount", "percentage"]
    discount_value: float
    max_discount_amount: Optional[float] = None
    min_order_amount: Optional[float] = None
    usage_limit: Optional[int] = None
    per_customer_limit: Optional[int] = None
    start_date: datetime
    end_date: datetime
    status: str = "active"

class CouponSummary(OrmModel):
    id: str
    coupon_code: str
    coupon_name: str
    discount_type: str
    discount_value: float
    status: str
    created_at: IsoDatetime

class Coupon(SoftDeleteTimestamps):
    id: str
    shopping_mall_channel_id: Optional[str] = None
    coupon_code: str
    coupon_name: str
    coupon_description: Optional[str] = None
    discount_type: str
    discount_value: float
    max_discount_amount: Optional[float] = None
    min_order_amount: Optional[float] = None
    usage_limit: Optional[int] = None
    per_customer_limit: Optional[int] = None
    start_date: IsoDatetime
    end_date: IsoDatetime
    status: str


# ============= CONDICIONES =============
class CouponConditionSearchRequest(PageRequest):
    condition_type: Optional[str] = None
    product_id: Optional[str] = None
    section_id: Optional[str] = None
    category_id: Optional[str] = None
    created_at_from: Optional[datetime] = None
    created_at_to: Optional[datetime] = None
    updated_at_from: Optional[datetime] = None
    updated_at_to: Optional[datetime] = None

class CouponCondition(Timestamps):
    id: str
    shopping_mall_coupon_id: str
    condition_type: str
    product_id: Optional[str] = None
    section_id: Optional[str] = None
    category_id: Optional[str] = None


# ============= TICKETS =============
class CouponTicketSearchRequest(PageRequest):
    shopping_mall_coupon_id: Optional[str] = None
    ticket_code: Optional[str] = None
    usage_status: Optional[str] = None
    valid_from_from: Optional[datetime] = None
    valid_from_to: Optional[datetime] = None
    valid_until_from: Optional[datetime] = None
    valid_until_to: Optional[datetime] = None
    with_count: bool = True

class CouponTicketUpdateRequest(BaseModel):
    usage_status: Optional[str] = None
    used_at: Optional[datetime] = None

class CouponTicket(SoftDeleteTimestamps):
    id: str
    shopping_mall_coupon_id: str
    guestuser_id: Optional[str] = None
    memberuser_id: Optional[str] = None
    selleruser_id: Optional[str] = None
    adminuser_id: Optional[str] = None
    ticket_code: str
    usage_status: str
    valid_from: IsoDatetime
    valid_until: IsoDatetime
    used_at: Optional[IsoDatetime] = None


# ============= LOGS =============
class CouponLogSearchRequest(PageRequest):
    shopping_mall_coupon_ticket_id: Optional[str] = None
    log_type: Optional[str] = None
    logged_at_from: Optional[datetime] = None
    logged_at_to: Optional[datetime] = None

class CouponLog(OrmModel):
    id: str
    shopping_mall_coupon_ticket_id: str
    used_by_customer_id: Optional[str] = None
    log_type: str
    log_data: Optional[str] = None
    logged_at: IsoDatetime

from sqlalchemy import Column, String, DateTime, Integer, Numeric, Text, ForeignKey

from app.config.database import Base
from app.entities.users import new_id
from app.utils.dates import utcnow


class Coupon(Base):
    __tablename__ = "shopping_mall_coupons"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_channel_id = Column(String(36), ForeignKey("shopping_mall_channels.id"), nullable=True, index=True)
    coupon_code = Column(String(100), nullable=False, index=True)
    coupon_name = Column(String(255), nullable=False)
    coupon_description = Column(Text, nullable=True)
    # amount | percentage
    discount_type = Column(String(50), nullable=False)
    discount_value = Column(Numeric(15, 2), nullable=False)
    max_discount_amount = Column(Numeric(15, 2), nullable=True)
    min_order_amount = Column(Numeric(15, 2), nullable=True)
    usage_limit = Column(Integer, nullable=True)
    per_customer_limit = Column(Integer, nullable=True)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    status = Column(String(50), nullable=False, default="active")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


class CouponCondition(Base):
    __tablename__ = "shopping_mall_coupon_conditions"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_coupon_id = Column(String(36), ForeignKey("shopping_mall_coupons.id"), nullable=False, index=True)
    condition_type = Column(String(50), nullable=False)
    product_id = Column(String(36), nullable=True)
    section_id = Column(String(36), nullable=True)
    category_id = Column(String(36), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


class CouponTicket(Base):
    """Cupón emitido a un actor concreto"""
    __tablename__ = "shopping_mall_coupon_tickets"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_coupon_id = Column(String(36), ForeignKey("shopping_mall_coupons.id"), nullable=False, index=True)
    guestuser_id = Column(String(36), nullable=True)
    memberuser_id = Column(String(36), nullable=True, index=True)
    selleruser_id = Column(String(36), nullable=True)
    adminuser_id = Column(String(36), nullable=True)
    ticket_code = Column(String(100), nullable=False, index=True)
    usage_status = Column(String(50), nullable=False, default="unused")
    valid_from = Column(DateTime, nullable=False)
    valid_until = Column(DateTime, nullable=False)
    used_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


class CouponLog(Base):
    __tablename__ = "shopping_mall_coupon_logs"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_coupon_ticket_id = Column(String(36), ForeignKey("shopping_mall_coupon_tickets.id"), nullable=False, index=True)
    used_by_customer_id = Column(String(36), nullable=True)
    log_type = Column(String(50), nullable=False)
    log_data = Column(Text, nullable=True)
    logged_at = Column(DateTime, nullable=False, default=utcnow)

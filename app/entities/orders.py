from sqlalchemy import Column, String, DateTime, Integer, Numeric, Text, ForeignKey

from app.config.database import Base
from app.entities.users import new_id
from app.utils.dates import utcnow


# ============= PEDIDOS =============
class Order(Base):
    __tablename__ = "shopping_mall_orders"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_channel_id = Column(String(36), ForeignKey("shopping_mall_channels.id"), nullable=False)
    shopping_mall_memberuser_id = Column(String(36), ForeignKey("shopping_mall_memberusers.id"), nullable=True, index=True)
    shopping_mall_guestuser_id = Column(String(36), ForeignKey("shopping_mall_guestusers.id"), nullable=True, index=True)
    order_code = Column(String(100), nullable=False, index=True)
    order_status = Column(String(50), nullable=False, default="pending")
    payment_status = Column(String(50), nullable=False, default="pending")
    total_price = Column(Numeric(15, 2), nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


class OrderItem(Base):
    __tablename__ = "shopping_mall_order_items"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_order_id = Column(String(36), ForeignKey("shopping_mall_orders.id"), nullable=False, index=True)
    shopping_mall_sale_snapshot_id = Column(String(36), ForeignKey("shopping_mall_sale_snapshots.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(15, 2), nullable=False)
    order_item_status = Column(String(50), nullable=False, default="pending")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


# ============= PAGOS Y ENTREGAS =============
class Payment(Base):
    __tablename__ = "shopping_mall_payments"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_order_id = Column(String(36), ForeignKey("shopping_mall_orders.id"), nullable=False, index=True)
    payment_method = Column(String(50), nullable=False)
    payment_status = Column(String(50), nullable=False, default="pending")
    payment_amount = Column(Numeric(15, 2), nullable=False)
    transaction_id = Column(String(255), nullable=True)
    cancelled_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


class Delivery(Base):
    __tablename__ = "shopping_mall_deliveries"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_order_id = Column(String(36), ForeignKey("shopping_mall_orders.id"), nullable=False, index=True)
    delivery_status = Column(String(50), nullable=False, default="preparing")
    delivery_stage = Column(String(50), nullable=False, default="none")
    expected_delivery_date = Column(DateTime, nullable=True)
    start_time = Column(DateTime, nullable=True)
    end_time = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


# ============= HISTORIAL Y AUDITORÍA =============
class OrderStatusHistory(Base):
    __tablename__ = "shopping_mall_order_status_histories"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_order_id = Column(String(36), ForeignKey("shopping_mall_orders.id"), nullable=False, index=True)
    old_status = Column(String(50), nullable=False)
    new_status = Column(String(50), nullable=False)
    changed_at = Column(DateTime, nullable=False, default=utcnow)
    created_at = Column(DateTime, nullable=False, default=utcnow)


class OrderAuditLog(Base):
    __tablename__ = "shopping_mall_order_audit_logs"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_order_id = Column(String(36), ForeignKey("shopping_mall_orders.id"), nullable=False, index=True)
    actor_user_id = Column(String(36), nullable=True)
    action = Column(String(100), nullable=False)
    action_details = Column(Text, nullable=True)
    performed_at = Column(DateTime, nullable=False, default=utcnow)

from sqlalchemy import Column, String, DateTime, Integer, Numeric, ForeignKey

from app.config.database import Base
from app.entities.users import new_id
from app.utils.dates import utcnow


class Cart(Base):
    """Carrito de un miembro o de un invitado"""
    __tablename__ = "shopping_mall_carts"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_memberuser_id = Column(String(36), ForeignKey("shopping_mall_memberusers.id"), nullable=True, index=True)
    shopping_mall_guestuser_id = Column(String(36), ForeignKey("shopping_mall_guestusers.id"), nullable=True, index=True)
    status = Column(String(50), nullable=False, default="active")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


class CartItem(Base):
    __tablename__ = "shopping_mall_cart_items"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_shopping_cart_id = Column(String(36), ForeignKey("shopping_mall_carts.id"), nullable=False, index=True)
    shopping_mall_sale_snapshot_id = Column(String(36), ForeignKey("shopping_mall_sale_snapshots.id"), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Numeric(15, 2), nullable=False)
    status = Column(String(50), nullable=False, default="active")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


class CartItemOption(Base):
    __tablename__ = "shopping_mall_cart_item_options"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_cart_item_id = Column(String(36), ForeignKey("shopping_mall_cart_items.id"), nullable=False, index=True)
    shopping_mall_sale_option_group_id = Column(String(36), ForeignKey("shopping_mall_sale_option_groups.id"), nullable=False)
    shopping_mall_sale_option_id = Column(String(36), ForeignKey("shopping_mall_sale_options.id"), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)

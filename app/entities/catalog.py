from sqlalchemy import Column, String, DateTime, Text, Integer, Numeric, ForeignKey
from sqlalchemy.orm import relationship

from app.config.database import Base
from app.entities.users import new_id
from app.utils.dates import utcnow


# ============= CANALES Y SECCIONES =============
class Channel(Base):
    __tablename__ = "shopping_mall_channels"

    id = Column(String(36), primary_key=True, default=new_id)
    code = Column(String(100), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(50), nullable=False, default="active")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


class Section(Base):
    __tablename__ = "shopping_mall_sections"

    id = Column(String(36), primary_key=True, default=new_id)
    code = Column(String(100), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(50), nullable=False, default="active")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


# ============= CATEGORÍAS =============
class Category(Base):
    __tablename__ = "shopping_mall_categories"

    id = Column(String(36), primary_key=True, default=new_id)
    code = Column(String(100), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(50), nullable=False, default="active")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


class CategoryRelation(Base):
    """Arista padre -> hijo del árbol de categorías"""
    __tablename__ = "shopping_mall_category_relations"

    id = Column(String(36), primary_key=True, default=new_id)
    parent_category_id = Column(String(36), ForeignKey("shopping_mall_categories.id"), nullable=False, index=True)
    child_category_id = Column(String(36), ForeignKey("shopping_mall_categories.id"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


class ChannelCategory(Base):
    __tablename__ = "shopping_mall_channel_categories"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_channel_id = Column(String(36), ForeignKey("shopping_mall_channels.id"), nullable=False)
    shopping_mall_category_id = Column(String(36), ForeignKey("shopping_mall_categories.id"), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)

    channel = relationship("Channel", lazy="joined")
    category = relationship("Category", lazy="joined")


# ============= VENTAS =============
class Sale(Base):
    __tablename__ = "shopping_mall_sales"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_channel_id = Column(String(36), ForeignKey("shopping_mall_channels.id"), nullable=False, index=True)
    shopping_mall_section_id = Column(String(36), ForeignKey("shopping_mall_sections.id"), nullable=True, index=True)
    shopping_mall_seller_user_id = Column(String(36), ForeignKey("shopping_mall_sellerusers.id"), nullable=False, index=True)
    code = Column(String(100), nullable=False, index=True)
    status = Column(String(50), nullable=False, default="active")
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(15, 2), nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


class SaleSnapshot(Base):
    """Copia inmutable de una venta en un momento dado"""
    __tablename__ = "shopping_mall_sale_snapshots"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_sale_id = Column(String(36), ForeignKey("shopping_mall_sales.id"), nullable=False, index=True)
    code = Column(String(100), nullable=False)
    status = Column(String(50), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(15, 2), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


class SaleUnit(Base):
    __tablename__ = "shopping_mall_sale_units"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_sale_id = Column(String(36), ForeignKey("shopping_mall_sales.id"), nullable=False, index=True)
    code = Column(String(100), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


class SaleOptionGroup(Base):
    __tablename__ = "shopping_mall_sale_option_groups"

    id = Column(String(36), primary_key=True, default=new_id)
    code = Column(String(100), nullable=False)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


class SaleOption(Base):
    __tablename__ = "shopping_mall_sale_options"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_sale_option_group_id = Column(String(36), ForeignKey("shopping_mall_sale_option_groups.id"), nullable=False, index=True)
    code = Column(String(100), nullable=False)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


class SaleUnitOption(Base):
    __tablename__ = "shopping_mall_sale_unit_options"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_sale_unit_id = Column(String(36), ForeignKey("shopping_mall_sale_units.id"), nullable=False, index=True)
    shopping_mall_sale_option_id = Column(String(36), ForeignKey("shopping_mall_sale_options.id"), nullable=False, index=True)
    additional_price = Column(Numeric(15, 2), nullable=False, default=0)
    stock_quantity = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)

    sale_option = relationship("SaleOption", lazy="joined")


# ============= INVENTARIO Y PRECIOS =============
class Inventory(Base):
    __tablename__ = "shopping_mall_inventory"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_sale_id = Column(String(36), ForeignKey("shopping_mall_sales.id"), nullable=False, index=True)
    option_combination_code = Column(String(255), nullable=False)
    stock_quantity = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


class InventoryAudit(Base):
    __tablename__ = "shopping_mall_inventory_audits"

    id = Column(String(36), primary_key=True, default=new_id)
    inventory_id = Column(String(36), ForeignKey("shopping_mall_inventory.id"), nullable=False, index=True)
    actor_user_id = Column(String(36), nullable=True, index=True)
    change_type = Column(String(50), nullable=False)
    quantity_changed = Column(Integer, nullable=False)
    change_reason = Column(Text, nullable=True)
    changed_at = Column(DateTime, nullable=False, default=utcnow)


class DynamicPricing(Base):
    __tablename__ = "shopping_mall_dynamic_pricings"

    id = Column(String(36), primary_key=True, default=new_id)
    product_id = Column(String(36), nullable=False, index=True)
    pricing_rule_id = Column(String(36), nullable=False, index=True)
    adjusted_price = Column(Numeric(15, 2), nullable=False)
    algorithm_version = Column(String(50), nullable=True)
    status = Column(String(50), nullable=False, default="active")
    effective_from = Column(DateTime, nullable=False, default=utcnow)
    effective_to = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)

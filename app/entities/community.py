from sqlalchemy import Column, String, DateTime, Integer, Text, Boolean, ForeignKey

from app.config.database import Base
from app.entities.users import new_id
from app.utils.dates import utcnow


# ============= RESEÑAS =============
class Review(Base):
    __tablename__ = "shopping_mall_reviews"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_channelid = Column(String(36), ForeignKey("shopping_mall_channels.id"), nullable=False)
    shopping_mall_categoryid = Column(String(36), ForeignKey("shopping_mall_categories.id"), nullable=True)
    shopping_mall_memberuserid = Column(String(36), ForeignKey("shopping_mall_memberusers.id"), nullable=False, index=True)
    shopping_mall_sale_snapshot_id = Column(String(36), ForeignKey("shopping_mall_sale_snapshots.id"), nullable=False)
    review_title = Column(String(255), nullable=False)
    review_body = Column(Text, nullable=False)
    rating = Column(Integer, nullable=False)
    is_private = Column(Boolean, nullable=False, default=False)
    status = Column(String(50), nullable=False, default="pending")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


# ============= CONSULTAS =============
class Inquiry(Base):
    __tablename__ = "shopping_mall_inquiries"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_channelid = Column(String(36), ForeignKey("shopping_mall_channels.id"), nullable=False)
    shopping_mall_sectionid = Column(String(36), ForeignKey("shopping_mall_sections.id"), nullable=True)
    shopping_mall_categoryid = Column(String(36), ForeignKey("shopping_mall_categories.id"), nullable=True)
    shopping_mall_memberuserid = Column(String(36), ForeignKey("shopping_mall_memberusers.id"), nullable=True, index=True)
    shopping_mall_guestuserid = Column(String(36), ForeignKey("shopping_mall_guestusers.id"), nullable=True)
    parent_inquiry_id = Column(String(36), ForeignKey("shopping_mall_inquiries.id"), nullable=True)
    inquiry_title = Column(String(255), nullable=False)
    inquiry_body = Column(Text, nullable=False)
    is_private = Column(Boolean, nullable=False, default=False)
    is_answered = Column(Boolean, nullable=False, default=False)
    status = Column(String(50), nullable=False, default="pending")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


class Comment(Base):
    """Comentario sobre una consulta o una reseña"""
    __tablename__ = "shopping_mall_comments"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_inquiry_id = Column(String(36), ForeignKey("shopping_mall_inquiries.id"), nullable=True, index=True)
    shopping_mall_review_id = Column(String(36), ForeignKey("shopping_mall_reviews.id"), nullable=True, index=True)
    parent_comment_id = Column(String(36), ForeignKey("shopping_mall_comments.id"), nullable=True)
    shopping_mall_memberuserid = Column(String(36), nullable=True)
    shopping_mall_guestuserid = Column(String(36), nullable=True)
    shopping_mall_selleruserid = Column(String(36), nullable=True)
    comment_body = Column(Text, nullable=False)
    is_private = Column(Boolean, nullable=False, default=False)
    status = Column(String(50), nullable=False, default="active")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


class SellerResponse(Base):
    __tablename__ = "shopping_mall_seller_responses"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_inquiry_id = Column(String(36), ForeignKey("shopping_mall_inquiries.id"), nullable=True)
    shopping_mall_review_id = Column(String(36), ForeignKey("shopping_mall_reviews.id"), nullable=True)
    shopping_mall_selleruserid = Column(String(36), ForeignKey("shopping_mall_sellerusers.id"), nullable=False, index=True)
    response_body = Column(Text, nullable=False)
    is_private = Column(Boolean, nullable=False, default=False)
    status = Column(String(50), nullable=False, default="published")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


# ============= DIRECCIONES Y SNAPSHOTS =============
class Snapshot(Base):
    """Copia JSON de cualquier entidad"""
    __tablename__ = "shopping_mall_snapshots"

    id = Column(String(36), primary_key=True, default=new_id)
    entity_type = Column(String(100), nullable=False)
    entity_id = Column(String(36), nullable=False, index=True)
    snapshot_data = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


class FavoriteAddress(Base):
    __tablename__ = "shopping_mall_favorite_addresses"

    id = Column(String(36), primary_key=True, default=new_id)
    shopping_mall_memberuser_id = Column(String(36), ForeignKey("shopping_mall_memberusers.id"), nullable=False, index=True)
    snapshot_id = Column(String(36), ForeignKey("shopping_mall_snapshots.id"), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from app.models.common import PageRequest, SoftDeleteTimestamps


# ============= RESEÑAS =============
class ReviewSearchRequest(PageRequest):
    status: Optional[str] = None
    review_title: Optional[str] = None
    min_rating: Optional[int] = None
    max_rating: Optional[int] = None

class ReviewCreateRequest(BaseModel):
    review_title: str
    review_body: str
    rating: int
    is_private: bool = False
    shopping_mall_categoryid: Optional[str] = None

class ReviewUpdateRequest(BaseModel):
    review_title: Optional[str] = None
    review_body: Optional[str] = None
    rating: Optional[int] = None
    is_private: Optional[bool] = None
    status: Optional[str] = None

class Review(SoftDeleteTimestamps):
    id: str
    shopping_mall_channelid: str
    shopping_mall_categoryid: Optional[str] = None
    shopping_mall_memberuserid: str
    shopping_mall_sale_snapshot_id: str
    review_title: str
    review_body: str
    rating: int
    is_private: bool
    status: str


# ============= COMENTARIOS =============
class CommentFilter(BaseModel):
    status: Optional[str] = None
    is_private: Optional[bool] = None
    shopping_mall_memberuserid: Optional[str] = None
    shopping_mall_inquiry_id: Optional[str] = None
    # texto dentro de comment_body
    search: Optional[str] = None

class CommentSearchRequest(PageRequest):
    filter: Optional[CommentFilter] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None

class CommentUpdateRequest(BaseModel):
    comment_body: Optional[str] = None
    is_private: Optional[bool] = None
    status: Optional[str] = None

class Comment(SoftDeleteTimestamps):
    id: str
    shopping_mall_inquiry_id: Optional[str] = None
    shopping_mall_review_id: Optional[str] = None
    parent_comment_id: Optional[str] = None
    shopping_mall_memberuserid: Optional[str] = None
    shopping_mall_guestuserid: Optional[str] = None
    shopping_mall_selleruserid: Optional[str] = None
    comment_body: str
    is_private: bool
    status: str


# ============= CONSULTAS =============
class InquirySearchRequest(PageRequest):
    shopping_mall_channelid: Optional[str] = None
    shopping_mall_sectionid: Optional[str] = None
    shopping_mall_categoryid: Optional[str] = None
    shopping_mall_memberuserid: Optional[str] = None
    shopping_mall_guestuserid: Optional[str] = None
    parent_inquiry_id: Optional[str] = None
    inquiry_title: Optional[str] = None
    inquiry_body: Optional[str] = None
    is_private: Optional[bool] = None
    is_answered: Optional[bool] = None
    status: Optional[str] = None
    sort_by: Optional[str] = None
    sort_direction: Optional[str] = None

class InquiryUpdateRequest(BaseModel):
    inquiry_title: Optional[str] = None
    inquiry_body: Optional[str] = None
    is_private: Optional[bool] = None
    status: Optional[str] = None

class Inquiry(SoftDeleteTimestamps):
    id: str
    shopping_mall_channelid: str
    shopping_mall_sectionid: Optional[str] = None
    shopping_mall_categoryid: Optional[str] = None
    shopping_mall_memberuserid: Optional[str] = None
    shopping_mall_guestuserid: Optional[str] = None
    parent_inquiry_id: Optional[str] = None
    inquiry_title: str
    inquiry_body: str
    is_private: bool
    is_answered: bool
    status: str


# ============= RESPUESTAS DEL VENDEDOR =============
class SellerResponseSearchRequest(PageRequest):
    search: Optional[str] = None
    is_private: Optional[bool] = None
    status: Optional[str] = None

class SellerResponseUpdateRequest(BaseModel):
    response_body: Optional[str] = None
    is_private: Optional[bool] = None
    status: Optional[str] = None
    deleted_at: Optional[datetime] = None

class SellerResponse(SoftDeleteTimestamps):
    id: str
    shopping_mall_inquiry_id: Optional[str] = None
    shopping_mall_review_id: Optional[str] = None
    shopping_mall_selleruserid: str
    response_body: str
    is_private: bool
    status: str

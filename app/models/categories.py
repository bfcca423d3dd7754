from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from app.models.common import PageRequest, SoftDeleteTimestamps


# ============= CANALES Y CATEGORÍAS =============
class ChannelCreateRequest(BaseModel):
    code: str
    name: str
    description: Optional[str] = None
    status: str = "active"

class Channel(SoftDeleteTimestamps):
    id: str
    code: str
    name: str
    description: Optional[str] = None
    status: str

class CategoryCreateRequest(BaseModel):
    code: str
    name: str
    description: Optional[str] = None
    status: str = "active"

class Category(SoftDeleteTimestamps):
    id: str
    code: str
    name: str
    description: Optional[str] = None
    status: str


# ============= RELACIONES ENTRE CATEGORÍAS =============
class CategoryRelationSearchRequest(PageRequest):
    child_category_id: Optional[str] = None
    parent_category_id: Optional[str] = None
    created_at_from: Optional[datetime] = None
    created_at_to: Optional[datetime] = None
    updated_at_from: Optional[datetime] = None
    updated_at_to: Optional[datetime] = None
    # True: solo eliminadas, False: solo vigentes, None: todas
    deleted_at: Optional[bool] = None
    sort: Optional[str] = None

class CategoryRelationCreateRequest(BaseModel):
    child_category_id: str

class ChildRelationUpdateRequest(BaseModel):
    child_category_id: str

class ParentRelationUpdateRequest(BaseModel):
    parent_category_id: Optional[str] = None
    child_category_id: Optional[str] = None
    deleted_at: Optional[datetime] = None

class CategoryRelation(SoftDeleteTimestamps):
    id: str
    parent_category_id: str
    child_category_id: str


# ============= CATEGORÍAS POR CANAL =============
class ChannelCategoryCreateRequest(BaseModel):
    shopping_mall_channel_id: str
    shopping_mall_category_id: str

class ChannelCategoryUpdateRequest(BaseModel):
    shopping_mall_channel_id: Optional[str] = None
    shopping_mall_category_id: Optional[str] = None

class ChannelCategory(SoftDeleteTimestamps):
    id: str
    shopping_mall_channel_id: str
    shopping_mall_category_id: str
    channel: Channel
    category: Category

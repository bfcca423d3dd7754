from datetime import datetime
from typing import Optional

from app.models.common import PageRequest, SoftDeleteTimestamps


class FavoriteAddressSearchRequest(PageRequest):
    created_at_from: Optional[datetime] = None
    created_at_to: Optional[datetime] = None
    # "created_at:desc"
    sort: Optional[str] = None

class FavoriteAddress(SoftDeleteTimestamps):
    id: str
    shopping_mall_memberuser_id: str
    snapshot_id: str


class SnapshotSearchRequest(PageRequest):
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    created_at_from: Optional[datetime] = None
    created_at_to: Optional[datetime] = None

class Snapshot(SoftDeleteTimestamps):
    id: str
    entity_type: str
    entity_id: str
    snapshot_data: str

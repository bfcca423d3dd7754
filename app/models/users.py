from datetime import datetime
from typing import Optional

from app.models.common import PageRequest, SoftDeleteTimestamps
from app.utils.dates import IsoDatetime


class GuestUserSearchRequest(PageRequest):
    # ip_address, access_url o user_agent
    search: Optional[str] = None
    session_start_from: Optional[datetime] = None
    session_start_to: Optional[datetime] = None
    sortBy: Optional[str] = None
    sortDirection: Optional[str] = None

class GuestUser(SoftDeleteTimestamps):
    id: str
    ip_address: str
    access_url: str
    referrer: Optional[str] = None
    user_agent: Optional[str] = None
    session_start_at: IsoDatetime
    session_end_at: Optional[IsoDatetime] = None

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.entities.users import GuestUser
from app.models.users import GuestUserSearchRequest, GuestUser as GuestUserDto
from app.utils.auth import ActorPayload, admin_user
from app.utils.pagination import Page, paginate, sort_clause
from app.utils.queries import filter_range, filter_search, live

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/shoppingMall/adminUser",
    tags=["Usuarios"]
)

GUEST_SORT_FIELDS = ("session_start_at", "session_end_at", "ip_address", "created_at", "updated_at")


# ============= INVITADOS =============
@router.patch("/guestUsers", response_model=Page[GuestUserDto])
def search_guest_users(
    body: GuestUserSearchRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    """Sesiones de invitados"""
    logger.debug("Invitados consultados por el admin %s", admin.id)
    query = live(db.query(GuestUser), GuestUser)
    query = filter_search(query, body.search, GuestUser.ip_address, GuestUser.access_url, GuestUser.user_agent)
    query = filter_range(query, GuestUser.session_start_at, body.session_start_from, body.session_start_to)

    order_by = sort_clause(GuestUser, body.sortBy, body.sortDirection, GUEST_SORT_FIELDS)
    return paginate(query, body.page, body.limit, order_by)

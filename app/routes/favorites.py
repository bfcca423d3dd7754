import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.entities.community import FavoriteAddress, Snapshot
from app.models.favorites import (
    FavoriteAddressSearchRequest,
    FavoriteAddress as FavoriteAddressDto,
    SnapshotSearchRequest,
    Snapshot as SnapshotDto,
)
from app.utils.auth import ActorPayload, member_user
from app.utils.pagination import Page, paginate, parse_sort_expression, sort_clause
from app.utils.queries import filter_eq, filter_range, live

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/shoppingMall/memberUser",
    tags=["Favoritos"]
)


# ============= DIRECCIONES FAVORITAS =============
@router.patch("/favoriteAddresses", response_model=Page[FavoriteAddressDto])
def search_favorite_addresses(
    body: FavoriteAddressSearchRequest,
    member: ActorPayload = Depends(member_user),
    db: Session = Depends(get_db),
):
    """Direcciones favoritas del miembro"""
    logger.debug("Direcciones favoritas del miembro %s", member.id)
    query = live(db.query(FavoriteAddress), FavoriteAddress).filter(
        FavoriteAddress.shopping_mall_memberuser_id == member.id
    )
    query = filter_range(query, FavoriteAddress.created_at, body.created_at_from, body.created_at_to)

    field, direction = parse_sort_expression(body.sort, separator=":")
    order_by = sort_clause(FavoriteAddress, field, direction, ("created_at", "updated_at"))
    return paginate(query, body.page, body.limit, order_by)


# ============= SNAPSHOTS =============
@router.patch("/snapshots", response_model=Page[SnapshotDto])
def search_snapshots(
    body: SnapshotSearchRequest,
    member: ActorPayload = Depends(member_user),
    db: Session = Depends(get_db),
):
    query = live(db.query(Snapshot), Snapshot)
    query = filter_eq(query, Snapshot.entity_type, body.entity_type)
    query = filter_eq(query, Snapshot.entity_id, body.entity_id)
    query = filter_range(query, Snapshot.created_at, body.created_at_from, body.created_at_to)

    return paginate(query, body.page, body.limit, [Snapshot.created_at.desc()])

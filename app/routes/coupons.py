import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.entities.catalog import Channel
from app.entities.coupons import Coupon, CouponCondition, CouponTicket, CouponLog
from app.entities.users import MemberUser
from app.models.coupons import (
    CouponSearchRequest,
    CouponCreateRequest,
    CouponSummary,
    Coupon as CouponDto,
    CouponConditionSearchRequest,
    CouponCondition as CouponConditionDto,
    CouponTicketSearchRequest,
    CouponTicketUpdateRequest,
    CouponTicket as CouponTicketDto,
    CouponLogSearchRequest,
    CouponLog as CouponLogDto,
)
from app.utils.auth import ActorPayload, admin_user, seller_user, member_user
from app.utils.dates import as_naive_utc, utcnow
from app.utils.pagination import Page, paginate, parse_signed_sort, sort_clause
from app.utils.queries import (
    apply_changes,
    filter_contains,
    filter_eq,
    filter_range,
    find_or_404,
    live,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/shoppingMall",
    tags=["Cupones"]
)

COUPON_SORT_FIELDS = (
    "coupon_code", "coupon_name", "discount_type", "discount_value",
    "start_date", "end_date", "status", "created_at", "updated_at",
)


def _search_coupons(db: Session, body: CouponSearchRequest) -> dict:
    query = live(db.query(Coupon), Coupon)
    query = filter_contains(query, Coupon.coupon_code, body.coupon_code)
    query = filter_contains(query, Coupon.coupon_name, body.coupon_name)
    query = filter_eq(query, Coupon.status, body.status)
    query = filter_range(query, Coupon.start_date, gte=body.start_date_from)
    query = filter_range(query, Coupon.end_date, lte=body.end_date_to)

    field, direction = parse_signed_sort(body.order_by)
    order_by = sort_clause(Coupon, field, direction, COUPON_SORT_FIELDS)
    return paginate(query, body.page, body.limit, order_by)


# ============= BUSCAR CUPONES =============
@router.patch("/adminUser/coupons", response_model=Page[CouponSummary])
def search_coupons_as_admin(
    body: CouponSearchRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    """Listar cupones (administrador)"""
    return _search_coupons(db, body)

@router.patch("/sellerUser/coupons", response_model=Page[CouponSummary])
def search_coupons_as_seller(
    body: CouponSearchRequest,
    seller: ActorPayload = Depends(seller_user),
    db: Session = Depends(get_db),
):
    """Listar cupones (vendedor)"""
    return _search_coupons(db, body)

@router.patch("/memberUser/coupons", response_model=Page[CouponSummary])
def search_coupons_as_member(
    body: CouponSearchRequest,
    member: ActorPayload = Depends(member_user),
    db: Session = Depends(get_db),
):
    """Listar cupones (solo miembros activos)"""
    record = db.query(MemberUser).filter(MemberUser.id == member.id).first()
    if record.status != "active":
        raise HTTPException(status_code=403, detail="El miembro no está activo")

    return _search_coupons(db, body)


# ============= CRUD DE CUPONES (ADMIN) =============
@router.post("/adminUser/coupons", response_model=CouponDto, status_code=status.HTTP_201_CREATED)
def create_coupon(
    body: CouponCreateRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    """Crear un cupón"""
    if body.discount_value <= 0:
        raise HTTPException(status_code=400, detail="El valor del descuento debe ser mayor a 0")

    if body.discount_type == "percentage" and body.discount_value > 100:
        raise HTTPException(status_code=400, detail="El porcentaje no puede superar 100")

    if as_naive_utc(body.end_date) < as_naive_utc(body.start_date):
        raise HTTPException(status_code=400, detail="La fecha de fin es anterior a la de inicio")

    if body.shopping_mall_channel_id:
        find_or_404(db, Channel, body.shopping_mall_channel_id, "Canal no encontrado")

    exists = live(db.query(Coupon), Coupon).filter(Coupon.coupon_code == body.coupon_code).first()
    if exists:
        raise HTTPException(status_code=409, detail="El código de cupón ya existe")

    coupon = apply_changes(Coupon(), body.model_dump())
    db.add(coupon)
    db.commit()
    db.refresh(coupon)

    logger.info("Cupón %s creado por %s", coupon.coupon_code, admin.id)
    return coupon

@router.get("/adminUser/coupons/{couponId}", response_model=CouponDto)
def get_coupon(
    couponId: str,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    return find_or_404(db, Coupon, couponId, "Cupón no encontrado")

@router.delete("/adminUser/coupons/{couponId}", status_code=status.HTTP_204_NO_CONTENT)
def erase_coupon(
    couponId: str,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    """Eliminación lógica"""
    coupon = find_or_404(db, Coupon, couponId, "Cupón no encontrado")
    coupon.deleted_at = utcnow()
    db.commit()

    logger.info("Cupón %s eliminado por %s", couponId, admin.id)


# ============= CONDICIONES DE CUPÓN =============
@router.patch("/adminUser/coupons/{couponId}/conditions", response_model=Page[CouponConditionDto])
def search_coupon_conditions(
    couponId: str,
    body: CouponConditionSearchRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    """Condiciones de un cupón"""
    find_or_404(db, Coupon, couponId, "Cupón no encontrado")

    query = db.query(CouponCondition).filter(CouponCondition.shopping_mall_coupon_id == couponId)
    query = filter_eq(query, CouponCondition.condition_type, body.condition_type)
    query = filter_eq(query, CouponCondition.product_id, body.product_id)
    query = filter_eq(query, CouponCondition.section_id, body.section_id)
    query = filter_eq(query, CouponCondition.category_id, body.category_id)
    query = filter_range(query, CouponCondition.created_at, body.created_at_from, body.created_at_to)
    query = filter_range(query, CouponCondition.updated_at, body.updated_at_from, body.updated_at_to)

    return paginate(query, body.page, body.limit, [CouponCondition.created_at.desc()], default_limit=20)


# ============= TICKETS DEL MIEMBRO =============
@router.patch("/memberUser/couponTickets", response_model=Page[CouponTicketDto])
def search_coupon_tickets(
    body: CouponTicketSearchRequest,
    member: ActorPayload = Depends(member_user),
    db: Session = Depends(get_db),
):
    """Tickets de cupón del miembro"""
    query = live(db.query(CouponTicket), CouponTicket).filter(CouponTicket.memberuser_id == member.id)
    query = filter_eq(query, CouponTicket.shopping_mall_coupon_id, body.shopping_mall_coupon_id)
    query = filter_contains(query, CouponTicket.ticket_code, body.ticket_code)
    query = filter_eq(query, CouponTicket.usage_status, body.usage_status)
    query = filter_range(query, CouponTicket.valid_from, body.valid_from_from, body.valid_from_to)
    query = filter_range(query, CouponTicket.valid_until, body.valid_until_from, body.valid_until_to)

    return paginate(
        query, body.page, body.limit,
        [CouponTicket.created_at.desc()],
        with_count=body.with_count,
    )

@router.put("/memberUser/couponTickets/{couponTicketId}", response_model=CouponTicketDto)
def update_coupon_ticket(
    couponTicketId: str,
    body: CouponTicketUpdateRequest,
    member: ActorPayload = Depends(member_user),
    db: Session = Depends(get_db),
):
    ticket = find_or_404(db, CouponTicket, couponTicketId, "Ticket de cupón no encontrado")

    if ticket.memberuser_id != member.id:
        raise HTTPException(status_code=403, detail="El ticket no pertenece al miembro")

    apply_changes(ticket, body.model_dump(exclude_unset=True, exclude_none=True))
    db.commit()
    db.refresh(ticket)
    return ticket


# ============= LOGS DE CUPÓN =============
@router.patch("/memberUser/couponLogs", response_model=Page[CouponLogDto])
def search_coupon_logs(
    body: CouponLogSearchRequest,
    member: ActorPayload = Depends(member_user),
    db: Session = Depends(get_db),
):
    """Historial de uso de los tickets del miembro"""
    query = (
        db.query(CouponLog)
        .join(CouponTicket, CouponTicket.id == CouponLog.shopping_mall_coupon_ticket_id)
        .filter(CouponTicket.memberuser_id == member.id)
    )
    query = filter_eq(query, CouponLog.shopping_mall_coupon_ticket_id, body.shopping_mall_coupon_ticket_id)
    query = filter_eq(query, CouponLog.log_type, body.log_type)
    query = filter_range(query, CouponLog.logged_at, body.logged_at_from, body.logged_at_to)

    return paginate(query, body.page, body.limit, [CouponLog.logged_at.desc()])

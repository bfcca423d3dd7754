import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.entities.finance import Deposit, DepositCharge, MileageDonation
from app.models.finance import (
    DepositSearchRequest,
    Deposit as DepositDto,
    DepositChargeSearchRequest,
    DepositChargeUpdateRequest,
    DepositCharge as DepositChargeDto,
    MileageDonationSearchRequest,
    MileageDonation as MileageDonationDto,
)
from app.utils.auth import ActorPayload, admin_user, member_user
from app.utils.pagination import Page, paginate, sort_clause
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
    tags=["Depósitos y millaje"]
)

DEPOSIT_SORT_FIELDS = ("deposit_amount", "usable_balance", "deposit_start_at", "deposit_end_at", "created_at")
DONATION_SORT_FIELDS = ("donation_date", "donation_amount", "created_at")


# ============= DEPÓSITOS =============
@router.patch("/memberUser/deposits", response_model=Page[DepositDto])
def search_deposits(
    body: DepositSearchRequest,
    member: ActorPayload = Depends(member_user),
    db: Session = Depends(get_db),
):
    """Depósitos del miembro"""
    query = live(db.query(Deposit), Deposit).filter(Deposit.memberuser_id == member.id)
    query = filter_eq(query, Deposit.status, body.status)
    query = filter_range(query, Deposit.deposit_amount, body.min_deposit_amount, body.max_deposit_amount)
    query = filter_range(query, Deposit.usable_balance, body.min_usable_balance, body.max_usable_balance)
    query = filter_range(query, Deposit.deposit_start_at, body.deposit_start_at_from, body.deposit_start_at_to)
    query = filter_range(query, Deposit.deposit_end_at, body.deposit_end_at_from, body.deposit_end_at_to)

    order_by = sort_clause(Deposit, body.orderBy, "desc", DEPOSIT_SORT_FIELDS)
    return paginate(query, body.page, body.limit, order_by)


# ============= CARGAS DE DEPÓSITO =============
@router.patch("/memberUser/depositCharges", response_model=Page[DepositChargeDto])
def search_deposit_charges(
    body: DepositChargeSearchRequest,
    member: ActorPayload = Depends(member_user),
    db: Session = Depends(get_db),
):
    query = live(db.query(DepositCharge), DepositCharge).filter(DepositCharge.memberuser_id == member.id)
    query = filter_eq(query, DepositCharge.charge_status, body.charge_status)
    query = filter_eq(query, DepositCharge.payment_provider, body.payment_provider)
    query = filter_eq(query, DepositCharge.payment_account, body.payment_account)
    query = filter_range(query, DepositCharge.paid_at, body.paid_at_from, body.paid_at_to)

    return paginate(query, body.page, body.limit, [DepositCharge.created_at.desc()])

@router.put("/memberUser/depositCharges/{depositChargeId}", response_model=DepositChargeDto)
def update_deposit_charge(
    depositChargeId: str,
    body: DepositChargeUpdateRequest,
    member: ActorPayload = Depends(member_user),
    db: Session = Depends(get_db),
):
    charge = find_or_404(db, DepositCharge, depositChargeId, "Carga de depósito no encontrada")

    if charge.memberuser_id != member.id:
        raise HTTPException(status_code=403, detail="La carga no pertenece al miembro")

    if body.charge_amount is not None and body.charge_amount <= 0:
        raise HTTPException(status_code=400, detail="El monto de la carga debe ser mayor a 0")

    apply_changes(charge, body.model_dump(exclude_unset=True, exclude_none=True))
    db.commit()
    db.refresh(charge)

    logger.info("Carga %s actualizada por el miembro %s", charge.id, member.id)
    return charge


# ============= DONACIONES DE MILLAJE =============
@router.patch("/adminUser/mileageDonations", response_model=Page[MileageDonationDto])
def search_mileage_donations(
    body: MileageDonationSearchRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    query = live(db.query(MileageDonation), MileageDonation)
    query = filter_eq(query, MileageDonation.adminuser_id, body.adminuser_id)
    query = filter_eq(query, MileageDonation.memberuser_id, body.memberuser_id)
    query = filter_contains(query, MileageDonation.donation_reason, body.donation_reason)
    query = filter_range(query, MileageDonation.donation_amount, body.min_donation_amount, body.max_donation_amount)
    query = filter_range(query, MileageDonation.donation_date, body.donation_date_from, body.donation_date_to)

    order_by = sort_clause(
        MileageDonation, body.sort_by, body.sort_order, DONATION_SORT_FIELDS,
        default_field="donation_date",
    )
    return paginate(query, body.page, body.limit, order_by, default_limit=100)

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from app.models.common import PageRequest, SoftDeleteTimestamps
from app.utils.dates import IsoDatetime


# ============= DEPÓSITOS =============
class DepositSearchRequest(PageRequest):
    status: Optional[str] = None
    min_deposit_amount: Optional[float] = None
    max_deposit_amount: Optional[float] = None
    min_usable_balance: Optional[float] = None
    max_usable_balance: Optional[float] = None
    deposit_start_at_from: Optional[datetime] = None
    deposit_start_at_to: Optional[datetime] = None
    deposit_end_at_from: Optional[datetime] = None
    deposit_end_at_to: Optional[datetime] = None
    orderBy: Optional[str] = None

class Deposit(SoftDeleteTimestamps):
    id: str
    guestuser_id: Optional[str] = None
    memberuser_id: Optional[str] = None
    deposit_amount: float
    usable_balance: float
    deposit_start_at: IsoDatetime
    deposit_end_at: Optional[IsoDatetime] = None
    status: str


# ============= CARGAS DE DEPÓSITO =============
class DepositChargeSearchRequest(PageRequest):
    charge_status: Optional[str] = None
    payment_provider: Optional[str] = None
    payment_account: Optional[str] = None
    paid_at_from: Optional[datetime] = None
    paid_at_to: Optional[datetime] = None

class DepositChargeUpdateRequest(BaseModel):
    charge_amount: Optional[float] = None
    charge_status: Optional[str] = None
    payment_provider: Optional[str] = None
    payment_account: Optional[str] = None
    paid_at: Optional[datetime] = None

class DepositCharge(SoftDeleteTimestamps):
    id: str
    guestuser_id: Optional[str] = None
    memberuser_id: Optional[str] = None
    charge_amount: float
    charge_status: str
    payment_provider: str
    payment_account: str
    paid_at: Optional[IsoDatetime] = None


# ============= DONACIONES DE MILLAJE =============
class MileageDonationSearchRequest(PageRequest):
    adminuser_id: Optional[str] = None
    memberuser_id: Optional[str] = None
    donation_reason: Optional[str] = None
    min_donation_amount: Optional[float] = None
    max_donation_amount: Optional[float] = None
    donation_date_from: Optional[datetime] = None
    donation_date_to: Optional[datetime] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None

class MileageDonation(SoftDeleteTimestamps):
    id: str
    adminuser_id: str
    memberuser_id: str
    donation_reason: str
    donation_amount: float
    donation_date: IsoDatetime

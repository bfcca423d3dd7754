from sqlalchemy import Column, String, DateTime, Numeric, Text, ForeignKey

from app.config.database import Base
from app.entities.users import new_id
from app.utils.dates import utcnow


# ============= DEPÓSITOS =============
class Deposit(Base):
    __tablename__ = "shopping_mall_deposits"

    id = Column(String(36), primary_key=True, default=new_id)
    guestuser_id = Column(String(36), ForeignKey("shopping_mall_guestusers.id"), nullable=True)
    memberuser_id = Column(String(36), ForeignKey("shopping_mall_memberusers.id"), nullable=True, index=True)
    deposit_amount = Column(Numeric(15, 2), nullable=False)
    usable_balance = Column(Numeric(15, 2), nullable=False)
    deposit_start_at = Column(DateTime, nullable=False, default=utcnow)
    deposit_end_at = Column(DateTime, nullable=True)
    status = Column(String(50), nullable=False, default="active")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


class DepositCharge(Base):
    __tablename__ = "shopping_mall_deposit_charges"

    id = Column(String(36), primary_key=True, default=new_id)
    guestuser_id = Column(String(36), ForeignKey("shopping_mall_guestusers.id"), nullable=True)
    memberuser_id = Column(String(36), ForeignKey("shopping_mall_memberusers.id"), nullable=True, index=True)
    charge_amount = Column(Numeric(15, 2), nullable=False)
    charge_status = Column(String(50), nullable=False, default="pending")
    payment_provider = Column(String(100), nullable=False)
    payment_account = Column(String(255), nullable=False)
    paid_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


# ============= MILLAJE =============
class MileageDonation(Base):
    """Millaje otorgado por un administrador a un miembro"""
    __tablename__ = "shopping_mall_mileage_donations"

    id = Column(String(36), primary_key=True, default=new_id)
    adminuser_id = Column(String(36), ForeignKey("shopping_mall_adminusers.id"), nullable=False, index=True)
    memberuser_id = Column(String(36), ForeignKey("shopping_mall_memberusers.id"), nullable=False, index=True)
    donation_reason = Column(Text, nullable=False)
    donation_amount = Column(Numeric(15, 2), nullable=False)
    donation_date = Column(DateTime, nullable=False, default=utcnow)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)

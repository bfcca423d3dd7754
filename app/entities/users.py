import uuid

from sqlalchemy import Column, String, DateTime, Text

from app.config.database import Base
from app.utils.dates import utcnow


def new_id() -> str:
    return str(uuid.uuid4())


class AdminUser(Base):
    __tablename__ = "shopping_mall_adminusers"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    nickname = Column(String(100), nullable=False)
    full_name = Column(String(100), nullable=False)
    status = Column(String(50), nullable=False, default="active")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


class SellerUser(Base):
    __tablename__ = "shopping_mall_sellerusers"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    nickname = Column(String(100), nullable=False)
    full_name = Column(String(100), nullable=False)
    phone_number = Column(String(50), nullable=True)
    business_registration_number = Column(String(100), nullable=False, index=True)
    status = Column(String(50), nullable=False, default="pending")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


class MemberUser(Base):
    __tablename__ = "shopping_mall_memberusers"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    nickname = Column(String(100), nullable=False)
    full_name = Column(String(100), nullable=False)
    phone_number = Column(String(50), nullable=True)
    status = Column(String(50), nullable=False, default="active")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)


class GuestUser(Base):
    """Sesión anónima de un visitante"""
    __tablename__ = "shopping_mall_guestusers"

    id = Column(String(36), primary_key=True, default=new_id)
    ip_address = Column(String(64), nullable=False)
    access_url = Column(Text, nullable=False)
    referrer = Column(Text, nullable=True)
    user_agent = Column(Text, nullable=True)
    session_start_at = Column(DateTime, nullable=False, default=utcnow)
    session_end_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)

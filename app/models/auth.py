from pydantic import AliasChoices, BaseModel, Field
from typing import Optional

from app.models.common import SoftDeleteTimestamps
from app.utils.dates import IsoDatetime


# ============= REQUESTS =============
class AdminJoinRequest(BaseModel):
    email: str
    password: str = Field(min_length=1)
    nickname: str
    full_name: str
    status: str = "active"

class SellerJoinRequest(BaseModel):
    email: str
    password: str = Field(min_length=1)
    nickname: str
    full_name: str
    phone_number: Optional[str] = None
    business_registration_number: str

class MemberJoinRequest(BaseModel):
    email: str
    password: str = Field(min_length=1)
    nickname: str
    full_name: str
    phone_number: Optional[str] = None
    status: str = "active"

class GuestJoinRequest(BaseModel):
    ip_address: str
    access_url: str
    referrer: Optional[str] = None
    user_agent: Optional[str] = None

class LoginRequest(BaseModel):
    email: str
    password: str

class RefreshRequest(BaseModel):
    refresh_token: str = Field(validation_alias=AliasChoices("refreshToken", "refresh_token"))


# ============= RESPONSES =============
class AuthorizationToken(BaseModel):
    access: str
    refresh: str
    expired_at: IsoDatetime
    refreshable_until: IsoDatetime

class AdminAuthorized(SoftDeleteTimestamps):
    id: str
    email: str
    nickname: str
    full_name: str
    status: str
    token: AuthorizationToken

class SellerAuthorized(SoftDeleteTimestamps):
    id: str
    email: str
    nickname: str
    full_name: str
    phone_number: Optional[str] = None
    business_registration_number: str
    status: str
    token: AuthorizationToken

class MemberAuthorized(SoftDeleteTimestamps):
    id: str
    email: str
    nickname: str
    full_name: str
    phone_number: Optional[str] = None
    status: str
    token: AuthorizationToken

class GuestAuthorized(SoftDeleteTimestamps):
    id: str
    ip_address: str
    access_url: str
    referrer: Optional[str] = None
    user_agent: Optional[str] = None
    session_start_at: IsoDatetime
    session_end_at: Optional[IsoDatetime] = None
    token: AuthorizationToken

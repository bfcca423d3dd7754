import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.config.security import (
    ActorType,
    InvalidTokenError,
    TokenType,
    decode_token,
    hash_password,
    issue_tokens,
    verify_password,
)
from app.entities.users import AdminUser, SellerUser, MemberUser, GuestUser
from app.models.auth import (
    AdminJoinRequest,
    SellerJoinRequest,
    MemberJoinRequest,
    GuestJoinRequest,
    LoginRequest,
    RefreshRequest,
    AdminAuthorized,
    SellerAuthorized,
    MemberAuthorized,
    GuestAuthorized,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["Autenticación"]
)


def _authorized(user, actor_type: str) -> dict:
    """Columnas públicas del usuario + bloque token"""
    data = {
        column.name: getattr(user, column.name)
        for column in user.__table__.columns
        if column.name != "password_hash"
    }
    data["token"] = issue_tokens(user.id, actor_type)
    return data


def _email_taken(db: Session, model, email: str) -> bool:
    return (
        db.query(model)
        .filter(model.email == email, model.deleted_at.is_(None))
        .first()
        is not None
    )


def _login(db: Session, model, actor_type: str, body: LoginRequest) -> dict:
    user = (
        db.query(model)
        .filter(model.email == body.email, model.deleted_at.is_(None))
        .first()
    )
    if not user or not verify_password(body.password, user.password_hash):
        logger.warning("Login fallido para %s (%s)", body.email, actor_type)
        raise HTTPException(status_code=401, detail="Credenciales inválidas")

    if user.status != "active":
        raise HTTPException(status_code=401, detail="La cuenta no está activa")

    return _authorized(user, actor_type)


def _refresh(db: Session, model, actor_type: str, body: RefreshRequest, require_active: bool = True) -> dict:
    try:
        payload = decode_token(body.refresh_token, TokenType.REFRESH)
    except InvalidTokenError as e:
        logger.warning("Refresh rechazado: %s", e)
        raise HTTPException(status_code=401, detail="Token de refresco inválido o expirado")

    if payload.get("type") != actor_type:
        raise HTTPException(status_code=401, detail="Token de refresco inválido o expirado")

    user = (
        db.query(model)
        .filter(model.id == payload["id"], model.deleted_at.is_(None))
        .first()
    )
    if not user:
        raise HTTPException(status_code=401, detail="Usuario no encontrado")

    if require_active and user.status != "active":
        raise HTTPException(status_code=401, detail="La cuenta no está activa")

    return _authorized(user, actor_type)


# ============= ADMINISTRADORES =============
@router.post("/adminUser/join", response_model=AdminAuthorized, status_code=status.HTTP_201_CREATED)
def join_admin(body: AdminJoinRequest, db: Session = Depends(get_db)):
    """Registrar un administrador"""
    if _email_taken(db, AdminUser, body.email):
        raise HTTPException(status_code=409, detail="El email ya está registrado")

    admin = AdminUser(
        email=body.email,
        password_hash=hash_password(body.password),
        nickname=body.nickname,
        full_name=body.full_name,
        status=body.status,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)

    logger.info("Administrador registrado: %s", admin.id)
    return _authorized(admin, ActorType.ADMIN)

@router.post("/adminUser/login", response_model=AdminAuthorized)
def login_admin(body: LoginRequest, db: Session = Depends(get_db)):
    return _login(db, AdminUser, ActorType.ADMIN, body)

@router.post("/adminUser/refresh", response_model=AdminAuthorized)
def refresh_admin(body: RefreshRequest, db: Session = Depends(get_db)):
    return _refresh(db, AdminUser, ActorType.ADMIN, body)


# ============= VENDEDORES =============
@router.post("/sellerUser/join", response_model=SellerAuthorized, status_code=status.HTTP_201_CREATED)
def join_seller(body: SellerJoinRequest, db: Session = Depends(get_db)):
    """Registrar un vendedor (queda pendiente de aprobación)"""
    if _email_taken(db, SellerUser, body.email):
        raise HTTPException(status_code=409, detail="El email ya está registrado")

    duplicated = (
        db.query(SellerUser)
        .filter(
            SellerUser.business_registration_number == body.business_registration_number,
            SellerUser.deleted_at.is_(None),
        )
        .first()
    )
    if duplicated:
        raise HTTPException(status_code=409, detail="El número de registro comercial ya existe")

    seller = SellerUser(
        email=body.email,
        password_hash=hash_password(body.password),
        nickname=body.nickname,
        full_name=body.full_name,
        phone_number=body.phone_number,
        business_registration_number=body.business_registration_number,
        status="pending",
    )
    db.add(seller)
    db.commit()
    db.refresh(seller)

    logger.info("Vendedor registrado: %s", seller.id)
    return _authorized(seller, ActorType.SELLER)

@router.post("/sellerUser/login", response_model=SellerAuthorized)
def login_seller(body: LoginRequest, db: Session = Depends(get_db)):
    return _login(db, SellerUser, ActorType.SELLER, body)

@router.post("/sellerUser/refresh", response_model=SellerAuthorized)
def refresh_seller(body: RefreshRequest, db: Session = Depends(get_db)):
    return _refresh(db, SellerUser, ActorType.SELLER, body)


# ============= MIEMBROS =============
@router.post("/memberUser/join", response_model=MemberAuthorized, status_code=status.HTTP_201_CREATED)
def join_member(body: MemberJoinRequest, db: Session = Depends(get_db)):
    """Registrar un miembro"""
    if _email_taken(db, MemberUser, body.email):
        raise HTTPException(status_code=409, detail="El email ya está registrado")

    member = MemberUser(
        email=body.email,
        password_hash=hash_password(body.password),
        nickname=body.nickname,
        full_name=body.full_name,
        phone_number=body.phone_number,
        status=body.status,
    )
    db.add(member)
    db.commit()
    db.refresh(member)

    logger.info("Miembro registrado: %s", member.id)
    return _authorized(member, ActorType.MEMBER)

@router.post("/memberUser/login", response_model=MemberAuthorized)
def login_member(body: LoginRequest, db: Session = Depends(get_db)):
    return _login(db, MemberUser, ActorType.MEMBER, body)

@router.post("/memberUser/refresh", response_model=MemberAuthorized)
def refresh_member(body: RefreshRequest, db: Session = Depends(get_db)):
    return _refresh(db, MemberUser, ActorType.MEMBER, body)


# ============= INVITADOS =============
@router.post("/guestUser/join", response_model=GuestAuthorized, status_code=status.HTTP_201_CREATED)
def join_guest(body: GuestJoinRequest, db: Session = Depends(get_db)):
    """Abrir una sesión de invitado"""
    guest = GuestUser(
        ip_address=body.ip_address,
        access_url=body.access_url,
        referrer=body.referrer,
        user_agent=body.user_agent,
    )
    db.add(guest)
    db.commit()
    db.refresh(guest)

    return _authorized(guest, ActorType.GUEST)

@router.post("/guestUser/refresh", response_model=GuestAuthorized)
def refresh_guest(body: RefreshRequest, db: Session = Depends(get_db)):
    return _refresh(db, GuestUser, ActorType.GUEST, body, require_active=False)

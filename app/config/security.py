from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config.settings import settings

# ============= CONTRASEÑAS =============
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


# ============= TOKENS JWT =============
class TokenType:
    ACCESS = "access"
    REFRESH = "refresh"


class ActorType:
    ADMIN = "adminuser"
    SELLER = "selleruser"
    MEMBER = "memberuser"
    GUEST = "guestuser"


class InvalidTokenError(Exception):
    """Token mal formado, expirado o con firma inválida"""


def _encode(actor_id: str, actor_type: str, token_type: str, expire: datetime) -> str:
    payload = {
        "id": actor_id,
        "type": actor_type,
        "tokenType": token_type,
        "iss": settings.JWT_ISSUER,
        "iat": datetime.now(timezone.utc),
        "exp": expire,
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def issue_tokens(actor_id: str, actor_type: str) -> Dict[str, Any]:
    """Generar el par access/refresh para un actor.

    Devuelve el bloque ``token`` de las respuestas de autorización:
    access, refresh, expired_at y refreshable_until.
    """
    now = datetime.now(timezone.utc)
    expired_at = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    refreshable_until = now + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)

    return {
        "access": _encode(actor_id, actor_type, TokenType.ACCESS, expired_at),
        "refresh": _encode(actor_id, actor_type, TokenType.REFRESH, refreshable_until),
        "expired_at": expired_at,
        "refreshable_until": refreshable_until,
    }


def decode_token(token: str, token_type: str = TokenType.ACCESS) -> Dict[str, Any]:
    """Validar firma, emisor, expiración y tipo de token"""
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            issuer=settings.JWT_ISSUER,
        )
    except JWTError as e:
        raise InvalidTokenError(str(e)) from e

    if payload.get("tokenType") != token_type or not payload.get("id"):
        raise InvalidTokenError("Tipo de token inválido")

    return payload

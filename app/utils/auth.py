import logging

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.config.security import ActorType, InvalidTokenError, decode_token
from app.entities.users import AdminUser, SellerUser, MemberUser, GuestUser

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class ActorPayload(BaseModel):
    """Actor autenticado que llega a cada handler"""
    id: str
    type: str


def _actor_dependency(actor_type: str, model):
    def dependency(
        credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
        db: Session = Depends(get_db),
    ) -> ActorPayload:
        if credentials is None:
            raise HTTPException(status_code=401, detail="Token de acceso requerido")

        try:
            payload = decode_token(credentials.credentials)
        except InvalidTokenError as e:
            logger.warning("Token rechazado: %s", e)
            raise HTTPException(status_code=401, detail="Token inválido o expirado")

        if payload.get("type") != actor_type:
            logger.warning("Tipo de actor %s no permitido, se esperaba %s", payload.get("type"), actor_type)
            raise HTTPException(status_code=403, detail="No tiene permisos para este recurso")

        actor = (
            db.query(model)
            .filter(model.id == payload["id"], model.deleted_at.is_(None))
            .first()
        )
        if not actor:
            raise HTTPException(status_code=403, detail="Usuario no encontrado o eliminado")

        return ActorPayload(id=actor.id, type=actor_type)

    return dependency


admin_user = _actor_dependency(ActorType.ADMIN, AdminUser)
seller_user = _actor_dependency(ActorType.SELLER, SellerUser)
member_user = _actor_dependency(ActorType.MEMBER, MemberUser)
guest_user = _actor_dependency(ActorType.GUEST, GuestUser)

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.entities.community import Inquiry, Comment, SellerResponse
from app.models.community import (
    InquirySearchRequest,
    InquiryUpdateRequest,
    Inquiry as InquiryDto,
    CommentSearchRequest,
    CommentUpdateRequest,
    Comment as CommentDto,
    SellerResponseSearchRequest,
    SellerResponseUpdateRequest,
    SellerResponse as SellerResponseDto,
)
from app.routes.reviews import search_comments
from app.utils.auth import ActorPayload, admin_user, seller_user, member_user
from app.utils.pagination import Page, paginate, sort_clause
from app.utils.queries import (
    apply_changes,
    filter_contains,
    filter_eq,
    find_or_404,
    live,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/shoppingMall",
    tags=["Consultas"]
)

INQUIRY_SORT_FIELDS = ("inquiry_title", "status", "is_answered", "is_private", "created_at", "updated_at")


# ============= CONSULTAS =============
@router.patch("/adminUser/inquiries", response_model=Page[InquiryDto])
def search_inquiries(
    body: InquirySearchRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    """Listar consultas de clientes"""
    query = live(db.query(Inquiry), Inquiry)
    query = filter_eq(query, Inquiry.shopping_mall_channelid, body.shopping_mall_channelid)
    query = filter_eq(query, Inquiry.shopping_mall_sectionid, body.shopping_mall_sectionid)
    query = filter_eq(query, Inquiry.shopping_mall_categoryid, body.shopping_mall_categoryid)
    query = filter_eq(query, Inquiry.shopping_mall_memberuserid, body.shopping_mall_memberuserid)
    query = filter_eq(query, Inquiry.shopping_mall_guestuserid, body.shopping_mall_guestuserid)
    query = filter_eq(query, Inquiry.parent_inquiry_id, body.parent_inquiry_id)
    query = filter_contains(query, Inquiry.inquiry_title, body.inquiry_title)
    query = filter_contains(query, Inquiry.inquiry_body, body.inquiry_body)
    query = filter_eq(query, Inquiry.is_private, body.is_private)
    query = filter_eq(query, Inquiry.is_answered, body.is_answered)
    query = filter_eq(query, Inquiry.status, body.status)

    order_by = sort_clause(Inquiry, body.sort_by, body.sort_direction, INQUIRY_SORT_FIELDS)
    return paginate(query, body.page, body.limit, order_by)

@router.put("/memberUser/inquiries/{inquiryId}", response_model=InquiryDto)
def update_inquiry(
    inquiryId: str,
    body: InquiryUpdateRequest,
    member: ActorPayload = Depends(member_user),
    db: Session = Depends(get_db),
):
    inquiry = find_or_404(db, Inquiry, inquiryId, "Consulta no encontrada")

    if inquiry.shopping_mall_memberuserid != member.id:
        raise HTTPException(status_code=403, detail="La consulta no pertenece al miembro")

    apply_changes(inquiry, body.model_dump(exclude_unset=True, exclude_none=True))
    db.commit()
    db.refresh(inquiry)
    logger.info("Consulta %s actualizada por el miembro %s", inquiry.id, member.id)
    return inquiry


# ============= COMENTARIOS DE CONSULTAS =============
@router.patch("/adminUser/inquiries/{inquiryId}/comments", response_model=Page[CommentDto])
def search_inquiry_comments(
    inquiryId: str,
    body: CommentSearchRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    find_or_404(db, Inquiry, inquiryId, "Consulta no encontrada")
    query = db.query(Comment).filter(Comment.shopping_mall_inquiry_id == inquiryId)
    return search_comments(query, body)

@router.put("/memberUser/inquiries/{inquiryId}/comments/{commentId}", response_model=CommentDto)
def update_inquiry_comment(
    inquiryId: str,
    commentId: str,
    body: CommentUpdateRequest,
    member: ActorPayload = Depends(member_user),
    db: Session = Depends(get_db),
):
    comment = (
        live(db.query(Comment), Comment)
        .filter(Comment.id == commentId, Comment.shopping_mall_inquiry_id == inquiryId)
        .first()
    )
    if not comment:
        raise HTTPException(status_code=404, detail="Comentario no encontrado")

    if comment.shopping_mall_memberuserid != member.id:
        raise HTTPException(status_code=403, detail="El comentario no pertenece al miembro")

    apply_changes(comment, body.model_dump(exclude_unset=True, exclude_none=True))
    db.commit()
    db.refresh(comment)
    logger.info("Comentario %s de la consulta %s actualizado por el miembro %s", comment.id, inquiryId, member.id)
    return comment


# ============= RESPUESTAS DEL VENDEDOR =============
@router.patch("/adminUser/sellerResponses", response_model=Page[SellerResponseDto])
def search_seller_responses(
    body: SellerResponseSearchRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    query = live(db.query(SellerResponse), SellerResponse)
    query = filter_contains(query, SellerResponse.response_body, body.search)
    query = filter_eq(query, SellerResponse.is_private, body.is_private)
    query = filter_eq(query, SellerResponse.status, body.status)

    return paginate(query, body.page, body.limit, [SellerResponse.created_at.desc()])

@router.put("/sellerUser/sellerResponses/{sellerResponseId}", response_model=SellerResponseDto)
def update_seller_response(
    sellerResponseId: str,
    body: SellerResponseUpdateRequest,
    seller: ActorPayload = Depends(seller_user),
    db: Session = Depends(get_db),
):
    response = find_or_404(db, SellerResponse, sellerResponseId, "Respuesta no encontrada")

    if response.shopping_mall_selleruserid != seller.id:
        raise HTTPException(status_code=403, detail="La respuesta no pertenece al vendedor")

    apply_changes(response, body.model_dump(exclude_unset=True, exclude_none=True))
    db.commit()
    db.refresh(response)
    logger.info("Respuesta %s actualizada por el vendedor %s", response.id, seller.id)
    return response

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Query, Session

from app.config.database import get_db
from app.entities.catalog import Category, SaleSnapshot
from app.entities.community import Review, Comment
from app.entities.orders import Order, OrderItem
from app.models.community import (
    ReviewSearchRequest,
    ReviewCreateRequest,
    ReviewUpdateRequest,
    Review as ReviewDto,
    CommentSearchRequest,
    CommentUpdateRequest,
    Comment as CommentDto,
)
from app.utils.auth import ActorPayload, admin_user, seller_user, member_user
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
    tags=["Reseñas"]
)

COMMENT_SORT_FIELDS = ("comment_body", "is_private", "status", "created_at", "updated_at")


def search_comments(query: Query, body: CommentSearchRequest, default_limit: int = 20) -> dict:
    """Filtro y orden comunes a los comentarios de reseñas y consultas"""
    query = live(query, Comment)

    criteria = body.filter
    if criteria:
        query = filter_eq(query, Comment.status, criteria.status)
        query = filter_eq(query, Comment.is_private, criteria.is_private)
        query = filter_eq(query, Comment.shopping_mall_memberuserid, criteria.shopping_mall_memberuserid)
        query = filter_eq(query, Comment.shopping_mall_inquiry_id, criteria.shopping_mall_inquiry_id)
        query = filter_contains(query, Comment.comment_body, criteria.search)

    order_by = sort_clause(Comment, body.sort_by, body.sort_order, COMMENT_SORT_FIELDS)
    return paginate(query, body.page, body.limit, order_by, default_limit=default_limit)


def _check_rating(rating):
    if rating is not None and not 1 <= rating <= 5:
        raise HTTPException(status_code=400, detail="La calificación debe estar entre 1 y 5")


# ============= RESEÑAS DEL MIEMBRO =============
@router.patch("/memberUser/reviews", response_model=Page[ReviewDto])
def search_reviews(
    body: ReviewSearchRequest,
    member: ActorPayload = Depends(member_user),
    db: Session = Depends(get_db),
):
    """Reseñas escritas por el miembro"""
    query = live(db.query(Review), Review).filter(Review.shopping_mall_memberuserid == member.id)
    query = filter_eq(query, Review.status, body.status)
    query = filter_contains(query, Review.review_title, body.review_title)
    query = filter_range(query, Review.rating, body.min_rating, body.max_rating)

    return paginate(query, body.page, body.limit, [Review.created_at.desc()])

@router.post("/memberUser/reviews", response_model=ReviewDto, status_code=status.HTTP_201_CREATED)
def create_review(
    body: ReviewCreateRequest,
    member: ActorPayload = Depends(member_user),
    db: Session = Depends(get_db),
):
    """Reseñar la compra confirmada y pagada más reciente del miembro"""
    _check_rating(body.rating)

    order = (
        live(db.query(Order), Order)
        .filter(
            Order.shopping_mall_memberuser_id == member.id,
            Order.order_status == "confirmed",
            Order.payment_status == "paid",
        )
        .order_by(Order.created_at.desc())
        .first()
    )
    if not order:
        raise HTTPException(status_code=403, detail="Solo se pueden reseñar pedidos confirmados y pagados")

    item = (
        live(db.query(OrderItem), OrderItem)
        .filter(OrderItem.shopping_mall_order_id == order.id)
        .order_by(OrderItem.created_at.desc())
        .first()
    )
    if not item:
        raise HTTPException(status_code=404, detail="El pedido no tiene ítems")

    snapshot = find_or_404(db, SaleSnapshot, item.shopping_mall_sale_snapshot_id, "Snapshot de venta no encontrado")

    if body.shopping_mall_categoryid:
        find_or_404(db, Category, body.shopping_mall_categoryid, "Categoría no encontrada")

    review = Review(
        shopping_mall_channelid=order.shopping_mall_channel_id,
        shopping_mall_categoryid=body.shopping_mall_categoryid,
        shopping_mall_memberuserid=member.id,
        shopping_mall_sale_snapshot_id=snapshot.id,
        review_title=body.review_title,
        review_body=body.review_body,
        rating=body.rating,
        is_private=body.is_private,
        status="pending",
    )
    db.add(review)
    db.commit()
    db.refresh(review)

    logger.info("Reseña %s creada por el miembro %s", review.id, member.id)
    return review

@router.put("/memberUser/reviews/{reviewId}", response_model=ReviewDto)
def update_review(
    reviewId: str,
    body: ReviewUpdateRequest,
    member: ActorPayload = Depends(member_user),
    db: Session = Depends(get_db),
):
    review = find_or_404(db, Review, reviewId, "Reseña no encontrada")

    if review.shopping_mall_memberuserid != member.id:
        raise HTTPException(status_code=403, detail="La reseña no pertenece al miembro")

    _check_rating(body.rating)

    apply_changes(review, body.model_dump(exclude_unset=True, exclude_none=True))
    db.commit()
    db.refresh(review)
    return review


# ============= COMENTARIOS DE RESEÑAS =============
@router.patch("/adminUser/reviews/{reviewId}/comments", response_model=Page[CommentDto])
def search_review_comments_as_admin(
    reviewId: str,
    body: CommentSearchRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    find_or_404(db, Review, reviewId, "Reseña no encontrada")
    query = db.query(Comment).filter(Comment.shopping_mall_review_id == reviewId)
    return search_comments(query, body, default_limit=10)

@router.patch("/memberUser/reviews/{reviewId}/comments", response_model=Page[CommentDto])
def search_review_comments_as_member(
    reviewId: str,
    body: CommentSearchRequest,
    member: ActorPayload = Depends(member_user),
    db: Session = Depends(get_db),
):
    find_or_404(db, Review, reviewId, "Reseña no encontrada")
    query = db.query(Comment).filter(Comment.shopping_mall_review_id == reviewId)
    return search_comments(query, body)

@router.patch("/sellerUser/reviews/{reviewId}/comments", response_model=Page[CommentDto])
def search_review_comments_as_seller(
    reviewId: str,
    body: CommentSearchRequest,
    seller: ActorPayload = Depends(seller_user),
    db: Session = Depends(get_db),
):
    find_or_404(db, Review, reviewId, "Reseña no encontrada")
    query = db.query(Comment).filter(Comment.shopping_mall_review_id == reviewId)
    return search_comments(query, body)

@router.put("/adminUser/reviews/{reviewId}/comments/{commentId}", response_model=CommentDto)
def update_review_comment(
    reviewId: str,
    commentId: str,
    body: CommentUpdateRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    """Moderar un comentario de reseña"""
    comment = (
        live(db.query(Comment), Comment)
        .filter(Comment.id == commentId, Comment.shopping_mall_review_id == reviewId)
        .first()
    )
    if not comment:
        raise HTTPException(status_code=404, detail="Comentario no encontrado")

    apply_changes(comment, body.model_dump(exclude_unset=True, exclude_none=True))
    db.commit()
    db.refresh(comment)

    logger.info("Comentario %s moderado por %s", comment.id, admin.id)
    return comment

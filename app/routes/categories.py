import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.entities.catalog import Category, CategoryRelation, Channel, ChannelCategory
from app.models.categories import (
    ChannelCreateRequest,
    Channel as ChannelDto,
    CategoryCreateRequest,
    Category as CategoryDto,
    CategoryRelationSearchRequest,
    CategoryRelationCreateRequest,
    ChildRelationUpdateRequest,
    ParentRelationUpdateRequest,
    CategoryRelation as CategoryRelationDto,
    ChannelCategoryCreateRequest,
    ChannelCategoryUpdateRequest,
    ChannelCategory as ChannelCategoryDto,
)
from app.utils.auth import ActorPayload, admin_user
from app.utils.pagination import Page, paginate, sort_clause
from app.utils.queries import apply_changes, filter_eq, filter_range, find_or_404, live

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/shoppingMall/adminUser",
    tags=["Categorías"]
)


def _relation_exists(db: Session, parent_id: str, child_id: str, exclude_id: str = None) -> bool:
    query = live(db.query(CategoryRelation), CategoryRelation).filter(
        CategoryRelation.parent_category_id == parent_id,
        CategoryRelation.child_category_id == child_id,
    )
    if exclude_id:
        query = query.filter(CategoryRelation.id != exclude_id)
    return query.first() is not None


def _check_relation(db: Session, parent_id: str, child_id: str, exclude_id: str = None):
    if parent_id == child_id:
        raise HTTPException(status_code=400, detail="Una categoría no puede ser su propia hija")

    if _relation_exists(db, parent_id, child_id, exclude_id):
        raise HTTPException(status_code=409, detail="La relación entre categorías ya existe")


def _filter_relations(query, body: CategoryRelationSearchRequest):
    query = filter_eq(query, CategoryRelation.child_category_id, body.child_category_id)
    query = filter_eq(query, CategoryRelation.parent_category_id, body.parent_category_id)
    query = filter_range(query, CategoryRelation.created_at, body.created_at_from, body.created_at_to)
    query = filter_range(query, CategoryRelation.updated_at, body.updated_at_from, body.updated_at_to)
    return query


# ============= CANALES =============
@router.post("/channels", response_model=ChannelDto, status_code=status.HTTP_201_CREATED)
def create_channel(
    body: ChannelCreateRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    if live(db.query(Channel), Channel).filter(Channel.code == body.code).first():
        raise HTTPException(status_code=409, detail="El código de canal ya existe")

    channel = Channel(**body.model_dump())
    db.add(channel)
    db.commit()
    db.refresh(channel)
    return channel


# ============= CATEGORÍAS =============
@router.post("/categories", response_model=CategoryDto, status_code=status.HTTP_201_CREATED)
def create_category(
    body: CategoryCreateRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    if live(db.query(Category), Category).filter(Category.code == body.code).first():
        raise HTTPException(status_code=409, detail="El código de categoría ya existe")

    category = Category(**body.model_dump())
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


# ============= RELACIONES HIJAS =============
@router.patch("/categories/{categoryId}/categoryRelations/child", response_model=Page[CategoryRelationDto])
def search_child_relations(
    categoryId: str,
    body: CategoryRelationSearchRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    """Subcategorías de una categoría padre"""
    find_or_404(db, Category, categoryId, "Categoría no encontrada")

    query = db.query(CategoryRelation).filter(CategoryRelation.parent_category_id == categoryId)
    query = _filter_relations(query, body)

    if body.deleted_at is True:
        query = query.filter(CategoryRelation.deleted_at.is_not(None))
    elif body.deleted_at is False:
        query = query.filter(CategoryRelation.deleted_at.is_(None))

    if body.sort == "created_at_asc":
        order_by = [CategoryRelation.created_at.asc()]
    else:
        order_by = [CategoryRelation.created_at.desc()]

    return paginate(query, body.page, body.limit, order_by)

@router.post(
    "/categories/{categoryId}/categoryRelations/child",
    response_model=CategoryRelationDto,
    status_code=status.HTTP_201_CREATED,
)
def create_child_relation(
    categoryId: str,
    body: CategoryRelationCreateRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    """Asignar una subcategoría"""
    find_or_404(db, Category, categoryId, "Categoría padre no encontrada")
    find_or_404(db, Category, body.child_category_id, "Categoría hija no encontrada")
    _check_relation(db, categoryId, body.child_category_id)

    relation = CategoryRelation(
        parent_category_id=categoryId,
        child_category_id=body.child_category_id,
    )
    db.add(relation)
    db.commit()
    db.refresh(relation)

    logger.info("Relación %s -> %s creada", categoryId, body.child_category_id)
    return relation

@router.put(
    "/categories/{categoryId}/categoryRelations/child/{categoryRelationId}",
    response_model=CategoryRelationDto,
)
def update_child_relation(
    categoryId: str,
    categoryRelationId: str,
    body: ChildRelationUpdateRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    relation = (
        live(db.query(CategoryRelation), CategoryRelation)
        .filter(
            CategoryRelation.id == categoryRelationId,
            CategoryRelation.parent_category_id == categoryId,
        )
        .first()
    )
    if not relation:
        raise HTTPException(status_code=404, detail="Relación de categoría no encontrada")

    find_or_404(db, Category, body.child_category_id, "Categoría hija no encontrada")
    _check_relation(db, categoryId, body.child_category_id, exclude_id=relation.id)

    relation.child_category_id = body.child_category_id
    db.commit()
    db.refresh(relation)
    return relation


# ============= RELACIONES PADRE =============
@router.patch("/categories/{categoryId}/categoryRelations/parent", response_model=Page[CategoryRelationDto])
def search_parent_relations(
    categoryId: str,
    body: CategoryRelationSearchRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    """Categorías padre de una categoría"""
    find_or_404(db, Category, categoryId, "Categoría no encontrada")

    query = live(db.query(CategoryRelation), CategoryRelation).filter(
        CategoryRelation.child_category_id == categoryId
    )
    query = _filter_relations(query, body)

    order_by = sort_clause(CategoryRelation, body.sort, "desc", ("created_at", "updated_at"))
    return paginate(query, body.page, body.limit, order_by, default_limit=20)

@router.put(
    "/categories/{categoryId}/categoryRelations/parent/{categoryRelationId}",
    response_model=CategoryRelationDto,
)
def update_parent_relation(
    categoryId: str,
    categoryRelationId: str,
    body: ParentRelationUpdateRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    relation = (
        live(db.query(CategoryRelation), CategoryRelation)
        .filter(
            CategoryRelation.id == categoryRelationId,
            CategoryRelation.child_category_id == categoryId,
        )
        .first()
    )
    if not relation:
        raise HTTPException(status_code=404, detail="Relación de categoría no encontrada")

    changes = body.model_dump(exclude_unset=True)
    parent_id = changes.get("parent_category_id") or relation.parent_category_id
    child_id = changes.get("child_category_id") or relation.child_category_id

    if "parent_category_id" in changes:
        find_or_404(db, Category, parent_id, "Categoría padre no encontrada")
    if "child_category_id" in changes:
        find_or_404(db, Category, child_id, "Categoría hija no encontrada")
    if "parent_category_id" in changes or "child_category_id" in changes:
        _check_relation(db, parent_id, child_id, exclude_id=relation.id)

    apply_changes(relation, {k: v for k, v in changes.items() if v is not None or k == "deleted_at"})
    db.commit()
    db.refresh(relation)
    return relation


# ============= CATEGORÍAS POR CANAL =============
@router.post("/channelCategories", response_model=ChannelCategoryDto, status_code=status.HTTP_201_CREATED)
def create_channel_category(
    body: ChannelCategoryCreateRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    """Publicar una categoría en un canal"""
    find_or_404(db, Channel, body.shopping_mall_channel_id, "Canal no encontrado")
    find_or_404(db, Category, body.shopping_mall_category_id, "Categoría no encontrada")

    link = ChannelCategory(**body.model_dump())
    db.add(link)
    db.commit()
    db.refresh(link)
    return link

@router.put("/channelCategories/{channelCategoryId}", response_model=ChannelCategoryDto)
def update_channel_category(
    channelCategoryId: str,
    body: ChannelCategoryUpdateRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    link = find_or_404(db, ChannelCategory, channelCategoryId, "Categoría de canal no encontrada")
    changes = body.model_dump(exclude_unset=True, exclude_none=True)

    if "shopping_mall_channel_id" in changes:
        find_or_404(db, Channel, changes["shopping_mall_channel_id"], "Canal no encontrado")
    if "shopping_mall_category_id" in changes:
        find_or_404(db, Category, changes["shopping_mall_category_id"], "Categoría no encontrada")

    apply_changes(link, changes)
    db.commit()
    db.refresh(link)
    return link

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.entities.carts import Cart, CartItem, CartItemOption
from app.entities.catalog import SaleOption, SaleOptionGroup
from app.models.carts import (
    CartItemSearchRequest,
    CartItemUpdateRequest,
    CartItem as CartItemDto,
    CartItemOptionSearchRequest,
    CartItemOptionCreateRequest,
    CartItemOptionUpdateRequest,
    CartItemOption as CartItemOptionDto,
)
from app.utils.auth import ActorPayload, admin_user, member_user, guest_user
from app.utils.pagination import Page, paginate, parse_sort_expression, sort_clause
from app.utils.queries import apply_changes, filter_eq, find_or_404, live

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/shoppingMall",
    tags=["Carrito"]
)

CART_ITEM_SORT_FIELDS = ("created_at", "updated_at", "quantity", "unit_price", "status")


def _member_cart(db: Session, cart_id: str, member_id: str) -> Cart:
    cart = (
        live(db.query(Cart), Cart)
        .filter(Cart.id == cart_id, Cart.shopping_mall_memberuser_id == member_id)
        .first()
    )
    if not cart:
        raise HTTPException(status_code=404, detail="Carrito no encontrado")
    return cart


def _item_with_cart(db: Session, cart_item_id: str):
    item = find_or_404(db, CartItem, cart_item_id, "Ítem del carrito no encontrado")
    cart = find_or_404(db, Cart, item.shopping_mall_shopping_cart_id, "Carrito no encontrado")
    return item, cart


def _check_option(db: Session, group_id: str, option_id: str):
    find_or_404(db, SaleOptionGroup, group_id, "Grupo de opciones no encontrado")
    option = find_or_404(db, SaleOption, option_id, "Opción no encontrada")
    if option.shopping_mall_sale_option_group_id != group_id:
        raise HTTPException(status_code=400, detail="La opción no pertenece al grupo")


def _search_item_options(db: Session, cart_item_id: str, body: CartItemOptionSearchRequest) -> dict:
    query = live(db.query(CartItemOption), CartItemOption).filter(
        CartItemOption.shopping_mall_cart_item_id == cart_item_id
    )
    query = filter_eq(query, CartItemOption.shopping_mall_sale_option_group_id, body.shopping_mall_sale_option_group_id)
    query = filter_eq(query, CartItemOption.shopping_mall_sale_option_id, body.shopping_mall_sale_option_id)
    return paginate(query, body.page, body.limit, [CartItemOption.created_at.desc()])


# ============= ÍTEMS DEL CARRITO =============
@router.patch("/memberUser/carts/{cartId}/cartItems", response_model=Page[CartItemDto])
def search_cart_items(
    cartId: str,
    body: CartItemSearchRequest,
    member: ActorPayload = Depends(member_user),
    db: Session = Depends(get_db),
):
    """Ítems del carrito del miembro"""
    _member_cart(db, cartId, member.id)

    query = live(db.query(CartItem), CartItem).filter(CartItem.shopping_mall_shopping_cart_id == cartId)
    query = filter_eq(query, CartItem.status, body.status)

    field, direction = parse_sort_expression(body.orderBy)
    order_by = sort_clause(CartItem, field, direction, CART_ITEM_SORT_FIELDS)
    return paginate(query, body.page, body.limit, order_by)

@router.put("/memberUser/carts/{cartId}/cartItems/{cartItemId}", response_model=CartItemDto)
def update_cart_item(
    cartId: str,
    cartItemId: str,
    body: CartItemUpdateRequest,
    member: ActorPayload = Depends(member_user),
    db: Session = Depends(get_db),
):
    _member_cart(db, cartId, member.id)

    item = (
        live(db.query(CartItem), CartItem)
        .filter(CartItem.id == cartItemId, CartItem.shopping_mall_shopping_cart_id == cartId)
        .first()
    )
    if not item:
        raise HTTPException(status_code=404, detail="Ítem del carrito no encontrado")

    if body.quantity is not None and body.quantity < 1:
        raise HTTPException(status_code=400, detail="La cantidad debe ser al menos 1")

    if body.unit_price is not None and body.unit_price < 0:
        raise HTTPException(status_code=400, detail="El precio no puede ser negativo")

    apply_changes(item, body.model_dump(exclude_unset=True, exclude_none=True))
    db.commit()
    db.refresh(item)
    return item


# ============= OPCIONES DE ÍTEM =============
@router.patch("/adminUser/cartItems/{cartItemId}/cartItemOptions", response_model=Page[CartItemOptionDto])
def search_cart_item_options_as_admin(
    cartItemId: str,
    body: CartItemOptionSearchRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    find_or_404(db, CartItem, cartItemId, "Ítem del carrito no encontrado")
    return _search_item_options(db, cartItemId, body)

@router.patch("/memberUser/cartItems/{cartItemId}/cartItemOptions", response_model=Page[CartItemOptionDto])
def search_cart_item_options_as_member(
    cartItemId: str,
    body: CartItemOptionSearchRequest,
    member: ActorPayload = Depends(member_user),
    db: Session = Depends(get_db),
):
    item, cart = _item_with_cart(db, cartItemId)
    if cart.shopping_mall_memberuser_id != member.id:
        raise HTTPException(status_code=403, detail="El carrito no pertenece al miembro")

    return _search_item_options(db, item.id, body)

@router.post(
    "/memberUser/cartItems/{cartItemId}/cartItemOptions",
    response_model=CartItemOptionDto,
    status_code=status.HTTP_201_CREATED,
)
def create_cart_item_option(
    cartItemId: str,
    body: CartItemOptionCreateRequest,
    member: ActorPayload = Depends(member_user),
    db: Session = Depends(get_db),
):
    """Agregar una opción a un ítem del carrito"""
    item, cart = _item_with_cart(db, cartItemId)
    if cart.shopping_mall_memberuser_id != member.id:
        raise HTTPException(status_code=403, detail="El carrito no pertenece al miembro")

    _check_option(db, body.shopping_mall_sale_option_group_id, body.shopping_mall_sale_option_id)

    option = CartItemOption(shopping_mall_cart_item_id=item.id, **body.model_dump())
    db.add(option)
    db.commit()
    db.refresh(option)
    return option

@router.put(
    "/guestUser/cartItems/{cartItemId}/cartItemOptions/{cartItemOptionId}",
    response_model=CartItemOptionDto,
)
def update_cart_item_option_as_guest(
    cartItemId: str,
    cartItemOptionId: str,
    body: CartItemOptionUpdateRequest,
    guest: ActorPayload = Depends(guest_user),
    db: Session = Depends(get_db),
):
    item, cart = _item_with_cart(db, cartItemId)
    if cart.shopping_mall_guestuser_id != guest.id:
        raise HTTPException(status_code=403, detail="El carrito no pertenece al invitado")

    option = (
        live(db.query(CartItemOption), CartItemOption)
        .filter(CartItemOption.id == cartItemOptionId, CartItemOption.shopping_mall_cart_item_id == item.id)
        .first()
    )
    if not option:
        raise HTTPException(status_code=404, detail="Opción del ítem no encontrada")

    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    group_id = changes.get("shopping_mall_sale_option_group_id", option.shopping_mall_sale_option_group_id)
    option_id = changes.get("shopping_mall_sale_option_id", option.shopping_mall_sale_option_id)
    if changes:
        _check_option(db, group_id, option_id)

    apply_changes(option, changes)
    db.commit()
    db.refresh(option)
    return option

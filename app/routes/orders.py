import json
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.entities.catalog import Sale, SaleSnapshot
from app.entities.orders import (
    Order,
    OrderItem,
    Payment,
    Delivery,
    OrderStatusHistory,
    OrderAuditLog,
)
from app.models.orders import (
    PaymentSearchRequest,
    PaymentCreateRequest,
    PaymentUpdateRequest,
    Payment as PaymentDto,
    DeliverySearchRequest,
    DeliveryUpdateRequest,
    Delivery as DeliveryDto,
    OrderItemSearchRequest,
    OrderItemUpdateRequest,
    OrderItem as OrderItemDto,
    OrderStatusHistorySearchRequest,
    OrderStatusHistory as OrderStatusHistoryDto,
    OrderAuditLogSearchRequest,
    OrderAuditLog as OrderAuditLogDto,
)
from app.utils.auth import ActorPayload, admin_user, seller_user, member_user, guest_user
from app.utils.pagination import Page, paginate, parse_sort_expression, sort_clause
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
    tags=["Pedidos"]
)

DELIVERY_SORT_FIELDS = ("delivery_status", "delivery_stage", "created_at")


# ============= PROPIEDAD DEL PEDIDO =============
def _seller_items(db: Session, seller_id: str):
    """Ítems de pedido cuya venta pertenece al vendedor"""
    return (
        db.query(OrderItem)
        .join(SaleSnapshot, SaleSnapshot.id == OrderItem.shopping_mall_sale_snapshot_id)
        .join(Sale, Sale.id == SaleSnapshot.shopping_mall_sale_id)
        .filter(Sale.shopping_mall_seller_user_id == seller_id)
    )


def _seller_order(db: Session, order_id: str, seller_id: str) -> Order:
    order = find_or_404(db, Order, order_id, "Pedido no encontrado")
    sells = _seller_items(db, seller_id).filter(OrderItem.shopping_mall_order_id == order_id).first()
    if not sells:
        logger.warning("Vendedor %s sin ítems en el pedido %s", seller_id, order_id)
        raise HTTPException(status_code=403, detail="El pedido no contiene ventas del vendedor")
    return order


def _member_order(db: Session, order_id: str, member_id: str) -> Order:
    order = find_or_404(db, Order, order_id, "Pedido no encontrado")
    if order.shopping_mall_memberuser_id != member_id:
        raise HTTPException(status_code=403, detail="El pedido no pertenece al miembro")
    return order


def _guest_order(db: Session, order_id: str, guest_id: str) -> Order:
    order = find_or_404(db, Order, order_id, "Pedido no encontrado")
    if order.shopping_mall_guestuser_id != guest_id:
        raise HTTPException(status_code=403, detail="El pedido no pertenece al invitado")
    return order


def _audit(db: Session, order_id: str, actor_id: str, action: str, details: dict):
    db.add(OrderAuditLog(
        shopping_mall_order_id=order_id,
        actor_user_id=actor_id,
        action=action,
        action_details=json.dumps(details, default=str),
    ))


# ============= PAGOS =============
def _search_payments(db: Session, order_id: str, body: PaymentSearchRequest) -> dict:
    query = live(db.query(Payment), Payment).filter(Payment.shopping_mall_order_id == order_id)
    query = filter_eq(query, Payment.payment_method, body.payment_method)
    query = filter_eq(query, Payment.payment_status, body.payment_status)
    query = filter_range(query, Payment.created_at, body.created_at_from, body.created_at_to)
    return paginate(query, body.page, body.limit, [Payment.created_at.desc()], default_limit=100)


def _update_payment(db: Session, order_id: str, payment_id: str, body: PaymentUpdateRequest, actor_id: str) -> Payment:
    payment = (
        live(db.query(Payment), Payment)
        .filter(Payment.id == payment_id, Payment.shopping_mall_order_id == order_id)
        .first()
    )
    if not payment:
        raise HTTPException(status_code=404, detail="Pago no encontrado")

    if body.payment_amount is not None and body.payment_amount <= 0:
        raise HTTPException(status_code=400, detail="El monto del pago debe ser mayor a 0")

    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    apply_changes(payment, changes)
    _audit(db, order_id, actor_id, "payment_updated", {"payment_id": payment.id, **changes})
    db.commit()
    db.refresh(payment)

    logger.info("Pago %s actualizado por %s", payment.id, actor_id)
    return payment


@router.patch("/adminUser/orders/{orderId}/payments", response_model=Page[PaymentDto])
def search_payments_as_admin(
    orderId: str,
    body: PaymentSearchRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    find_or_404(db, Order, orderId, "Pedido no encontrado")
    return _search_payments(db, orderId, body)

@router.patch("/memberUser/orders/{orderId}/payments", response_model=Page[PaymentDto])
def search_payments_as_member(
    orderId: str,
    body: PaymentSearchRequest,
    member: ActorPayload = Depends(member_user),
    db: Session = Depends(get_db),
):
    _member_order(db, orderId, member.id)
    return _search_payments(db, orderId, body)

@router.patch("/sellerUser/orders/{orderId}/payments", response_model=Page[PaymentDto])
def search_payments_as_seller(
    orderId: str,
    body: PaymentSearchRequest,
    seller: ActorPayload = Depends(seller_user),
    db: Session = Depends(get_db),
):
    _seller_order(db, orderId, seller.id)
    return _search_payments(db, orderId, body)

@router.patch("/guestUser/orders/{orderId}/payments", response_model=Page[PaymentDto])
def search_payments_as_guest(
    orderId: str,
    body: PaymentSearchRequest,
    guest: ActorPayload = Depends(guest_user),
    db: Session = Depends(get_db),
):
    _guest_order(db, orderId, guest.id)
    return _search_payments(db, orderId, body)

@router.post(
    "/sellerUser/orders/{orderId}/payments",
    response_model=PaymentDto,
    status_code=status.HTTP_201_CREATED,
)
def create_payment(
    orderId: str,
    body: PaymentCreateRequest,
    seller: ActorPayload = Depends(seller_user),
    db: Session = Depends(get_db),
):
    """Registrar un pago del pedido"""
    _seller_order(db, orderId, seller.id)

    if body.payment_amount <= 0:
        raise HTTPException(status_code=400, detail="El monto del pago debe ser mayor a 0")

    payment = Payment(shopping_mall_order_id=orderId, **body.model_dump())
    db.add(payment)
    db.flush()
    _audit(db, orderId, seller.id, "payment_created", {"payment_id": payment.id, **body.model_dump()})
    db.commit()
    db.refresh(payment)

    logger.info("Pago %s registrado en el pedido %s", payment.id, orderId)
    return payment

@router.put("/adminUser/orders/{orderId}/payments/{paymentId}", response_model=PaymentDto)
def update_payment_as_admin(
    orderId: str,
    paymentId: str,
    body: PaymentUpdateRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    find_or_404(db, Order, orderId, "Pedido no encontrado")
    return _update_payment(db, orderId, paymentId, body, admin.id)

@router.put("/memberUser/orders/{orderId}/payments/{paymentId}", response_model=PaymentDto)
def update_payment_as_member(
    orderId: str,
    paymentId: str,
    body: PaymentUpdateRequest,
    member: ActorPayload = Depends(member_user),
    db: Session = Depends(get_db),
):
    _member_order(db, orderId, member.id)
    return _update_payment(db, orderId, paymentId, body, member.id)

@router.put("/sellerUser/orders/{orderId}/payments/{paymentId}", response_model=PaymentDto)
def update_payment_as_seller(
    orderId: str,
    paymentId: str,
    body: PaymentUpdateRequest,
    seller: ActorPayload = Depends(seller_user),
    db: Session = Depends(get_db),
):
    _seller_order(db, orderId, seller.id)
    return _update_payment(db, orderId, paymentId, body, seller.id)


# ============= ENTREGAS =============
@router.patch("/sellerUser/orders/{orderId}/deliveries", response_model=Page[DeliveryDto])
def search_deliveries(
    orderId: str,
    body: DeliverySearchRequest,
    seller: ActorPayload = Depends(seller_user),
    db: Session = Depends(get_db),
):
    """Entregas de un pedido con ventas del vendedor"""
    _seller_order(db, orderId, seller.id)

    query = live(db.query(Delivery), Delivery).filter(Delivery.shopping_mall_order_id == orderId)
    query = filter_eq(query, Delivery.delivery_status, body.delivery_status)
    query = filter_eq(query, Delivery.delivery_stage, body.delivery_stage)

    field, direction = parse_sort_expression(body.orderBy)
    order_by = sort_clause(Delivery, field, direction, DELIVERY_SORT_FIELDS)
    return paginate(query, body.page, body.limit, order_by)

@router.put("/sellerUser/orders/{orderId}/deliveries/{deliveryId}", response_model=DeliveryDto)
def update_delivery(
    orderId: str,
    deliveryId: str,
    body: DeliveryUpdateRequest,
    seller: ActorPayload = Depends(seller_user),
    db: Session = Depends(get_db),
):
    _seller_order(db, orderId, seller.id)

    delivery = (
        live(db.query(Delivery), Delivery)
        .filter(Delivery.id == deliveryId, Delivery.shopping_mall_order_id == orderId)
        .first()
    )
    if not delivery:
        raise HTTPException(status_code=404, detail="Entrega no encontrada")

    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    apply_changes(delivery, changes)
    _audit(db, orderId, seller.id, "delivery_updated", {"delivery_id": delivery.id, **changes})
    db.commit()
    db.refresh(delivery)
    return delivery


# ============= ÍTEMS DEL PEDIDO =============
@router.patch("/sellerUser/orders/{orderId}/items", response_model=Page[OrderItemDto])
def search_order_items(
    orderId: str,
    body: OrderItemSearchRequest,
    seller: ActorPayload = Depends(seller_user),
    db: Session = Depends(get_db),
):
    """Ítems del pedido que vende el vendedor"""
    find_or_404(db, Order, orderId, "Pedido no encontrado")

    query = live(_seller_items(db, seller.id), OrderItem).filter(OrderItem.shopping_mall_order_id == orderId)
    query = filter_eq(query, OrderItem.order_item_status, body.order_item_status)
    return paginate(query, body.page, body.limit, [OrderItem.created_at.desc()], default_limit=20)

@router.put("/sellerUser/orders/{orderId}/items/{orderItemId}", response_model=OrderItemDto)
def update_order_item(
    orderId: str,
    orderItemId: str,
    body: OrderItemUpdateRequest,
    seller: ActorPayload = Depends(seller_user),
    db: Session = Depends(get_db),
):
    find_or_404(db, Order, orderId, "Pedido no encontrado")

    item = (
        live(db.query(OrderItem), OrderItem)
        .filter(OrderItem.id == orderItemId, OrderItem.shopping_mall_order_id == orderId)
        .first()
    )
    if not item:
        raise HTTPException(status_code=404, detail="Ítem del pedido no encontrado")

    owned = _seller_items(db, seller.id).filter(OrderItem.id == item.id).first()
    if not owned:
        raise HTTPException(status_code=403, detail="El ítem no pertenece a una venta del vendedor")

    if body.quantity is not None and body.quantity < 0:
        raise HTTPException(status_code=400, detail="La cantidad no puede ser negativa")

    if body.price is not None and body.price < 0:
        raise HTTPException(status_code=400, detail="El precio no puede ser negativo")

    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    apply_changes(item, changes)
    _audit(db, orderId, seller.id, "order_item_updated", {"order_item_id": item.id, **changes})
    db.commit()
    db.refresh(item)
    return item


# ============= HISTORIAL DE ESTADOS =============
@router.patch("/adminUser/orderStatusHistories", response_model=Page[OrderStatusHistoryDto])
def search_order_status_histories(
    body: OrderStatusHistorySearchRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    query = db.query(OrderStatusHistory)
    query = filter_eq(query, OrderStatusHistory.shopping_mall_order_id, body.shopping_mall_order_id)
    query = filter_eq(query, OrderStatusHistory.old_status, body.old_status)
    query = filter_eq(query, OrderStatusHistory.new_status, body.new_status)
    query = filter_range(query, OrderStatusHistory.changed_at, body.changed_at_from, body.changed_at_to)

    return paginate(query, body.page, body.limit, [OrderStatusHistory.changed_at.desc()], default_limit=20)


# ============= AUDITORÍA DE PEDIDOS =============
@router.patch("/memberUser/orderAuditLogs", response_model=Page[OrderAuditLogDto])
def search_order_audit_logs(
    body: OrderAuditLogSearchRequest,
    member: ActorPayload = Depends(member_user),
    db: Session = Depends(get_db),
):
    """Bitácora de los pedidos del miembro"""
    query = (
        db.query(OrderAuditLog)
        .join(Order, Order.id == OrderAuditLog.shopping_mall_order_id)
        .filter(Order.shopping_mall_memberuser_id == member.id)
    )
    query = filter_eq(query, OrderAuditLog.shopping_mall_order_id, body.shopping_mall_order_id)
    query = filter_eq(query, OrderAuditLog.actor_user_id, body.actor_user_id)
    query = filter_contains(query, OrderAuditLog.action, body.action)
    query = filter_range(query, OrderAuditLog.performed_at, body.performed_at_from, body.performed_at_to)

    return paginate(query, body.page, body.limit, [OrderAuditLog.performed_at.desc()])

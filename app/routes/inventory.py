import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.entities.catalog import Inventory, InventoryAudit, DynamicPricing
from app.models.inventory import (
    InventorySearchRequest,
    Inventory as InventoryDto,
    InventoryAuditSearchRequest,
    InventoryAudit as InventoryAuditDto,
    DynamicPricingSearchRequest,
    DynamicPricing as DynamicPricingDto,
)
from app.routes.sales import get_owned_sale
from app.utils.auth import ActorPayload, admin_user, seller_user, member_user
from app.utils.pagination import Page, empty_page, paginate, sort_clause
from app.utils.queries import filter_contains, filter_eq, filter_range, live

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/shoppingMall",
    tags=["Inventario"]
)

INVENTORY_SORT_FIELDS = ("created_at", "stock_quantity")
PRICING_SORT_FIELDS = ("effective_from", "effective_to", "adjusted_price", "status", "created_at", "updated_at")


def _search_inventory(db: Session, body: InventorySearchRequest) -> dict:
    query = live(db.query(Inventory), Inventory)
    query = filter_eq(query, Inventory.shopping_mall_sale_id, body.saleId)
    query = filter_contains(query, Inventory.option_combination_code, body.optionCombinationCode)
    query = filter_range(query, Inventory.stock_quantity, body.minQuantity, body.maxQuantity)

    order_by = sort_clause(Inventory, body.orderBy, "desc", INVENTORY_SORT_FIELDS)
    return paginate(query, body.page, body.limit, order_by, default_limit=20)


# ============= INVENTARIO =============
@router.patch("/adminUser/inventory", response_model=Page[InventoryDto])
def search_inventory_as_admin(
    body: InventorySearchRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    """Existencias de todas las ventas"""
    return _search_inventory(db, body)

@router.patch("/sellerUser/inventory", response_model=Page[InventoryDto])
def search_inventory_as_seller(
    body: InventorySearchRequest,
    seller: ActorPayload = Depends(seller_user),
    db: Session = Depends(get_db),
):
    """Existencias de una venta propia; sin saleId la página va vacía"""
    if not body.saleId:
        logger.debug("Consulta de inventario sin saleId del vendedor %s", seller.id)
        return empty_page(body.page, body.limit, default_limit=20)

    get_owned_sale(db, body.saleId, seller.id)
    return _search_inventory(db, body)


# ============= AUDITORÍA DE INVENTARIO =============
@router.patch("/memberUser/inventoryAudits", response_model=Page[InventoryAuditDto])
def search_inventory_audits(
    body: InventoryAuditSearchRequest,
    member: ActorPayload = Depends(member_user),
    db: Session = Depends(get_db),
):
    query = db.query(InventoryAudit)
    query = filter_eq(query, InventoryAudit.inventory_id, body.inventory_id)
    query = filter_eq(query, InventoryAudit.actor_user_id, body.actor_user_id)
    query = filter_eq(query, InventoryAudit.change_type, body.change_type)
    query = filter_range(query, InventoryAudit.changed_at, body.changed_at_from, body.changed_at_to)

    return paginate(query, body.page, body.limit, [InventoryAudit.changed_at.desc()])


# ============= PRECIOS DINÁMICOS =============
@router.patch("/adminUser/dynamicPricings", response_model=Page[DynamicPricingDto])
def search_dynamic_pricings(
    body: DynamicPricingSearchRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    query = live(db.query(DynamicPricing), DynamicPricing)
    query = filter_eq(query, DynamicPricing.status, body.status)
    query = filter_eq(query, DynamicPricing.pricing_rule_id, body.pricing_rule_id)
    query = filter_range(query, DynamicPricing.effective_from, body.effective_from_from, body.effective_from_to)

    order_by = sort_clause(
        DynamicPricing, body.orderBy, body.orderDirection, PRICING_SORT_FIELDS,
        default_field="effective_from",
    )
    return paginate(query, body.page, body.limit, order_by)

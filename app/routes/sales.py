import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.entities.catalog import (
    Channel,
    Section,
    Sale,
    SaleSnapshot,
    SaleUnit,
    SaleUnitOption,
    SaleOption,
)
from app.models.sales import (
    SaleSearchRequest,
    SaleCreateRequest,
    Sale as SaleDto,
    SaleUnitSearchRequest,
    SaleUnit as SaleUnitDto,
    SaleUnitOptionSearchRequest,
    SaleUnitOption as SaleUnitOptionDto,
    SaleSnapshotSearchRequest,
    SaleSnapshot as SaleSnapshotDto,
)
from app.utils.auth import ActorPayload, admin_user, seller_user
from app.utils.pagination import Page, paginate, sort_clause
from app.utils.queries import (
    filter_eq,
    filter_in,
    filter_range,
    filter_search,
    find_or_404,
    live,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/shoppingMall",
    tags=["Ventas"]
)

SALE_SORT_FIELDS = ("code", "name", "status", "price", "created_at", "updated_at")
UNIT_SORT_FIELDS = ("code", "name", "created_at", "updated_at")
UNIT_OPTION_SORT_FIELDS = ("created_at", "updated_at", "additional_price", "stock_quantity")


def get_owned_sale(db: Session, sale_id: str, seller_id: str) -> Sale:
    """Venta existente y del vendedor, o 404/403"""
    sale = find_or_404(db, Sale, sale_id, "Venta no encontrada")
    if sale.shopping_mall_seller_user_id != seller_id:
        logger.warning("Vendedor %s sin acceso a la venta %s", seller_id, sale_id)
        raise HTTPException(status_code=403, detail="La venta no pertenece al vendedor")
    return sale


def _search_units(db: Session, sale_id: str, body: SaleUnitSearchRequest) -> dict:
    query = live(db.query(SaleUnit), SaleUnit).filter(SaleUnit.shopping_mall_sale_id == sale_id)
    query = filter_search(query, body.search, SaleUnit.code, SaleUnit.name, SaleUnit.description)

    order_by = sort_clause(SaleUnit, body.sortBy, body.order, UNIT_SORT_FIELDS)
    return paginate(query, body.page, body.limit, order_by)


def _search_unit_options(db: Session, unit_id: str, body: SaleUnitOptionSearchRequest, default_limit: int) -> dict:
    query = (
        live(db.query(SaleUnitOption), SaleUnitOption)
        .filter(SaleUnitOption.shopping_mall_sale_unit_id == unit_id)
    )
    query = filter_eq(query, SaleUnitOption.shopping_mall_sale_option_id, body.saleOptionId)
    if body.filter:
        query = query.join(SaleOption, SaleOption.id == SaleUnitOption.shopping_mall_sale_option_id)
        query = filter_search(query, body.filter, SaleOption.code, SaleOption.name)

    order_by = sort_clause(SaleUnitOption, body.sort, "asc", UNIT_OPTION_SORT_FIELDS)
    return paginate(query, body.page, body.limit, order_by, default_limit=default_limit)


def _search_snapshots(db: Session, sale_id: str, body: SaleSnapshotSearchRequest, default_limit: int) -> dict:
    query = live(db.query(SaleSnapshot), SaleSnapshot).filter(SaleSnapshot.shopping_mall_sale_id == sale_id)

    criteria = body.filter
    if criteria:
        query = filter_search(
            query, criteria.searchText,
            SaleSnapshot.code, SaleSnapshot.name, SaleSnapshot.description,
        )
        query = filter_range(query, SaleSnapshot.created_at, criteria.createdAfter, criteria.createdBefore)
        query = filter_in(query, SaleSnapshot.status, criteria.statuses)
        query = filter_range(query, SaleSnapshot.price, criteria.minPrice, criteria.maxPrice)

    return paginate(query, body.page, body.limit, [SaleSnapshot.created_at.desc()], default_limit=default_limit)


# ============= VENTAS =============
@router.patch("/adminUser/sales", response_model=Page[SaleDto])
def search_sales(
    body: SaleSearchRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    """Listar ventas"""
    query = live(db.query(Sale), Sale)
    query = filter_eq(query, Sale.status, body.status)
    query = filter_eq(query, Sale.shopping_mall_channel_id, body.channel_id)
    query = filter_eq(query, Sale.shopping_mall_seller_user_id, body.seller_user_id)
    query = filter_eq(query, Sale.shopping_mall_section_id, body.section_id)
    query = filter_search(query, body.search, Sale.name, Sale.code)

    order_by = sort_clause(Sale, body.sort, "asc", SALE_SORT_FIELDS)
    return paginate(query, body.page, body.limit, order_by, default_limit=20)

@router.post("/sellerUser/sales", response_model=SaleDto, status_code=status.HTTP_201_CREATED)
def create_sale(
    body: SaleCreateRequest,
    seller: ActorPayload = Depends(seller_user),
    db: Session = Depends(get_db),
):
    """Registrar una venta junto con su primer snapshot"""
    if body.price < 0:
        raise HTTPException(status_code=400, detail="El precio no puede ser negativo")

    find_or_404(db, Channel, body.shopping_mall_channel_id, "Canal no encontrado")
    if body.shopping_mall_section_id:
        find_or_404(db, Section, body.shopping_mall_section_id, "Sección no encontrada")

    sale = Sale(shopping_mall_seller_user_id=seller.id, **body.model_dump())
    db.add(sale)
    db.flush()

    db.add(SaleSnapshot(
        shopping_mall_sale_id=sale.id,
        code=sale.code,
        status=sale.status,
        name=sale.name,
        description=sale.description,
        price=sale.price,
    ))
    db.commit()
    db.refresh(sale)

    logger.info("Venta %s registrada por el vendedor %s", sale.id, seller.id)
    return sale


# ============= UNIDADES DE VENTA =============
@router.patch("/adminUser/sales/{saleId}/saleUnits", response_model=Page[SaleUnitDto])
def search_sale_units_as_admin(
    saleId: str,
    body: SaleUnitSearchRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    find_or_404(db, Sale, saleId, "Venta no encontrada")
    return _search_units(db, saleId, body)

@router.patch("/sellerUser/sales/{saleId}/saleUnits", response_model=Page[SaleUnitDto])
def search_sale_units_as_seller(
    saleId: str,
    body: SaleUnitSearchRequest,
    seller: ActorPayload = Depends(seller_user),
    db: Session = Depends(get_db),
):
    get_owned_sale(db, saleId, seller.id)
    return _search_units(db, saleId, body)


# ============= OPCIONES DE UNIDAD =============
@router.patch(
    "/adminUser/sales/{saleId}/saleUnits/{saleUnitId}/saleUnitOptions",
    response_model=Page[SaleUnitOptionDto],
)
def search_sale_unit_options_as_admin(
    saleId: str,
    saleUnitId: str,
    body: SaleUnitOptionSearchRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    find_or_404(db, Sale, saleId, "Venta no encontrada")
    return _search_unit_options(db, saleUnitId, body, 20)

@router.patch(
    "/sellerUser/sales/{saleId}/saleUnits/{saleUnitId}/saleUnitOptions",
    response_model=Page[SaleUnitOptionDto],
)
def search_sale_unit_options_as_seller(
    saleId: str,
    saleUnitId: str,
    body: SaleUnitOptionSearchRequest,
    seller: ActorPayload = Depends(seller_user),
    db: Session = Depends(get_db),
):
    get_owned_sale(db, saleId, seller.id)

    unit = find_or_404(db, SaleUnit, saleUnitId, "Unidad de venta no encontrada")
    if unit.shopping_mall_sale_id != saleId:
        raise HTTPException(status_code=404, detail="La unidad no pertenece a la venta")

    return _search_unit_options(db, saleUnitId, body, 10)


# ============= SNAPSHOTS =============
@router.patch("/adminUser/sales/{saleId}/snapshots", response_model=Page[SaleSnapshotDto])
def search_sale_snapshots_as_admin(
    saleId: str,
    body: SaleSnapshotSearchRequest,
    admin: ActorPayload = Depends(admin_user),
    db: Session = Depends(get_db),
):
    """Historial de snapshots de una venta"""
    find_or_404(db, Sale, saleId, "Venta no encontrada")
    return _search_snapshots(db, saleId, body, 20)

@router.patch("/sellerUser/sales/{saleId}/snapshots", response_model=Page[SaleSnapshotDto])
def search_sale_snapshots_as_seller(
    saleId: str,
    body: SaleSnapshotSearchRequest,
    seller: ActorPayload = Depends(seller_user),
    db: Session = Depends(get_db),
):
    get_owned_sale(db, saleId, seller.id)
    return _search_snapshots(db, saleId, body, 10)

# ==============================================================================
# CONFTEST - Pytest Fixtures and Configuration
# ==============================================================================
# SQLite en memoria, cliente HTTP y actores autenticados
# ==============================================================================

import os
from datetime import datetime, timedelta
from types import SimpleNamespace
from uuid import uuid4

# Entorno de pruebas antes de importar la app
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DB_AUTO_CREATE"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-testing-only"

import pytest
from fastapi.testclient import TestClient

from app.config.database import SessionLocal, drop_db, init_db
from app.entities.catalog import Channel, Section, Sale, SaleSnapshot
from app.entities.orders import Order, OrderItem
from app.main import app


# ==============================================================================
# DATABASE / CLIENT
# ==============================================================================

@pytest.fixture(autouse=True)
def database():
    """Tablas nuevas para cada prueba."""
    init_db()
    yield
    drop_db()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def add(db):
    """Insertar registros y devolverlos refrescados."""
    def _add(*records):
        db.add_all(records)
        db.commit()
        for record in records:
            db.refresh(record)
        return records[0] if len(records) == 1 else records
    return _add


# ==============================================================================
# ACTORS
# ==============================================================================

def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def _actor(response) -> SimpleNamespace:
    assert response.status_code == 201, response.text
    body = response.json()
    return SimpleNamespace(
        id=body["id"],
        body=body,
        token=body["token"],
        headers=bearer(body["token"]["access"]),
    )


def join_member(client: TestClient, **overrides) -> SimpleNamespace:
    payload = {
        "email": f"member_{uuid4().hex[:8]}@example.com",
        "password": "MemberPass123!",
        "nickname": "member",
        "full_name": "Member User",
        "phone_number": "010-0000-0000",
    }
    payload.update(overrides)
    return _actor(client.post("/auth/memberUser/join", json=payload))


def join_seller(client: TestClient, **overrides) -> SimpleNamespace:
    payload = {
        "email": f"seller_{uuid4().hex[:8]}@example.com",
        "password": "SellerPass123!",
        "nickname": "seller",
        "full_name": "Seller User",
        "business_registration_number": uuid4().hex[:10],
    }
    payload.update(overrides)
    return _actor(client.post("/auth/sellerUser/join", json=payload))


@pytest.fixture
def admin(client) -> SimpleNamespace:
    return _actor(client.post("/auth/adminUser/join", json={
        "email": f"admin_{uuid4().hex[:8]}@example.com",
        "password": "AdminPass123!",
        "nickname": "admin",
        "full_name": "Admin User",
    }))


@pytest.fixture
def seller(client) -> SimpleNamespace:
    return join_seller(client)


@pytest.fixture
def member(client) -> SimpleNamespace:
    return join_member(client)


@pytest.fixture
def other_member(client) -> SimpleNamespace:
    return join_member(client)


@pytest.fixture
def guest(client) -> SimpleNamespace:
    return _actor(client.post("/auth/guestUser/join", json={
        "ip_address": "203.0.113.10",
        "access_url": "https://mall.example.com/",
        "user_agent": "pytest",
    }))


# ==============================================================================
# CATALOG / ORDERS
# ==============================================================================

@pytest.fixture
def catalog(add, seller) -> SimpleNamespace:
    """Canal, sección, venta del vendedor y su snapshot."""
    channel = add(Channel(code="main", name="Main channel"))
    section = add(Section(code="fashion", name="Fashion"))
    sale = add(Sale(
        shopping_mall_channel_id=channel.id,
        shopping_mall_section_id=section.id,
        shopping_mall_seller_user_id=seller.id,
        code="SALE-001",
        name="Linen shirt",
        price=39.9,
    ))
    snapshot = add(SaleSnapshot(
        shopping_mall_sale_id=sale.id,
        code=sale.code,
        status="active",
        name=sale.name,
        price=39.9,
    ))
    return SimpleNamespace(
        channel_id=channel.id,
        section_id=section.id,
        sale_id=sale.id,
        snapshot_id=snapshot.id,
    )


@pytest.fixture
def make_order(add, catalog):
    """Pedido con un ítem de la venta del vendedor."""
    def _make_order(member_id=None, guest_id=None, order_status="pending",
                    payment_status="pending", created_at=None):
        order = add(Order(
            shopping_mall_channel_id=catalog.channel_id,
            shopping_mall_memberuser_id=member_id,
            shopping_mall_guestuser_id=guest_id,
            order_code=f"ORD-{uuid4().hex[:6]}",
            order_status=order_status,
            payment_status=payment_status,
            total_price=79.8,
            created_at=created_at or datetime(2024, 5, 1, 10, 0, 0),
        ))
        item = add(OrderItem(
            shopping_mall_order_id=order.id,
            shopping_mall_sale_snapshot_id=catalog.snapshot_id,
            quantity=2,
            price=39.9,
        ))
        return SimpleNamespace(id=order.id, item_id=item.id)
    return _make_order


def days_ago(days: int) -> datetime:
    return datetime(2024, 6, 1, 12, 0, 0) - timedelta(days=days)

# ==============================================================================
# SALES / INVENTORY ENDPOINT TESTS
# ==============================================================================

from datetime import datetime

import pytest

from app.entities.catalog import (
    DynamicPricing,
    Inventory,
    InventoryAudit,
    Sale,
    SaleOption,
    SaleOptionGroup,
    SaleSnapshot,
    SaleUnit,
    SaleUnitOption,
)
from conftest import days_ago, join_seller


@pytest.fixture
def foreign_sale(client, add, catalog):
    """Venta de otro vendedor."""
    other = join_seller(client)
    return add(Sale(
        shopping_mall_channel_id=catalog.channel_id,
        shopping_mall_seller_user_id=other.id,
        code="SALE-OTHER",
        name="Wool coat",
        status="paused",
        price=120,
    ))


class TestSales:

    def test_admin_search(self, client, admin, catalog, foreign_sale):
        response = client.patch("/shoppingMall/adminUser/sales", json={}, headers=admin.headers)
        body = response.json()
        assert body["pagination"]["limit"] == 20
        assert body["pagination"]["records"] == 2

        by_text = client.patch(
            "/shoppingMall/adminUser/sales", json={"search": "coat"}, headers=admin.headers
        ).json()
        assert [s["code"] for s in by_text["data"]] == ["SALE-OTHER"]

        by_status = client.patch(
            "/shoppingMall/adminUser/sales", json={"status": "active"}, headers=admin.headers
        ).json()
        assert [s["id"] for s in by_status["data"]] == [catalog.sale_id]

    def test_seller_registers_sale_with_snapshot(self, client, admin, seller, catalog):
        response = client.post("/shoppingMall/sellerUser/sales", json={
            "shopping_mall_channel_id": catalog.channel_id,
            "code": "SALE-NEW",
            "name": "Canvas bag",
            "price": 15.5,
        }, headers=seller.headers)
        assert response.status_code == 201
        sale = response.json()
        assert sale["shopping_mall_seller_user_id"] == seller.id

        snapshots = client.patch(
            f"/shoppingMall/adminUser/sales/{sale['id']}/snapshots", json={}, headers=admin.headers
        ).json()
        assert snapshots["pagination"]["records"] == 1
        assert snapshots["data"][0]["price"] == 15.5

    def test_negative_price(self, client, seller, catalog):
        response = client.post("/shoppingMall/sellerUser/sales", json={
            "shopping_mall_channel_id": catalog.channel_id,
            "code": "BAD",
            "name": "Bad",
            "price": -1,
        }, headers=seller.headers)
        assert response.status_code == 400


class TestSaleUnits:

    @pytest.fixture
    def units(self, add, catalog):
        return add(
            SaleUnit(shopping_mall_sale_id=catalog.sale_id, code="U-B", name="Blue", description="navy blue"),
            SaleUnit(shopping_mall_sale_id=catalog.sale_id, code="U-A", name="White"),
        )

    def test_seller_search_and_sort(self, client, seller, catalog, units):
        response = client.patch(
            f"/shoppingMall/sellerUser/sales/{catalog.sale_id}/saleUnits",
            json={"sortBy": "code", "order": "asc"},
            headers=seller.headers,
        )
        assert [u["code"] for u in response.json()["data"]] == ["U-A", "U-B"]

        searched = client.patch(
            f"/shoppingMall/sellerUser/sales/{catalog.sale_id}/saleUnits",
            json={"search": "navy"},
            headers=seller.headers,
        )
        assert [u["code"] for u in searched.json()["data"]] == ["U-B"]

    def test_seller_cannot_read_foreign_sale(self, client, seller, foreign_sale):
        response = client.patch(
            f"/shoppingMall/sellerUser/sales/{foreign_sale.id}/saleUnits", json={}, headers=seller.headers
        )
        assert response.status_code == 403

    def test_admin_unknown_sale(self, client, admin):
        response = client.patch("/shoppingMall/adminUser/sales/missing/saleUnits", json={}, headers=admin.headers)
        assert response.status_code == 404

    def test_unit_options(self, client, admin, seller, add, catalog, units):
        group = add(SaleOptionGroup(code="size", name="Size"))
        small, large = add(
            SaleOption(shopping_mall_sale_option_group_id=group.id, code="S", name="Small"),
            SaleOption(shopping_mall_sale_option_group_id=group.id, code="L", name="Large"),
        )
        unit = units[0]
        add(
            SaleUnitOption(shopping_mall_sale_unit_id=unit.id, shopping_mall_sale_option_id=small.id,
                           additional_price=0, stock_quantity=5),
            SaleUnitOption(shopping_mall_sale_unit_id=unit.id, shopping_mall_sale_option_id=large.id,
                           additional_price=2, stock_quantity=1),
        )
        url = f"/shoppingMall/sellerUser/sales/{catalog.sale_id}/saleUnits/{unit.id}/saleUnitOptions"

        by_stock = client.patch(url, json={"sort": "stock_quantity"}, headers=seller.headers).json()
        assert [o["stock_quantity"] for o in by_stock["data"]] == [1, 5]

        by_name = client.patch(url, json={"filter": "Large"}, headers=seller.headers).json()
        assert [o["shopping_mall_sale_option_id"] for o in by_name["data"]] == [large.id]

        admin_url = f"/shoppingMall/adminUser/sales/{catalog.sale_id}/saleUnits/{unit.id}/saleUnitOptions"
        by_option = client.patch(admin_url, json={"saleOptionId": small.id}, headers=admin.headers).json()
        assert by_option["pagination"]["records"] == 1

    def test_unit_options_default_limit(self, client, admin, seller, catalog, units):
        path = f"/sales/{catalog.sale_id}/saleUnits/{units[0].id}/saleUnitOptions"

        as_admin = client.patch(f"/shoppingMall/adminUser{path}", json={}, headers=admin.headers).json()
        assert as_admin["pagination"]["limit"] == 20

        as_seller = client.patch(f"/shoppingMall/sellerUser{path}", json={}, headers=seller.headers).json()
        assert as_seller["pagination"]["limit"] == 10

    def test_unit_of_other_sale(self, client, seller, add, catalog, foreign_sale):
        unit = add(SaleUnit(shopping_mall_sale_id=foreign_sale.id, code="X", name="X"))
        response = client.patch(
            f"/shoppingMall/sellerUser/sales/{catalog.sale_id}/saleUnits/{unit.id}/saleUnitOptions",
            json={},
            headers=seller.headers,
        )
        assert response.status_code == 404


class TestSnapshots:

    def test_filter_object(self, client, seller, add, catalog):
        add(
            SaleSnapshot(shopping_mall_sale_id=catalog.sale_id, code="SALE-001", status="paused",
                         name="Linen shirt v2", price=49.9, created_at=datetime(2024, 5, 20)),
        )
        url = f"/shoppingMall/sellerUser/sales/{catalog.sale_id}/snapshots"

        everything = client.patch(url, json={}, headers=seller.headers).json()
        assert everything["pagination"]["records"] == 2

        filtered = client.patch(url, json={"filter": {
            "searchText": "v2",
            "statuses": ["paused"],
            "minPrice": 45,
            "createdAfter": "2024-05-01T00:00:00Z",
        }}, headers=seller.headers).json()
        assert [s["name"] for s in filtered["data"]] == ["Linen shirt v2"]

    def test_default_limit(self, client, admin, seller, catalog):
        path = f"/sales/{catalog.sale_id}/snapshots"

        as_admin = client.patch(f"/shoppingMall/adminUser{path}", json={}, headers=admin.headers).json()
        assert as_admin["pagination"] == {"current": 1, "limit": 20, "records": 1, "pages": 1}

        as_seller = client.patch(f"/shoppingMall/sellerUser{path}", json={}, headers=seller.headers).json()
        assert as_seller["pagination"]["limit"] == 10


class TestInventory:

    @pytest.fixture
    def stock(self, add, catalog, foreign_sale):
        return add(
            Inventory(shopping_mall_sale_id=catalog.sale_id, option_combination_code="S-WHITE",
                      stock_quantity=3, created_at=days_ago(2)),
            Inventory(shopping_mall_sale_id=catalog.sale_id, option_combination_code="L-WHITE",
                      stock_quantity=30, created_at=days_ago(1)),
            Inventory(shopping_mall_sale_id=foreign_sale.id, option_combination_code="M-BLACK",
                      stock_quantity=7),
        )

    def test_admin_ranges_and_order(self, client, admin, stock):
        response = client.patch(
            "/shoppingMall/adminUser/inventory",
            json={"minQuantity": 5, "orderBy": "stock_quantity"},
            headers=admin.headers,
        )
        body = response.json()
        assert body["pagination"]["limit"] == 20
        assert [i["stock_quantity"] for i in body["data"]] == [30, 7]

    def test_seller_without_sale_gets_empty_page(self, client, seller, stock):
        response = client.patch("/shoppingMall/sellerUser/inventory", json={}, headers=seller.headers)
        assert response.json() == {
            "pagination": {"current": 1, "limit": 20, "records": 0, "pages": 0},
            "data": [],
        }

    def test_seller_own_sale(self, client, seller, catalog, stock):
        response = client.patch(
            "/shoppingMall/sellerUser/inventory",
            json={"saleId": catalog.sale_id, "optionCombinationCode": "WHITE"},
            headers=seller.headers,
        )
        assert [i["option_combination_code"] for i in response.json()["data"]] == ["L-WHITE", "S-WHITE"]

    def test_seller_foreign_sale(self, client, seller, foreign_sale, stock):
        response = client.patch(
            "/shoppingMall/sellerUser/inventory", json={"saleId": foreign_sale.id}, headers=seller.headers
        )
        assert response.status_code == 403

    def test_member_audits(self, client, member, add, stock):
        add(
            InventoryAudit(inventory_id=stock[0].id, change_type="decrease", quantity_changed=-1,
                           changed_at=days_ago(3)),
            InventoryAudit(inventory_id=stock[0].id, change_type="increase", quantity_changed=10,
                           changed_at=days_ago(1)),
        )
        response = client.patch(
            "/shoppingMall/memberUser/inventoryAudits",
            json={"inventory_id": stock[0].id},
            headers=member.headers,
        )
        assert [a["change_type"] for a in response.json()["data"]] == ["increase", "decrease"]


class TestDynamicPricing:

    def test_search(self, client, admin, add):
        add(
            DynamicPricing(product_id="p1", pricing_rule_id="r1", adjusted_price=10,
                           effective_from=datetime(2024, 5, 1)),
            DynamicPricing(product_id="p1", pricing_rule_id="r1", adjusted_price=8,
                           effective_from=datetime(2024, 6, 1)),
            DynamicPricing(product_id="p2", pricing_rule_id="r2", adjusted_price=5,
                           effective_from=datetime(2024, 6, 1), deleted_at=datetime(2024, 6, 2)),
        )
        response = client.patch(
            "/shoppingMall/adminUser/dynamicPricings", json={"pricing_rule_id": "r1"}, headers=admin.headers
        )
        assert [p["adjusted_price"] for p in response.json()["data"]] == [8, 10]

        ascending = client.patch(
            "/shoppingMall/adminUser/dynamicPricings",
            json={"orderBy": "adjusted_price", "orderDirection": "asc"},
            headers=admin.headers,
        )
        assert [p["adjusted_price"] for p in ascending.json()["data"]] == [8, 10]

# ==============================================================================
# ORDER ENDPOINT TESTS
# ==============================================================================
# pagos, entregas, ítems, historial y bitácora
# ==============================================================================

import pytest

from app.entities.catalog import Sale, SaleSnapshot
from app.entities.orders import Delivery, OrderItem, OrderStatusHistory, Payment
from conftest import days_ago, join_seller


@pytest.fixture
def order(make_order, member):
    return make_order(member_id=member.id)


@pytest.fixture
def payments(add, order):
    return add(
        Payment(shopping_mall_order_id=order.id, payment_method="card", payment_status="paid",
                payment_amount=79.8, created_at=days_ago(2)),
        Payment(shopping_mall_order_id=order.id, payment_method="transfer", payment_status="pending",
                payment_amount=10, created_at=days_ago(1)),
    )


class TestPaymentSearch:

    def test_admin(self, client, admin, order, payments):
        response = client.patch(f"/shoppingMall/adminUser/orders/{order.id}/payments", json={}, headers=admin.headers)
        body = response.json()
        assert body["pagination"]["limit"] == 100
        assert [p["payment_method"] for p in body["data"]] == ["transfer", "card"]

    def test_member_filters(self, client, member, order, payments):
        response = client.patch(
            f"/shoppingMall/memberUser/orders/{order.id}/payments",
            json={"payment_status": "paid"},
            headers=member.headers,
        )
        assert [p["payment_amount"] for p in response.json()["data"]] == [79.8]

    def test_member_of_other_order(self, client, other_member, order, payments):
        response = client.patch(
            f"/shoppingMall/memberUser/orders/{order.id}/payments", json={}, headers=other_member.headers
        )
        assert response.status_code == 403

    def test_seller_through_order_items(self, client, seller, order, payments):
        response = client.patch(
            f"/shoppingMall/sellerUser/orders/{order.id}/payments", json={}, headers=seller.headers
        )
        assert response.json()["pagination"]["records"] == 2

    def test_seller_without_items(self, client, order, payments):
        stranger = join_seller(client)
        response = client.patch(
            f"/shoppingMall/sellerUser/orders/{order.id}/payments", json={}, headers=stranger.headers
        )
        assert response.status_code == 403

    def test_guest_order(self, client, add, guest, make_order):
        guest_order = make_order(guest_id=guest.id)
        add(Payment(shopping_mall_order_id=guest_order.id, payment_method="card", payment_amount=5))

        response = client.patch(
            f"/shoppingMall/guestUser/orders/{guest_order.id}/payments", json={}, headers=guest.headers
        )
        assert response.json()["pagination"]["records"] == 1

    def test_guest_cannot_read_member_order(self, client, guest, order):
        response = client.patch(
            f"/shoppingMall/guestUser/orders/{order.id}/payments", json={}, headers=guest.headers
        )
        assert response.status_code == 403

    def test_unknown_order(self, client, admin):
        response = client.patch("/shoppingMall/adminUser/orders/missing/payments", json={}, headers=admin.headers)
        assert response.status_code == 404


class TestPaymentWrites:

    def test_seller_creates_payment(self, client, seller, member, order):
        response = client.post(f"/shoppingMall/sellerUser/orders/{order.id}/payments", json={
            "payment_method": "card",
            "payment_amount": 79.8,
            "transaction_id": "TX-1",
        }, headers=seller.headers)
        assert response.status_code == 201
        assert response.json()["payment_status"] == "pending"

        logs = client.patch("/shoppingMall/memberUser/orderAuditLogs", json={}, headers=member.headers).json()
        assert [log["action"] for log in logs["data"]] == ["payment_created"]

    def test_amount_must_be_positive(self, client, seller, order):
        response = client.post(f"/shoppingMall/sellerUser/orders/{order.id}/payments", json={
            "payment_method": "card",
            "payment_amount": 0,
        }, headers=seller.headers)
        assert response.status_code == 400

    def test_update_as_each_actor(self, client, admin, seller, member, order, payments):
        url = f"/shoppingMall/{{}}/orders/{order.id}/payments/{payments[1].id}"

        as_member = client.put(url.format("memberUser"), json={"payment_status": "paid"}, headers=member.headers)
        assert as_member.json()["payment_status"] == "paid"

        as_seller = client.put(url.format("sellerUser"), json={"transaction_id": "TX-2"}, headers=seller.headers)
        assert as_seller.json()["transaction_id"] == "TX-2"
        assert as_seller.json()["payment_status"] == "paid"

        as_admin = client.put(
            url.format("adminUser"),
            json={"cancelled_at": "2024-06-01T00:00:00Z", "payment_status": "cancelled"},
            headers=admin.headers,
        )
        assert as_admin.json()["cancelled_at"] == "2024-06-01T00:00:00.000Z"

        negative = client.put(url.format("adminUser"), json={"payment_amount": -5}, headers=admin.headers)
        assert negative.status_code == 400

    def test_update_payment_of_other_order(self, client, admin, make_order, payments):
        other = make_order()
        response = client.put(
            f"/shoppingMall/adminUser/orders/{other.id}/payments/{payments[0].id}",
            json={"payment_status": "paid"},
            headers=admin.headers,
        )
        assert response.status_code == 404


class TestDeliveries:

    @pytest.fixture
    def deliveries(self, add, order):
        return add(
            Delivery(shopping_mall_order_id=order.id, delivery_status="shipped", delivery_stage="transit"),
            Delivery(shopping_mall_order_id=order.id, delivery_status="delivered", delivery_stage="done"),
        )

    def test_search_and_sort(self, client, seller, order, deliveries):
        url = f"/shoppingMall/sellerUser/orders/{order.id}/deliveries"

        sorted_ = client.patch(url, json={"orderBy": "delivery_status asc"}, headers=seller.headers).json()
        assert [d["delivery_status"] for d in sorted_["data"]] == ["delivered", "shipped"]

        staged = client.patch(url, json={"delivery_stage": "transit"}, headers=seller.headers).json()
        assert staged["pagination"]["records"] == 1

    def test_update(self, client, seller, member, order, deliveries):
        response = client.put(
            f"/shoppingMall/sellerUser/orders/{order.id}/deliveries/{deliveries[0].id}",
            json={"delivery_status": "delivered", "end_time": "2024-06-02T08:00:00+09:00"},
            headers=seller.headers,
        )
        assert response.status_code == 200
        assert response.json()["end_time"] == "2024-06-01T23:00:00.000Z"
        assert response.json()["delivery_stage"] == "transit"

        logs = client.patch(
            "/shoppingMall/memberUser/orderAuditLogs", json={"action": "delivery"}, headers=member.headers
        ).json()
        assert logs["pagination"]["records"] == 1

    def test_foreign_seller(self, client, order, deliveries):
        stranger = join_seller(client)
        response = client.patch(
            f"/shoppingMall/sellerUser/orders/{order.id}/deliveries", json={}, headers=stranger.headers
        )
        assert response.status_code == 403


class TestOrderItems:

    def test_only_items_of_the_seller(self, client, add, seller, catalog, order):
        stranger = join_seller(client)
        foreign_sale = add(Sale(shopping_mall_channel_id=catalog.channel_id,
                                shopping_mall_seller_user_id=stranger.id, code="X", name="X", price=1))
        foreign_snapshot = add(SaleSnapshot(shopping_mall_sale_id=foreign_sale.id, code="X", status="active",
                                            name="X", price=1))
        foreign_item = add(OrderItem(shopping_mall_order_id=order.id,
                                     shopping_mall_sale_snapshot_id=foreign_snapshot.id, quantity=1, price=1))

        response = client.patch(f"/shoppingMall/sellerUser/orders/{order.id}/items", json={}, headers=seller.headers)
        body = response.json()
        assert body["pagination"]["limit"] == 20
        assert [i["id"] for i in body["data"]] == [order.item_id]

        forbidden = client.put(
            f"/shoppingMall/sellerUser/orders/{order.id}/items/{foreign_item.id}",
            json={"quantity": 5},
            headers=seller.headers,
        )
        assert forbidden.status_code == 403

    def test_update(self, client, seller, order):
        url = f"/shoppingMall/sellerUser/orders/{order.id}/items/{order.item_id}"

        response = client.put(url, json={"order_item_status": "shipped", "quantity": 0}, headers=seller.headers)
        assert response.status_code == 200
        assert response.json()["quantity"] == 0
        assert response.json()["order_item_status"] == "shipped"

        negative = client.put(url, json={"price": -1}, headers=seller.headers)
        assert negative.status_code == 400

    def test_unknown_item(self, client, seller, order):
        response = client.put(
            f"/shoppingMall/sellerUser/orders/{order.id}/items/missing", json={}, headers=seller.headers
        )
        assert response.status_code == 404


class TestHistoryAndAudit:

    def test_status_histories(self, client, admin, add, order):
        add(
            OrderStatusHistory(shopping_mall_order_id=order.id, old_status="pending", new_status="paid",
                               changed_at=days_ago(3)),
            OrderStatusHistory(shopping_mall_order_id=order.id, old_status="paid", new_status="shipped",
                               changed_at=days_ago(1)),
        )
        response = client.patch(
            "/shoppingMall/adminUser/orderStatusHistories",
            json={"shopping_mall_order_id": order.id, "changed_at_from": "2024-05-30T00:00:00Z"},
            headers=admin.headers,
        )
        assert [h["new_status"] for h in response.json()["data"]] == ["shipped"]

    def test_audit_logs_are_scoped_to_member(self, client, seller, member, other_member, make_order):
        mine = make_order(member_id=member.id)
        theirs = make_order(member_id=other_member.id)
        for order_id in (mine.id, theirs.id):
            client.post(f"/shoppingMall/sellerUser/orders/{order_id}/payments", json={
                "payment_method": "card",
                "payment_amount": 1,
            }, headers=seller.headers)

        response = client.patch("/shoppingMall/memberUser/orderAuditLogs", json={}, headers=member.headers)
        body = response.json()
        assert body["pagination"]["records"] == 1
        assert body["data"][0]["shopping_mall_order_id"] == mine.id
        assert body["data"][0]["actor_user_id"] == seller.id

# ==============================================================================
# COUPON ENDPOINT TESTS
# ==============================================================================

from datetime import datetime

import pytest

from app.entities.coupons import Coupon, CouponCondition, CouponTicket, CouponLog
from app.entities.users import MemberUser
from conftest import days_ago


def make_coupon(code, name="Spring sale", status="active", created_at=None, **extra):
    return Coupon(
        coupon_code=code,
        coupon_name=name,
        discount_type="amount",
        discount_value=5,
        start_date=datetime(2024, 5, 1),
        end_date=datetime(2024, 6, 30),
        status=status,
        created_at=created_at or datetime(2024, 5, 1),
        **extra,
    )


@pytest.fixture
def coupons(add):
    return add(
        make_coupon("SPRING10", created_at=days_ago(3)),
        make_coupon("SPRING20", status="paused", created_at=days_ago(2)),
        make_coupon("SUMMER5", name="Summer sale", created_at=days_ago(1)),
        make_coupon("OLD1", deleted_at=datetime(2024, 4, 1)),
    )


class TestCouponSearch:
    """PATCH .../coupons"""

    def test_admin_lists_live_coupons_newest_first(self, client, admin, coupons):
        response = client.patch("/shoppingMall/adminUser/coupons", json={}, headers=admin.headers)

        assert response.status_code == 200
        body = response.json()
        assert body["pagination"] == {"current": 1, "limit": 10, "records": 3, "pages": 1}
        assert [c["coupon_code"] for c in body["data"]] == ["SUMMER5", "SPRING20", "SPRING10"]
        assert body["data"][0]["created_at"].endswith("Z")

    def test_filters(self, client, admin, coupons):
        response = client.patch(
            "/shoppingMall/adminUser/coupons",
            json={"coupon_code": "SPRING", "status": "active"},
            headers=admin.headers,
        )
        assert [c["coupon_code"] for c in response.json()["data"]] == ["SPRING10"]

    def test_like_wildcards_match_literally(self, client, admin, coupons):
        for wildcard in ("%", "_"):
            response = client.patch(
                "/shoppingMall/adminUser/coupons", json={"coupon_code": wildcard}, headers=admin.headers
            )
            assert response.status_code == 200
            assert response.json()["pagination"]["records"] == 0

    def test_underscore_in_code(self, client, add, admin, coupons):
        add(make_coupon("WELCOME_5"))

        response = client.patch(
            "/shoppingMall/adminUser/coupons", json={"coupon_code": "_"}, headers=admin.headers
        )
        assert [c["coupon_code"] for c in response.json()["data"]] == ["WELCOME_5"]

    def test_signed_order_by(self, client, seller, coupons):
        response = client.patch(
            "/shoppingMall/sellerUser/coupons",
            json={"order_by": "+coupon_code"},
            headers=seller.headers,
        )
        assert [c["coupon_code"] for c in response.json()["data"]] == ["SPRING10", "SPRING20", "SUMMER5"]

    def test_pages(self, client, admin, coupons):
        response = client.patch(
            "/shoppingMall/adminUser/coupons",
            json={"page": 2, "limit": 2},
            headers=admin.headers,
        )
        body = response.json()
        assert body["pagination"] == {"current": 2, "limit": 2, "records": 3, "pages": 2}
        assert len(body["data"]) == 1

    def test_member_must_be_active(self, client, db, member, coupons):
        db.query(MemberUser).filter(MemberUser.id == member.id).update({"status": "suspended"})
        db.commit()

        response = client.patch("/shoppingMall/memberUser/coupons", json={}, headers=member.headers)
        assert response.status_code == 403


class TestCouponCrud:
    """Alta, detalle y baja lógica (administrador)."""

    payload = {
        "coupon_code": "WELCOME",
        "coupon_name": "Welcome",
        "discount_type": "percentage",
        "discount_value": 10,
        "start_date": "2024-05-01T00:00:00Z",
        "end_date": "2024-12-31T00:00:00Z",
    }

    def test_create_get_erase(self, client, admin):
        created = client.post("/shoppingMall/adminUser/coupons", json=self.payload, headers=admin.headers)
        assert created.status_code == 201
        coupon_id = created.json()["id"]
        assert created.json()["start_date"] == "2024-05-01T00:00:00.000Z"

        fetched = client.get(f"/shoppingMall/adminUser/coupons/{coupon_id}", headers=admin.headers)
        assert fetched.status_code == 200

        erased = client.delete(f"/shoppingMall/adminUser/coupons/{coupon_id}", headers=admin.headers)
        assert erased.status_code == 204

        missing = client.get(f"/shoppingMall/adminUser/coupons/{coupon_id}", headers=admin.headers)
        assert missing.status_code == 404

    def test_duplicate_code(self, client, admin):
        client.post("/shoppingMall/adminUser/coupons", json=self.payload, headers=admin.headers)
        response = client.post("/shoppingMall/adminUser/coupons", json=self.payload, headers=admin.headers)
        assert response.status_code == 409

    def test_percentage_over_100(self, client, admin):
        payload = {**self.payload, "discount_value": 150}
        response = client.post("/shoppingMall/adminUser/coupons", json=payload, headers=admin.headers)
        assert response.status_code == 400

    def test_end_before_start(self, client, admin):
        payload = {**self.payload, "end_date": "2024-04-01T00:00:00Z"}
        response = client.post("/shoppingMall/adminUser/coupons", json=payload, headers=admin.headers)
        assert response.status_code == 400


class TestCouponConditions:

    def test_conditions_of_coupon(self, client, admin, add, coupons):
        coupon = coupons[0]
        add(
            CouponCondition(shopping_mall_coupon_id=coupon.id, condition_type="category", category_id="c1"),
            CouponCondition(shopping_mall_coupon_id=coupon.id, condition_type="product", product_id="p1"),
            CouponCondition(shopping_mall_coupon_id=coupons[1].id, condition_type="category"),
        )

        response = client.patch(
            f"/shoppingMall/adminUser/coupons/{coupon.id}/conditions",
            json={"condition_type": "category"},
            headers=admin.headers,
        )
        body = response.json()
        assert body["pagination"]["limit"] == 20
        assert body["pagination"]["records"] == 1
        assert body["data"][0]["category_id"] == "c1"

    def test_unknown_coupon(self, client, admin):
        response = client.patch(
            "/shoppingMall/adminUser/coupons/missing/conditions", json={}, headers=admin.headers
        )
        assert response.status_code == 404


@pytest.fixture
def tickets(add, coupons, member, other_member):
    coupon = coupons[0]

    def ticket(code, memberuser_id, usage_status="unused"):
        return CouponTicket(
            shopping_mall_coupon_id=coupon.id,
            memberuser_id=memberuser_id,
            ticket_code=code,
            usage_status=usage_status,
            valid_from=datetime(2024, 5, 1),
            valid_until=datetime(2024, 6, 30),
        )

    return add(
        ticket("T-1", member.id),
        ticket("T-2", member.id, usage_status="used"),
        ticket("T-3", other_member.id),
    )


class TestCouponTickets:

    def test_only_own_tickets(self, client, member, tickets):
        response = client.patch("/shoppingMall/memberUser/couponTickets", json={}, headers=member.headers)
        body = response.json()
        assert body["pagination"]["records"] == 2
        assert {t["ticket_code"] for t in body["data"]} == {"T-1", "T-2"}

    def test_without_count(self, client, member, tickets):
        response = client.patch(
            "/shoppingMall/memberUser/couponTickets",
            json={"with_count": False, "usage_status": "used"},
            headers=member.headers,
        )
        assert response.json()["pagination"] == {"current": 1, "limit": 10, "records": 1, "pages": 0}

    def test_update_own_ticket(self, client, member, tickets):
        response = client.put(
            f"/shoppingMall/memberUser/couponTickets/{tickets[0].id}",
            json={"usage_status": "used", "used_at": "2024-05-10T09:30:00Z"},
            headers=member.headers,
        )
        assert response.status_code == 200
        assert response.json()["usage_status"] == "used"
        assert response.json()["used_at"] == "2024-05-10T09:30:00.000Z"

    def test_update_foreign_ticket(self, client, member, tickets):
        response = client.put(
            f"/shoppingMall/memberUser/couponTickets/{tickets[2].id}",
            json={"usage_status": "used"},
            headers=member.headers,
        )
        assert response.status_code == 403

    def test_update_missing_ticket(self, client, member):
        response = client.put(
            "/shoppingMall/memberUser/couponTickets/missing", json={}, headers=member.headers
        )
        assert response.status_code == 404


class TestCouponLogs:

    def test_logs_of_own_tickets(self, client, add, member, tickets):
        add(
            CouponLog(shopping_mall_coupon_ticket_id=tickets[0].id, log_type="issued", logged_at=days_ago(5)),
            CouponLog(shopping_mall_coupon_ticket_id=tickets[1].id, log_type="used", logged_at=days_ago(1)),
            CouponLog(shopping_mall_coupon_ticket_id=tickets[2].id, log_type="used", logged_at=days_ago(2)),
        )

        response = client.patch("/shoppingMall/memberUser/couponLogs", json={}, headers=member.headers)
        body = response.json()
        assert body["pagination"]["records"] == 2
        assert [log["log_type"] for log in body["data"]] == ["used", "issued"]

    def test_empty_result_is_empty_page(self, client, member):
        response = client.patch("/shoppingMall/memberUser/couponLogs", json={}, headers=member.headers)
        assert response.status_code == 200
        assert response.json() == {
            "pagination": {"current": 1, "limit": 10, "records": 0, "pages": 0},
            "data": [],
        }

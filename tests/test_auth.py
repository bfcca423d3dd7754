# ==============================================================================
# AUTH ENDPOINT TESTS
# ==============================================================================
# join / login / refresh para cada tipo de actor
# ==============================================================================

from conftest import bearer, join_member, join_seller


class TestAdminAuth:
    """Administradores."""

    def test_join_returns_token_without_password(self, admin):
        assert admin.body["status"] == "active"
        assert "password_hash" not in admin.body
        assert "password" not in admin.body
        assert admin.token["access"]
        assert admin.token["refresh"]
        assert admin.token["expired_at"].endswith("Z")
        assert admin.body["created_at"].endswith("Z")

    def test_duplicate_email(self, client, admin):
        response = client.post("/auth/adminUser/join", json={
            "email": admin.body["email"],
            "password": "Another123!",
            "nickname": "dup",
            "full_name": "Dup",
        })
        assert response.status_code == 409

    def test_login(self, client, admin):
        response = client.post("/auth/adminUser/login", json={
            "email": admin.body["email"],
            "password": "AdminPass123!",
        })
        assert response.status_code == 200
        assert response.json()["id"] == admin.id

    def test_login_wrong_password(self, client, admin):
        response = client.post("/auth/adminUser/login", json={
            "email": admin.body["email"],
            "password": "wrong",
        })
        assert response.status_code == 401

    def test_refresh(self, client, admin):
        response = client.post("/auth/adminUser/refresh", json={"refreshToken": admin.token["refresh"]})
        assert response.status_code == 200
        assert response.json()["token"]["access"]

    def test_refresh_rejects_access_token(self, client, admin):
        response = client.post("/auth/adminUser/refresh", json={"refreshToken": admin.token["access"]})
        assert response.status_code == 401


class TestSellerAuth:
    """Vendedores: quedan pendientes hasta su aprobación."""

    def test_join_is_pending(self, seller):
        assert seller.body["status"] == "pending"

    def test_duplicate_business_number(self, client, seller):
        response = client.post("/auth/sellerUser/join", json={
            "email": "other-seller@example.com",
            "password": "SellerPass123!",
            "nickname": "other",
            "full_name": "Other Seller",
            "business_registration_number": seller.body["business_registration_number"],
        })
        assert response.status_code == 409

    def test_pending_seller_cannot_login(self, client, seller):
        response = client.post("/auth/sellerUser/login", json={
            "email": seller.body["email"],
            "password": "SellerPass123!",
        })
        assert response.status_code == 401

    def test_refresh_requires_active(self, client, seller):
        response = client.post("/auth/sellerUser/refresh", json={"refresh_token": seller.token["refresh"]})
        assert response.status_code == 401


class TestMemberAuth:
    """Miembros."""

    def test_login_and_refresh(self, client):
        member = join_member(client, email="member@example.com")

        login = client.post("/auth/memberUser/login", json={
            "email": "member@example.com",
            "password": "MemberPass123!",
        })
        assert login.status_code == 200

        refresh = client.post("/auth/memberUser/refresh", json={"refreshToken": member.token["refresh"]})
        assert refresh.status_code == 200
        assert refresh.json()["id"] == member.id

    def test_inactive_member_cannot_login(self, client):
        join_member(client, email="sleepy@example.com", status="suspended")
        response = client.post("/auth/memberUser/login", json={
            "email": "sleepy@example.com",
            "password": "MemberPass123!",
        })
        assert response.status_code == 401

    def test_refresh_with_other_actor_type(self, client, admin):
        response = client.post("/auth/memberUser/refresh", json={"refreshToken": admin.token["refresh"]})
        assert response.status_code == 401


class TestGuestAuth:
    """Invitados."""

    def test_join_and_refresh(self, client, guest):
        assert guest.body["ip_address"] == "203.0.113.10"
        assert guest.body["session_start_at"].endswith("Z")

        response = client.post("/auth/guestUser/refresh", json={"refresh_token": guest.token["refresh"]})
        assert response.status_code == 200
        assert response.json()["id"] == guest.id


class TestActorGuards:
    """Dependencias de autorización."""

    def test_missing_token(self, client):
        response = client.patch("/shoppingMall/adminUser/coupons", json={})
        assert response.status_code == 401

    def test_garbage_token(self, client):
        response = client.patch("/shoppingMall/adminUser/coupons", json={}, headers=bearer("not-a-jwt"))
        assert response.status_code == 401

    def test_wrong_actor_type(self, client, member):
        response = client.patch("/shoppingMall/adminUser/coupons", json={}, headers=member.headers)
        assert response.status_code == 403

    def test_refresh_token_is_not_an_access_token(self, client, admin):
        response = client.patch(
            "/shoppingMall/adminUser/coupons", json={}, headers=bearer(admin.token["refresh"])
        )
        assert response.status_code == 401

    def test_seller_token_reaches_seller_routes(self, client):
        seller = join_seller(client)
        response = client.patch("/shoppingMall/sellerUser/coupons", json={}, headers=seller.headers)
        assert response.status_code == 200

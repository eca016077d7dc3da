"""
End-to-end tests of the HTTP API against an in-memory SQLite database.
Storage, email and the clock are replaced through dependency overrides.
"""

import pytest
from decimal import Decimal

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.infrastructure.db import models  # noqa: F401
from app.infrastructure.db.database import Base
from app.infrastructure.db.unit_of_work import SQLAlchemyUnitOfWork
from app.infrastructure.web.dependencies import (
    get_unit_of_work, get_storage, get_email_service, get_clock
)
from tests.factories import fixed_clock
from tests.fakes import FakeStorage, FakeEmailService


INVOICE = {
    "date": "2024-03-01",
    "due_date": "2024-03-31",
    "items": [
        {"description": "Design work", "quantity": 2, "price": "100.00"},
        {"description": "Hosting", "quantity": 1, "price": "50.00"},
    ],
    "tax_rate": "10",
}


class ApiTest:
    """Fresh database and client per test."""

    def setup_method(self):
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(bind=engine)
        session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

        self.storage = FakeStorage()
        self.email = FakeEmailService()
        app.dependency_overrides[get_unit_of_work] = lambda: SQLAlchemyUnitOfWork(session_factory)
        app.dependency_overrides[get_storage] = lambda: self.storage
        app.dependency_overrides[get_email_service] = lambda: self.email
        app.dependency_overrides[get_clock] = lambda: fixed_clock
        self.engine = engine
        self.client = TestClient(app)

    def teardown_method(self):
        app.dependency_overrides.clear()
        self.engine.dispose()

    def register(self, email="owner@example.com"):
        response = self.client.post("/api/auth/register", json={
            "email": email,
            "password": "secret123",
            "name": "Budi Santoso",
        })
        assert response.status_code == 201
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    def create_customer(self, headers, **fields):
        payload = {"name": "PT Maju Jaya", "email": "billing@majujaya.co.id"}
        payload.update(fields)
        response = self.client.post("/api/customers", json=payload, headers=headers)
        assert response.status_code == 201
        return response.json()["id"]

    def create_invoice(self, headers, customer_id, **fields):
        payload = dict(INVOICE, customer_id=customer_id)
        payload.update(fields)
        return self.client.post("/api/invoices", json=payload, headers=headers)


class TestAuthApi(ApiTest):

    def test_register_sets_cookie_and_returns_user(self):
        response = self.client.post("/api/auth/register", json={
            "email": "owner@example.com",
            "password": "secret123",
            "name": "Budi Santoso",
        })

        assert response.status_code == 201
        body = response.json()
        assert body["user"]["email"] == "owner@example.com"
        assert body["user"]["settings"]["next_invoice_number"] == 1
        assert "token" in response.cookies

    def test_cookie_authenticates_me(self):
        self.register()

        response = self.client.get("/api/auth/me")

        assert response.status_code == 200
        assert response.json()["name"] == "Budi Santoso"

    def test_duplicate_registration_is_conflict(self):
        self.register()

        response = self.client.post("/api/auth/register", json={
            "email": "owner@example.com",
            "password": "secret123",
            "name": "Budi Santoso",
        })

        assert response.status_code == 409
        assert response.json()["error"] == "DUPLICATE_ENTITY"

    def test_bad_login_is_unauthorized(self):
        self.register()

        response = self.client.post("/api/auth/login", json={
            "email": "owner@example.com", "password": "wrong-password"
        })

        assert response.status_code == 401
        assert response.json()["error"] == "UNAUTHORIZED"

    def test_missing_token_is_unauthorized(self):
        response = self.client.get("/api/invoices")

        assert response.status_code == 401
        assert response.json()["error"] == "UNAUTHORIZED"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_invalid_token_is_unauthorized(self):
        response = self.client.get("/api/invoices", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401


class TestInvoiceApi(ApiTest):

    def setup_method(self):
        super().setup_method()
        self.headers = self.register()
        self.customer_id = self.create_customer(self.headers)

    def test_create_invoice(self):
        response = self.create_invoice(self.headers, self.customer_id)

        assert response.status_code == 201
        body = response.json()
        assert body["number"] == "INV00001"
        assert body["date"] == "2024-03-01"
        assert body["status"] == "UNPAID"
        assert Decimal(body["subtotal"]) == Decimal("250")
        assert Decimal(body["tax"]) == Decimal("25")
        assert Decimal(body["total"]) == Decimal("275")
        assert [Decimal(item["amount"]) for item in body["items"]] == [Decimal("200"), Decimal("50")]

    def test_numbers_are_sequential(self):
        first = self.create_invoice(self.headers, self.customer_id).json()
        second = self.create_invoice(self.headers, self.customer_id).json()

        assert (first["number"], second["number"]) == ("INV00001", "INV00002")

        profile = self.client.get("/api/users/profile", headers=self.headers).json()
        assert profile["settings"]["next_invoice_number"] == 3

    def test_settings_prefix_applies_to_next_invoice(self):
        response = self.client.patch("/api/users/settings", json={"invoice_prefix": "FK"}, headers=self.headers)
        assert response.status_code == 200

        body = self.create_invoice(self.headers, self.customer_id).json()

        assert body["number"] == "FK00001"

    def test_fractional_tax_rate_survives_reload(self):
        created = self.create_invoice(
            self.headers, self.customer_id,
            items=[{"description": "Consulting", "quantity": 1, "price": "1000.00"}],
            tax_rate="12.345",
        ).json()

        reloaded = self.client.get(f"/api/invoices/{created['id']}", headers=self.headers).json()

        assert reloaded["tax_rate"] == created["tax_rate"] == "12.345"
        assert reloaded["tax"] == created["tax"] == "123.45"
        assert reloaded["total"] == created["total"] == "1123.45"
        assert Decimal(reloaded["tax"]) == (
            Decimal(reloaded["subtotal"]) * Decimal(reloaded["tax_rate"]) / 100
        )

    def test_sub_cent_price_survives_reload(self):
        created = self.create_invoice(
            self.headers, self.customer_id,
            items=[{"description": "Sticker", "quantity": 3, "price": "0.005"}],
            tax_rate=0,
        ).json()

        reloaded = self.client.get(f"/api/invoices/{created['id']}", headers=self.headers).json()

        assert Decimal(reloaded["items"][0]["price"]) == Decimal("0.005")
        assert Decimal(reloaded["subtotal"]) == Decimal("0.015")
        assert reloaded["total"] == "0.02"

    def test_settings_tax_rate_survives_reload(self):
        response = self.client.patch(
            "/api/users/settings", json={"tax_rate": "11.125"}, headers=self.headers
        )
        assert response.status_code == 200

        profile = self.client.get("/api/users/profile", headers=self.headers).json()

        assert profile["settings"]["tax_rate"] == "11.125"

    def test_invalid_quantity_is_bad_request(self):
        response = self.create_invoice(
            self.headers, self.customer_id,
            items=[{"description": "A", "quantity": 1.5, "price": 10}]
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_INPUT"

        body = self.create_invoice(self.headers, self.customer_id).json()
        assert body["number"] == "INV00001"

    def test_missing_items_is_unprocessable(self):
        response = self.client.post(
            "/api/invoices", json={"customer_id": self.customer_id}, headers=self.headers
        )

        assert response.status_code == 422

    def test_unknown_customer_is_not_found(self):
        response = self.create_invoice(self.headers, "missing")

        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"

    def test_other_tenant_cannot_see_invoice(self):
        invoice_id = self.create_invoice(self.headers, self.customer_id).json()["id"]
        other = self.register(email="other@example.com")

        response = self.client.get(f"/api/invoices/{invoice_id}", headers=other)

        assert response.status_code == 404

    def test_get_includes_customer_and_business(self):
        invoice_id = self.create_invoice(self.headers, self.customer_id).json()["id"]

        body = self.client.get(f"/api/invoices/{invoice_id}", headers=self.headers).json()

        assert body["customer"]["name"] == "PT Maju Jaya"
        assert body["business"]["name"] == "Budi Santoso"

    def test_status_lifecycle(self):
        invoice_id = self.create_invoice(self.headers, self.customer_id).json()["id"]
        url = f"/api/invoices/{invoice_id}"

        paid = self.client.patch(url, json={"status": "PAID"}, headers=self.headers)
        assert paid.status_code == 200
        assert paid.json()["paid_at"].startswith("2024-03-15T09:30:00")

        locked = self.client.patch(url, json={"notes": "late"}, headers=self.headers)
        assert locked.status_code == 423
        assert locked.json()["error"] == "INVOICE_IMMUTABLE"

        cancelled = self.client.patch(url, json={"status": "CANCELLED"}, headers=self.headers)
        assert cancelled.status_code == 200

        reopened = self.client.patch(url, json={"status": "PAID"}, headers=self.headers)
        assert reopened.status_code == 409

    def test_list_filters_by_status(self):
        first = self.create_invoice(self.headers, self.customer_id).json()["id"]
        self.create_invoice(self.headers, self.customer_id)
        self.client.patch(f"/api/invoices/{first}", json={"status": "PAID"}, headers=self.headers)

        response = self.client.get("/api/invoices", params={"status": "PAID"}, headers=self.headers)

        assert [invoice["id"] for invoice in response.json()] == [first]

    def test_delete_does_not_reuse_number(self):
        invoice_id = self.create_invoice(self.headers, self.customer_id).json()["id"]

        assert self.client.delete(f"/api/invoices/{invoice_id}", headers=self.headers).status_code == 204

        body = self.create_invoice(self.headers, self.customer_id).json()
        assert body["number"] == "INV00002"

    def test_customer_with_invoices_cannot_be_deleted(self):
        self.create_invoice(self.headers, self.customer_id)

        response = self.client.delete(f"/api/customers/{self.customer_id}", headers=self.headers)

        assert response.status_code == 409

    def test_payment_proof_upload(self):
        invoice_id = self.create_invoice(self.headers, self.customer_id).json()["id"]

        response = self.client.post(
            f"/api/invoices/{invoice_id}/payment-proof",
            files={"file": ("proof.png", b"\x89PNG data", "image/png")},
            headers=self.headers,
        )

        assert response.status_code == 200
        assert response.json()["url"].startswith(f"https://storage.test/payment-proofs/2024/03/{invoice_id}/")

    def test_send_invoice(self):
        invoice_id = self.create_invoice(self.headers, self.customer_id).json()["id"]

        response = self.client.post(f"/api/invoices/{invoice_id}/send", headers=self.headers)

        assert response.json() == {"delivered": True, "recipient": "billing@majujaya.co.id"}
        assert self.email.sent == [("billing@majujaya.co.id", "INV00001")]

    def test_dashboard_statistics(self):
        invoice_id = self.create_invoice(self.headers, self.customer_id).json()["id"]
        self.create_invoice(self.headers, self.customer_id)
        self.client.patch(f"/api/invoices/{invoice_id}", json={"status": "PAID"}, headers=self.headers)

        body = self.client.get("/api/invoices/stats/overview", headers=self.headers).json()

        assert body["overview"]["total_invoices"] == 2
        assert Decimal(body["overview"]["total_amount"]) == Decimal("275")
        assert Decimal(body["overview"]["unpaid_amount"]) == Decimal("275")
        assert len(body["daily_revenue"]) == 31
        assert Decimal(body["monthly_comparison"]["current_month"]) == Decimal("275")

    def test_revenue_range_requires_dates(self):
        response = self.client.get("/api/invoices/stats/revenue", headers=self.headers)

        assert response.status_code == 400

    def test_revenue_range(self):
        invoice_id = self.create_invoice(self.headers, self.customer_id).json()["id"]
        self.client.patch(f"/api/invoices/{invoice_id}", json={"status": "PAID"}, headers=self.headers)

        response = self.client.get(
            "/api/invoices/stats/revenue",
            params={"start_date": "2024-03-01", "end_date": "2024-03-31"},
            headers=self.headers,
        )

        assert response.status_code == 200
        assert [entry["date"] for entry in response.json()] == ["2024-03-01"]


class TestMiscApi(ApiTest):

    def test_health(self):
        response = self.client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.parametrize("path", ["/api/nothing-here", "/nope"])
    def test_unknown_path(self, path):
        response = self.client.get(path)

        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"

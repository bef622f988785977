"""
Tests for subscription packages and Stripe checkout
"""
from types import SimpleNamespace

import pytest
import stripe

from assetverse.models.payment import Payment
from assetverse.services import payments
from tests.conftest import auth_headers


@pytest.fixture
def packages(db_session):
    payments.ensure_default_packages(db_session)


@pytest.fixture
def fake_stripe(monkeypatch):
    """Replace the Stripe Checkout API with an in-memory double."""
    sessions = {}
    created = []

    def create(**kwargs):
        created.append(kwargs)
        session_id = f"cs_test_{len(created)}"
        sessions[session_id] = SimpleNamespace(
            id=session_id,
            url=f"https://checkout.stripe.com/c/pay/{session_id}",
            payment_status="unpaid",
            metadata=kwargs["metadata"],
            amount_total=kwargs["line_items"][0]["price_data"]["unit_amount"],
        )
        return sessions[session_id]

    def retrieve(session_id):
        if session_id not in sessions:
            raise stripe.InvalidRequestError(f"No such checkout.session: {session_id}", "id")
        return sessions[session_id]

    monkeypatch.setattr(stripe.checkout.Session, "create", create)
    monkeypatch.setattr(stripe.checkout.Session, "retrieve", retrieve)
    return SimpleNamespace(sessions=sessions, created=created)


def checkout(client, hr_email, package_name):
    return client.post(
        "/api/create-checkout-session",
        json={"hrEmail": hr_email, "packageName": package_name},
        headers=auth_headers(hr_email),
    )


def confirm(client, hr_email, session_id):
    return client.post(
        "/api/payments/confirm",
        json={"sessionId": session_id},
        headers=auth_headers(hr_email),
    )


class TestPackages:
    """Test suite for GET /packages"""

    def test_lists_default_packages(self, client, hr):
        response = client.get("/api/packages", headers=auth_headers(hr.email))

        assert response.status_code == 200
        assert [(p["name"], p["employeeLimit"]) for p in response.json()] == [
            ("basic", 5),
            ("standard", 10),
            ("premium", 20),
        ]

    def test_seeding_is_idempotent(self, db_session):
        payments.ensure_default_packages(db_session)
        payments.ensure_default_packages(db_session)

        assert len(payments.list_packages(db_session)) == 3


class TestCheckout:
    """Test suite for POST /create-checkout-session"""

    def test_creates_session(self, client, hr, packages, fake_stripe):
        response = checkout(client, hr.email, "Standard")

        assert response.status_code == 200
        assert response.json()["sessionId"] == "cs_test_1"
        sent = fake_stripe.created[0]
        assert sent["metadata"] == {"hrEmail": hr.email, "packageName": "standard"}
        assert sent["line_items"][0]["price_data"]["unit_amount"] == 800

    def test_same_package(self, client, hr, packages, fake_stripe):
        response = checkout(client, hr.email, "basic")

        assert response.status_code == 409
        assert fake_stripe.created == []

    def test_downgrade_below_team_size(self, client, db_session, make_hr, packages, fake_stripe):
        hr = make_hr(package_limit=20, current_employees=12)
        hr.subscription = "premium"
        db_session.commit()

        response = checkout(client, hr.email, "standard")

        assert response.status_code == 409

    def test_unknown_package(self, client, hr, packages, fake_stripe):
        assert checkout(client, hr.email, "platinum").status_code == 404

    def test_stripe_failure(self, client, hr, packages, monkeypatch):
        def create(**kwargs):
            raise stripe.APIConnectionError("network down")

        monkeypatch.setattr(stripe.checkout.Session, "create", create)

        response = checkout(client, hr.email, "premium")

        assert response.status_code == 502

    def test_employee_cannot_checkout(self, client, employee, packages, fake_stripe):
        assert checkout(client, employee.email, "premium").status_code == 403


class TestConfirmPayment:
    """Test suite for POST /payments/confirm"""

    def test_paid_session_raises_limit(self, client, db_session, hr, packages, fake_stripe):
        session_id = checkout(client, hr.email, "premium").json()["sessionId"]
        fake_stripe.sessions[session_id].payment_status = "paid"

        response = confirm(client, hr.email, session_id)

        assert response.status_code == 200
        assert response.json()["packageLimit"] == 20
        assert response.json()["subscription"] == "premium"
        payment = db_session.query(Payment).one()
        assert payment.amount == 15
        assert payment.transaction_id == session_id

    def test_confirm_is_idempotent(self, client, db_session, hr, packages, fake_stripe):
        session_id = checkout(client, hr.email, "standard").json()["sessionId"]
        fake_stripe.sessions[session_id].payment_status = "paid"
        confirm(client, hr.email, session_id)

        response = confirm(client, hr.email, session_id)

        assert response.status_code == 200
        assert response.json()["packageLimit"] == 10
        assert db_session.query(Payment).count() == 1

    def test_unpaid_session(self, client, db_session, hr, packages, fake_stripe):
        session_id = checkout(client, hr.email, "standard").json()["sessionId"]

        response = confirm(client, hr.email, session_id)

        assert response.status_code == 400
        db_session.expire_all()
        assert hr.package_limit == 5
        assert db_session.query(Payment).count() == 0

    def test_session_of_another_account(self, client, make_hr, hr, packages, fake_stripe):
        rival = make_hr(email="hr@globex.com", company_name="Globex")
        session_id = checkout(client, rival.email, "premium").json()["sessionId"]
        fake_stripe.sessions[session_id].payment_status = "paid"

        response = confirm(client, hr.email, session_id)

        assert response.status_code == 403

    def test_unknown_session(self, client, hr, packages, fake_stripe):
        assert confirm(client, hr.email, "cs_missing").status_code == 502

    def test_payment_history(self, client, hr, packages, fake_stripe):
        session_id = checkout(client, hr.email, "standard").json()["sessionId"]
        fake_stripe.sessions[session_id].payment_status = "paid"
        confirm(client, hr.email, session_id)

        response = client.get("/api/payments", params={"hrEmail": hr.email}, headers=auth_headers(hr.email))

        data = response.json()["data"]
        assert len(data) == 1
        assert data[0]["packageName"] == "standard"
        assert data[0]["employeeLimit"] == 10

    def test_replayed_session_of_another_account(self, client, db_session, make_hr, hr, packages, fake_stripe):
        rival = make_hr(email="hr@globex.com", company_name="Globex")
        session_id = checkout(client, rival.email, "premium").json()["sessionId"]
        fake_stripe.sessions[session_id].payment_status = "paid"
        assert confirm(client, rival.email, session_id).status_code == 200

        response = confirm(client, hr.email, session_id)

        assert response.status_code == 403
        db_session.expire_all()
        assert hr.package_limit == 5

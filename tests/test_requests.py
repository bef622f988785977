"""
Tests for the asset request lifecycle
"""
import pytest

from assetverse.errors import (
    AuthorizationError,
    ConflictError,
    InvalidStateError,
    OutOfStockError,
    RequestBlockedError,
)
from assetverse.models.asset_request import AssetRequest, RequestStatus
from assetverse.services import requests
from assetverse.services.approval import approve_request
from tests.conftest import auth_headers


def file_request(client, asset, email="emp1@mail.com", note="For the new project"):
    return client.post(
        "/api/asset-requests",
        json={"assetId": asset.id, "requesterEmail": email, "note": note},
        headers=auth_headers(email),
    )


class TestCreateRequest:
    """Test suite for request creation"""

    def test_creates_pending_request_with_snapshot(self, client, db_session, hr, employee, asset):
        response = file_request(client, asset)

        assert response.status_code == 201
        body = response.json()
        request = db_session.get(AssetRequest, body["insertedId"])
        assert request.request_status == RequestStatus.PENDING.value
        assert request.asset_name == "Laptop"
        assert request.asset_type == "Returnable"
        assert request.hr_email == hr.email
        assert request.company_name == "Acme"
        assert request.requester_name == "Eve Employee"
        assert request.note == "For the new project"

    def test_snapshot_not_resynced_after_rename(self, client, db_session, hr, employee, asset):
        response = file_request(client, asset)
        request_id = response.json()["insertedId"]

        client.patch(
            f"/api/assetcollection/{asset.id}",
            json={"hrEmail": hr.email, "productName": "Gaming Laptop"},
            headers=auth_headers(hr.email),
        )

        db_session.expire_all()
        assert asset.product_name == "Gaming Laptop"
        assert db_session.get(AssetRequest, request_id).asset_name == "Laptop"

    def test_hr_cannot_request(self, db_session, hr, asset):
        with pytest.raises(AuthorizationError):
            requests.create_request(db_session, asset.id, hr.email)

    def test_hr_is_refused_at_route(self, client, hr, asset):
        response = file_request(client, asset, email=hr.email)
        assert response.status_code == 403
        assert response.json()["success"] is False

    def test_unknown_asset(self, client, employee):
        response = client.post(
            "/api/asset-requests",
            json={"assetId": 999, "requesterEmail": employee.email},
            headers=auth_headers(employee.email),
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Asset not found or out of stock"

    def test_out_of_stock(self, client, make_asset, hr, employee):
        empty = make_asset(hr, quantity=0)
        response = file_request(client, empty)
        assert response.status_code == 400

    def test_duplicate_pending(self, client, employee, asset):
        assert file_request(client, asset).status_code == 201

        response = file_request(client, asset)
        assert response.status_code == 409
        assert response.json()["message"] == "You already have a pending request"

    def test_duplicate_after_approval(self, client, make_asset, hr, employee):
        laptops = make_asset(hr, quantity=3)
        request_id = file_request(client, laptops).json()["insertedId"]
        client.patch(
            f"/api/asset-request/approve/{request_id}",
            json={"hrEmail": hr.email},
            headers=auth_headers(hr.email),
        )

        response = file_request(client, laptops)
        assert response.status_code == 409
        assert response.json()["message"] == "This asset is already approved for you"

    def test_rejection_blocks_pair_permanently(self, client, db_session, make_asset, hr, employee):
        laptops = make_asset(hr, quantity=5)
        request_id = file_request(client, laptops).json()["insertedId"]
        requests.reject_request(db_session, request_id, hr.email)

        for _ in range(3):
            response = file_request(client, laptops)
            assert response.status_code == 403
            assert "rejected" in response.json()["message"]

        with pytest.raises(RequestBlockedError):
            requests.create_request(db_session, laptops.id, employee.email)

    def test_rejection_only_blocks_that_asset(self, client, db_session, make_asset, hr, employee):
        laptop = make_asset(hr, quantity=2)
        monitor = make_asset(hr, quantity=2, name="Monitor")
        request_id = file_request(client, laptop).json()["insertedId"]
        requests.reject_request(db_session, request_id, hr.email)

        assert file_request(client, monitor).status_code == 201

    def test_requester_email_must_match_token(self, client, make_employee, asset):
        make_employee()
        other = make_employee(email="emp2@mail.com")
        response = client.post(
            "/api/asset-requests",
            json={"assetId": asset.id, "requesterEmail": "emp1@mail.com"},
            headers=auth_headers(other.email),
        )
        assert response.status_code == 403


class TestRejectRequest:
    """Test suite for rejection"""

    def test_reject_pending(self, client, db_session, hr, employee, asset):
        request_id = file_request(client, asset).json()["insertedId"]

        response = client.patch(
            f"/api/asset-request/reject/{request_id}",
            json={"hrEmail": hr.email},
            headers=auth_headers(hr.email),
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Request rejected successfully"}
        request = db_session.get(AssetRequest, request_id)
        assert request.request_status == RequestStatus.REJECTED.value
        assert request.rejection_date is not None

    def test_reject_twice_fails(self, client, hr, employee, asset):
        request_id = file_request(client, asset).json()["insertedId"]
        url = f"/api/asset-request/reject/{request_id}"
        client.patch(url, json={"hrEmail": hr.email}, headers=auth_headers(hr.email))

        response = client.patch(url, json={"hrEmail": hr.email}, headers=auth_headers(hr.email))
        assert response.status_code == 400

    def test_reject_other_companys_request(self, client, db_session, make_hr, hr, employee, asset):
        request_id = file_request(client, asset).json()["insertedId"]
        rival = make_hr(email="hr@globex.com", company_name="Globex")

        response = client.patch(
            f"/api/asset-request/reject/{request_id}",
            json={"hrEmail": rival.email},
            headers=auth_headers(rival.email),
        )

        assert response.status_code == 403
        assert db_session.get(AssetRequest, request_id).request_status == RequestStatus.PENDING.value

    def test_reject_missing_request(self, client, hr):
        response = client.patch(
            "/api/asset-request/reject/42",
            json={"hrEmail": hr.email},
            headers=auth_headers(hr.email),
        )
        assert response.status_code == 404

    def test_reject_approved_request(self, db_session, make_asset, hr, employee):
        laptops = make_asset(hr, quantity=2)
        request = requests.create_request(db_session, laptops.id, employee.email)
        approve_request(db_session, request.id, hr.email)

        with pytest.raises(InvalidStateError):
            requests.reject_request(db_session, request.id, hr.email)


class TestListRequests:
    """Test suite for request listings"""

    def test_employee_sees_own_requests_newest_first(self, client, make_asset, hr, employee):
        first = make_asset(hr, name="Laptop")
        second = make_asset(hr, name="Monitor")
        file_request(client, first)
        file_request(client, second)

        response = client.get(
            "/api/asset-requests",
            params={"email": employee.email},
            headers=auth_headers(employee.email),
        )

        assert response.status_code == 200
        names = [r["assetName"] for r in response.json()["data"]]
        assert names == ["Monitor", "Laptop"]

    def test_hr_sees_requests_addressed_to_it(self, client, make_hr, make_asset, hr, employee):
        rival = make_hr(email="hr@globex.com", company_name="Globex")
        file_request(client, make_asset(hr))
        file_request(client, make_asset(rival, name="Phone"))

        response = client.get(
            "/api/asset-requests",
            params={"email": hr.email},
            headers=auth_headers(hr.email),
        )

        data = response.json()["data"]
        assert len(data) == 1
        assert data[0]["hrEmail"] == hr.email
        assert data[0]["requestStatus"] == "pending"

    def test_out_of_stock_helper_error(self, db_session, make_asset, hr, employee):
        empty = make_asset(hr, quantity=0)
        with pytest.raises(OutOfStockError):
            requests.create_request(db_session, empty.id, employee.email)

    def test_conflict_helper_error(self, db_session, asset, employee):
        requests.create_request(db_session, asset.id, employee.email)
        with pytest.raises(ConflictError):
            requests.create_request(db_session, asset.id, employee.email)

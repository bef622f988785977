"""
Tests for the status transition table
"""
import pytest

from assetverse.errors import InvalidStateError
from assetverse.models.affiliation import AffiliationStatus
from assetverse.models.asset_request import AssetRequest, RequestStatus
from assetverse.models.assignment import AssignmentStatus
from assetverse.services.transitions import can_transition, transition


class TestTransitionTable:

    def test_request_moves(self):
        assert can_transition(RequestStatus.PENDING, RequestStatus.APPROVED)
        assert can_transition(RequestStatus.PENDING, RequestStatus.REJECTED)
        assert not can_transition(RequestStatus.APPROVED, RequestStatus.REJECTED)
        assert not can_transition(RequestStatus.REJECTED, RequestStatus.PENDING)
        assert not can_transition(RequestStatus.APPROVED, RequestStatus.PENDING)

    def test_terminal_states(self):
        assert not can_transition(AffiliationStatus.INACTIVE, AffiliationStatus.ACTIVE)
        assert not can_transition(AssignmentStatus.RETURNED, AssignmentStatus.ASSIGNED)
        assert can_transition(AffiliationStatus.ACTIVE, AffiliationStatus.INACTIVE)
        assert can_transition(AssignmentStatus.ASSIGNED, AssignmentStatus.RETURNED)


class TestTransition:

    @pytest.fixture
    def request_row(self, db_session, hr, employee, asset):
        row = AssetRequest(
            asset_id=asset.id,
            asset_name=asset.product_name,
            asset_type=asset.product_type,
            requester_email=employee.email,
            hr_email=hr.email,
            company_name=hr.company_name,
            request_status=RequestStatus.PENDING.value,
        )
        db_session.add(row)
        db_session.commit()
        return row

    def test_writes_status_and_values(self, db_session, request_row):
        transition(db_session, request_row, "request_status", RequestStatus.REJECTED, note="no budget")
        db_session.commit()
        db_session.expire_all()

        assert request_row.request_status == "rejected"
        assert request_row.note == "no budget"

    def test_illegal_move(self, db_session, request_row):
        transition(db_session, request_row, "request_status", RequestStatus.APPROVED)

        with pytest.raises(InvalidStateError):
            transition(db_session, request_row, "request_status", RequestStatus.REJECTED)

    def test_stale_instance_loses(self, db_session, request_row):
        # Another session already moved the row
        db_session.query(AssetRequest).filter(AssetRequest.id == request_row.id).update(
            {"request_status": RequestStatus.REJECTED.value}, synchronize_session=False
        )

        with pytest.raises(InvalidStateError, match="Cannot approve"):
            transition(
                db_session, request_row, "request_status", RequestStatus.APPROVED,
                message="Cannot approve this request",
            )

"""Legal status transitions for requests, affiliations and assignments.

Every status write goes through :func:`transition`, which refuses illegal moves
and performs the write as a conditional update on the current status, so two
sessions racing on the same row cannot both move it.
"""
import enum
from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from assetverse.errors import InvalidStateError
from assetverse.models.affiliation import AffiliationStatus
from assetverse.models.asset_request import RequestStatus
from assetverse.models.assignment import AssignmentStatus


TRANSITIONS = {
    RequestStatus: {
        RequestStatus.PENDING: {RequestStatus.APPROVED, RequestStatus.REJECTED},
        RequestStatus.APPROVED: set(),
        RequestStatus.REJECTED: set(),
    },
    AffiliationStatus: {
        AffiliationStatus.ACTIVE: {AffiliationStatus.INACTIVE},
        AffiliationStatus.INACTIVE: set(),
    },
    AssignmentStatus: {
        AssignmentStatus.ASSIGNED: {AssignmentStatus.RETURNED},
        AssignmentStatus.RETURNED: set(),
    },
}


def can_transition(current: enum.Enum, target: enum.Enum) -> bool:
    """Whether ``current -> target`` is a legal move for its status type."""
    return target in TRANSITIONS[type(target)][current]


def transition(
    db: Session,
    record,
    attr: str,
    target: enum.Enum,
    message: Optional[str] = None,
    **values,
):
    """
    Move ``record.<attr>`` to ``target``, also writing any extra ``values``
    (timestamps). Raises InvalidStateError if the move is illegal or the row
    changed status underneath us.
    """
    status_type = type(target)
    current = status_type(getattr(record, attr))
    error = message or f"Cannot change status from '{current.value}' to '{target.value}'"

    if not can_transition(current, target):
        raise InvalidStateError(error)

    model = type(record)
    column = getattr(model, attr)
    result = db.execute(
        update(model)
        .where(model.id == record.id, column == current.value)
        .values({attr: target.value, **values})
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise InvalidStateError(error)

    # Keep the loaded instance in step with the row
    setattr(record, attr, target.value)
    for field, value in values.items():
        setattr(record, field, value)
    return record

# ruff: noqa: S101
from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from tablemaster.auth import is_privileged
from tablemaster.errors import AuthenticationError, NotFoundError, StateError, ValidationError
from tablemaster.models import AccessRequestStatus
from tablemaster.services import access_requests


def test_submit_captures_requester(db, staff) -> None:
    req = access_requests.submit(db, staff, "  I run the patio on weekends  ")
    assert req.status == AccessRequestStatus.PENDING.value
    assert req.user_id == staff.id
    assert req.email == staff.email
    assert req.full_name == staff.full_name
    assert req.reason == "I run the patio on weekends"
    assert req.reviewed_at is None


def test_submit_requires_actor(db) -> None:
    with pytest.raises(AuthenticationError):
        access_requests.submit(db, None, "please")


def test_latest_for_user(db, staff, admin) -> None:
    assert access_requests.get_latest_for_user(db, staff.id) is None
    assert access_requests.get_latest_for_user(db, None) is None
    first = access_requests.submit(db, staff, "first")
    first.created_at = datetime.utcnow() - timedelta(days=1)
    db.commit()
    access_requests.decide(db, first.id, "rejected", admin)
    second = access_requests.submit(db, staff, "second")
    assert access_requests.get_latest_for_user(db, staff.id).id == second.id


def test_reject_then_decide_again_fails(db, staff, admin) -> None:
    req = access_requests.submit(db, staff)
    decided = access_requests.decide(db, req.id, AccessRequestStatus.REJECTED, admin, "Not this week")
    assert decided.status == "rejected"
    assert decided.reviewer_id == admin.id
    assert decided.reviewer_email == admin.email
    assert decided.decision_notes == "Not this week"
    assert decided.reviewed_at is not None

    with pytest.raises(StateError):
        access_requests.decide(db, req.id, "approved", admin)
    assert access_requests.get_latest_for_user(db, staff.id).status == "rejected"


def test_decide_validates_status_and_id(db, staff, admin) -> None:
    req = access_requests.submit(db, staff)
    with pytest.raises(ValidationError):
        access_requests.decide(db, req.id, "pending", admin)
    with pytest.raises(ValidationError):
        access_requests.decide(db, req.id, "maybe", admin)
    with pytest.raises(NotFoundError):
        access_requests.decide(db, "nope", "approved", admin)


def test_list_pending_oldest_first(db, staff, admin) -> None:
    a = access_requests.submit(db, staff, "a")
    b = access_requests.submit(db, admin, "b")
    b.created_at = datetime.utcnow() - timedelta(hours=1)
    db.commit()
    assert [r.id for r in access_requests.list_pending(db)] == [b.id, a.id]


def test_approved_request_grants_edit_access(db, staff, admin) -> None:
    assert is_privileged(db, admin)
    assert not is_privileged(db, staff)
    assert not is_privileged(db, None)

    req = access_requests.submit(db, staff)
    assert not is_privileged(db, staff)
    access_requests.decide(db, req.id, "approved", admin)
    assert is_privileged(db, staff)

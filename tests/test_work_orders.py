import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from floorsync import models
from floorsync.db import SessionLocal
from floorsync.core import work_orders
from floorsync.core.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
    VersionConflictError,
)


def _create(db, broadcaster, order, **kw):
    params = dict(product="Linear Grill 200x50", quantity=50, station="cutting")
    params.update(kw)
    return work_orders.create_work_order(db, broadcaster, order.id, **params)


def test_create_starts_pending_with_zero_progress(db, broadcaster, order):
    wo = _create(db, broadcaster, order)
    assert wo.status == "pending"
    assert wo.progress == 0
    assert wo.order.customer == "ABC Construction"


def test_create_publishes_one_event_with_order(db, broadcaster, observer, order):
    wo = _create(db, broadcaster, order)
    assert observer.events() == ["wo_updated"]
    data = observer.messages[0]["data"]
    assert data["id"] == wo.id
    assert data["order"]["customer"] == "ABC Construction"


@pytest.mark.parametrize("kw", [
    {"quantity": 0},
    {"quantity": -3},
    {"product": "  "},
    {"station": "painting"},
])
def test_create_rejects_invalid_input(db, broadcaster, observer, order, kw):
    with pytest.raises(ValidationError):
        _create(db, broadcaster, order, **kw)
    assert observer.messages == []


def test_create_rejects_unknown_order(db, broadcaster):
    with pytest.raises(ValidationError):
        work_orders.create_work_order(db, broadcaster, 999, "Diffuser Type B", 100, "cutting")


def test_transition_unknown_work_order(db, broadcaster):
    with pytest.raises(NotFoundError):
        work_orders.transition_work_order(db, broadcaster, 999, status="in_progress")


def test_transition_publishes_updated_entity(db, broadcaster, observer, order):
    wo = _create(db, broadcaster, order)
    updated = work_orders.transition_work_order(db, broadcaster, wo.id, status="in_progress", progress=45)
    assert updated.progress == 45
    assert observer.events() == ["wo_updated", "wo_updated"]
    data = observer.messages[-1]["data"]
    assert data["status"] == "in_progress"
    assert data["progress"] == 45
    assert data["version"] == updated.version
    assert data["order"]["id"] == order.id


def test_progress_clamped_on_store(db, broadcaster, order):
    wo = _create(db, broadcaster, order)
    updated = work_orders.transition_work_order(db, broadcaster, wo.id, status="in_progress", progress=140)
    assert updated.progress == 100
    assert updated.status == "in_progress"


def test_completion_stamps_completed_at_and_full_progress(db, broadcaster, order):
    wo = _create(db, broadcaster, order)
    work_orders.transition_work_order(db, broadcaster, wo.id, status="in_progress", progress=10)
    done = work_orders.transition_work_order(db, broadcaster, wo.id, status="completed")
    assert done.progress == 100
    assert done.completed_at is not None


def test_rejected_transition_does_not_publish(db, broadcaster, observer, order):
    wo = _create(db, broadcaster, order)
    with pytest.raises(InvalidTransitionError):
        work_orders.transition_work_order(db, broadcaster, wo.id, status="completed")
    assert observer.events() == ["wo_updated"]
    assert work_orders.get_work_order(db, wo.id).status == "pending"


def test_stale_expected_version_conflicts(db, broadcaster, order):
    wo = _create(db, broadcaster, order)
    work_orders.transition_work_order(db, broadcaster, wo.id, status="in_progress", progress=10)
    with pytest.raises(VersionConflictError):
        work_orders.transition_work_order(
            db, broadcaster, wo.id, progress=50, expected_version=1
        )


def test_same_work_order_race_has_one_winner(db, broadcaster, observer, order, monkeypatch):
    wo = _create(db, broadcaster, order)
    work_orders.transition_work_order(db, broadcaster, wo.id, status="in_progress", progress=10)
    plan = work_orders.plan_transition
    raced = []

    # the loser has read version 2 and planned its move when the winner commits
    def plan_then_race(*args, **kwargs):
        planned = plan(*args, **kwargs)
        if not raced:
            raced.append(True)
            with SessionLocal() as other:
                work_orders.transition_work_order(other, broadcaster, wo.id, progress=60)
        return planned

    monkeypatch.setattr(work_orders, "plan_transition", plan_then_race)

    with SessionLocal() as loser:
        with pytest.raises(VersionConflictError):
            work_orders.transition_work_order(loser, broadcaster, wo.id, progress=40)

    assert observer.events() == ["wo_updated"] * 3
    assert observer.messages[-1]["data"]["progress"] == 60
    stored = work_orders.get_work_order(db, wo.id)
    db.refresh(stored)
    assert stored.progress == 60
    assert stored.version == 3


def test_list_is_newest_updated_first(db, broadcaster, order):
    first = _create(db, broadcaster, order)
    second = _create(db, broadcaster, order, station="coating")
    work_orders.transition_work_order(db, broadcaster, first.id, status="in_progress", progress=5)
    ids = [wo.id for wo in work_orders.list_work_orders(db)]
    assert ids == [first.id, second.id]


def test_concurrent_transitions_on_different_work_orders(db, broadcaster, observer, order):
    ids = [_create(db, broadcaster, order).id for _ in range(4)]
    barrier = threading.Barrier(len(ids))

    def advance(wo_id):
        session = SessionLocal()
        try:
            barrier.wait()
            return work_orders.transition_work_order(
                session, broadcaster, wo_id, status="in_progress", progress=wo_id * 10
            ).progress
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=len(ids)) as pool:
        results = list(pool.map(advance, ids))

    assert results == [wo_id * 10 for wo_id in ids]
    for wo_id in ids:
        stored = work_orders.get_work_order(db, wo_id)
        db.refresh(stored)
        assert stored.status == "in_progress"
        assert stored.progress == wo_id * 10
    assert observer.events().count("wo_updated") == len(ids) * 2

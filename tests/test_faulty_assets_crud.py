"""Asset service: validation, uniqueness, audit append and concurrency handling."""
import logging
from datetime import datetime, timezone

import pytest
from sqlalchemy import event, text
from sqlalchemy.orm.exc import StaleDataError

from asset_service.app.crud import faulty_assets_crud as crud
from asset_service.app.enum.faulty_assets_enum import FaultyAssetStatus
from asset_service.app.models.audit_logs import AuditLog
from asset_service.app.models.faulty_assets import FaultyAsset
from shared.core.schemas import UserToken
from shared.helpers.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidArgumentError,
    NotFoundError,
    UnauthorizedError,
)


def _utc_now():
    return datetime.now(timezone.utc).replace(tzinfo=None)


# ----------------------------------------------------------------------
# create
# ----------------------------------------------------------------------

def test_create_returns_record_with_generated_id(db, make_asset, employee):
    created = crud.create_asset(db, make_asset(), employee)

    assert created.id is not None
    assert created.asset_tag == "A-100"
    assert created.serial_no == "SN-1001"
    assert created.status == "Pending"
    assert created.last_modified_by == "employee@example.com"


def test_create_appends_single_audit_entry(db, make_asset, employee):
    started = _utc_now()
    crud.create_asset(db, make_asset(), employee)

    trail = crud.get_audit_trail(db, "A-100")
    assert len(trail) == 1
    assert "SN-1001" in trail[0].action
    assert trail[0].action == "created asset SN-1001"
    assert trail[0].user == "employee@example.com"
    assert trail[0].timestamp >= started


def test_create_without_principal_is_attributed_to_system(db, make_asset):
    crud.create_asset(db, make_asset(), None)

    trail = crud.get_audit_trail(db, "A-100")
    assert trail[0].user == "system"


def test_create_rejects_duplicate_serial_no(db, make_asset, employee):
    crud.create_asset(db, make_asset(), employee)

    with pytest.raises(ConflictError) as exc:
        crud.create_asset(db, make_asset(asset_tag="A-200"), employee)
    assert "serial number" in exc.value.message
    assert db.query(FaultyAsset).count() == 1


def test_create_rejects_duplicate_asset_tag(db, make_asset, employee):
    crud.create_asset(db, make_asset(), employee)

    with pytest.raises(ConflictError) as exc:
        crud.create_asset(db, make_asset(serial_no="SN-2000"), employee)
    assert "tag" in exc.value.message
    assert db.query(AuditLog).count() == 1


def test_create_rejects_negative_repair_cost(db, make_asset, employee):
    with pytest.raises(InvalidArgumentError):
        crud.create_asset(db, make_asset(repair_cost=-0.01), employee)
    assert db.query(FaultyAsset).count() == 0


@pytest.mark.parametrize("cost", [0, None, 12.5])
def test_create_accepts_zero_null_or_positive_cost(db, make_asset, employee, cost):
    created = crud.create_asset(db, make_asset(repair_cost=cost), employee)
    assert created.repair_cost == cost


def test_create_rounds_repair_cost_to_cents(db, make_asset, employee):
    created = crud.create_asset(db, make_asset(repair_cost=19.999), employee)
    assert created.repair_cost == 20.0


def test_create_rejects_unknown_status(db, make_asset, employee):
    with pytest.raises(InvalidArgumentError) as exc:
        crud.create_asset(db, make_asset(status="Broken"), employee)
    assert "Status must be one of" in exc.value.message


@pytest.mark.parametrize("status", FaultyAssetStatus.values())
def test_create_accepts_every_known_status(db, make_asset, employee, status):
    created = crud.create_asset(db, make_asset(status=status), employee)
    assert created.status == status


@pytest.mark.parametrize("field", ["category", "asset_name", "ticket_id", "serial_no",
                                   "asset_tag", "branch", "received_by", "vendor", "fault_reported"])
def test_create_rejects_blank_required_field(db, make_asset, employee, field):
    with pytest.raises(InvalidArgumentError):
        crud.create_asset(db, make_asset(**{field: "   "}), employee)


def test_failed_audit_append_rolls_back_the_asset(db, make_asset, employee, failing_sink):
    with pytest.raises(RuntimeError):
        crud.create_asset(db, make_asset(), employee, audit=failing_sink)

    assert db.query(FaultyAsset).count() == 0
    assert db.query(AuditLog).count() == 0


def test_custom_audit_sink_receives_the_entry(db, make_asset, employee, memory_sink):
    created = crud.create_asset(db, make_asset(), employee, audit=memory_sink)

    assert memory_sink.entries == [
        (created.id, "created asset SN-1001", "employee@example.com")]
    assert db.query(AuditLog).count() == 0


# ----------------------------------------------------------------------
# update
# ----------------------------------------------------------------------

def test_update_replaces_all_fields(db, make_asset, employee):
    crud.create_asset(db, make_asset(), employee)

    crud.update_asset(db, "A-100", make_asset(
        asset_tag="A-101", serial_no="SN-1001", vendor="Other Vendor",
        status="Repaired", repair_cost=50), employee)

    updated = crud.get_asset_by_tag(db, "A-101")
    assert updated.vendor == "Other Vendor"
    assert updated.status == "Repaired"
    assert updated.repair_cost == 50.0
    with pytest.raises(NotFoundError):
        crud.get_asset_by_tag(db, "A-100")


def test_update_audit_mentions_new_tag(db, make_asset, employee):
    crud.create_asset(db, make_asset(), employee)
    crud.update_asset(db, "A-100", make_asset(asset_tag="A-999"), employee)

    trail = crud.get_audit_trail(db, "A-999")
    assert trail[0].action == "updated asset A-999"


def test_n_updates_yield_n_plus_one_entries_newest_first(db, make_asset, employee):
    crud.create_asset(db, make_asset(), employee)
    for cost in (1, 2, 3):
        crud.update_asset(db, "A-100", make_asset(repair_cost=cost), employee)

    trail = crud.get_audit_trail(db, "A-100")
    assert len(trail) == 4
    assert trail[-1].action == "created asset SN-1001"
    assert [entry.id for entry in trail] == sorted((entry.id for entry in trail), reverse=True)
    assert [entry.timestamp for entry in trail] == sorted(
        (entry.timestamp for entry in trail), reverse=True)


def test_update_missing_asset_is_not_found(db, make_asset, employee):
    with pytest.raises(NotFoundError):
        crud.update_asset(db, "NOPE", make_asset(), employee)


def test_update_rejects_tag_owned_by_another_asset(db, make_asset, employee):
    crud.create_asset(db, make_asset(), employee)
    crud.create_asset(db, make_asset(asset_tag="B-1", serial_no="SN-B1"), employee)

    with pytest.raises(ConflictError):
        crud.update_asset(db, "B-1", make_asset(asset_tag="A-100", serial_no="SN-B1"), employee)


def test_update_rejects_serial_owned_by_another_asset(db, make_asset, employee):
    crud.create_asset(db, make_asset(), employee)
    crud.create_asset(db, make_asset(asset_tag="B-1", serial_no="SN-B1"), employee)

    with pytest.raises(ConflictError):
        crud.update_asset(db, "B-1", make_asset(asset_tag="B-1", serial_no="SN-1001"), employee)


def test_update_keeping_own_keys_is_not_a_conflict(db, make_asset, employee):
    crud.create_asset(db, make_asset(), employee)
    crud.update_asset(db, "A-100", make_asset(status="In Repair"), employee)

    assert crud.get_asset_by_tag(db, "A-100").status == "In Repair"


def test_update_validation_failure_leaves_record_untouched(db, make_asset, employee):
    crud.create_asset(db, make_asset(), employee)

    with pytest.raises(InvalidArgumentError):
        crud.update_asset(db, "A-100", make_asset(status="Broken", vendor="X"), employee)
    with pytest.raises(InvalidArgumentError):
        crud.update_asset(db, "A-100", make_asset(repair_cost=-0.01), employee)

    current = crud.get_asset_by_tag(db, "A-100")
    assert current.status == "Pending"
    assert current.vendor == "Lenovo Service"
    assert len(crud.get_audit_trail(db, "A-100")) == 1


def test_any_status_may_follow_any_other(db, make_asset, employee):
    crud.create_asset(db, make_asset(status="EOL (End of Life)"), employee)
    crud.update_asset(db, "A-100", make_asset(status="Pending"), employee)

    assert crud.get_asset_by_tag(db, "A-100").status == "Pending"


def test_row_vanishing_mid_write_reports_not_found(db):
    with pytest.raises(NotFoundError):
        with crud.unit_of_work(db, "A-100"):
            raise StaleDataError("UPDATE statement expected to update 1 row(s); 0 were matched")


def test_update_of_row_deleted_before_flush_is_not_found(db, make_asset, employee):
    crud.create_asset(db, make_asset(), employee)

    def delete_behind_our_back(session, flush_context, instances):
        session.connection().execute(
            text("DELETE FROM faulty_assets WHERE asset_tag = :tag"), {"tag": "A-100"})

    event.listen(db, "before_flush", delete_behind_our_back)
    try:
        with pytest.raises(NotFoundError):
            crud.update_asset(db, "A-100", make_asset(status="In Repair"), employee)
    finally:
        event.remove(db, "before_flush", delete_behind_our_back)

    assert db.query(AuditLog).count() == 1
    assert crud.get_asset_by_tag(db, "A-100").status == "Pending"


def test_unique_index_hit_at_write_is_conflict(db, make_asset, employee, monkeypatch):
    crud.create_asset(db, make_asset(), employee)
    # another writer inserted the same keys after our uniqueness check
    monkeypatch.setattr(crud, "ensure_unique_keys", lambda *args, **kwargs: None)

    with pytest.raises(ConflictError):
        crud.create_asset(db, make_asset(), employee)

    assert db.query(FaultyAsset).count() == 1
    assert db.query(AuditLog).count() == 1


@pytest.mark.parametrize("tag", ["stats", "search", "Stats"])
def test_route_segment_tags_are_rejected(db, make_asset, employee, tag):
    with pytest.raises(InvalidArgumentError):
        crud.create_asset(db, make_asset(asset_tag=tag), employee)


def test_mutation_log_uses_audit_user_name(db, make_asset, caplog):
    nameless = UserToken(user_id="9", name="", roles=["Employee"])
    caplog.set_level(logging.INFO, logger=crud.logger.name)

    crud.create_asset(db, make_asset(), nameless)
    crud.update_asset(db, "A-100", make_asset(status="In Repair"), None)

    messages = [record.getMessage() for record in caplog.records]
    assert "Asset A-100 (serial SN-1001) created by unknown" in messages
    assert "Asset A-100 updated by system (now A-100)" in messages


# ----------------------------------------------------------------------
# delete
# ----------------------------------------------------------------------

def test_delete_requires_admin(db, make_asset, employee):
    crud.create_asset(db, make_asset(), employee)

    with pytest.raises(ForbiddenError):
        crud.delete_asset(db, "A-100", employee)
    with pytest.raises(UnauthorizedError):
        crud.delete_asset(db, "A-100", None)
    assert db.query(FaultyAsset).count() == 1


def test_delete_keeps_audit_with_captured_serial(db, make_asset, employee, admin):
    created = crud.create_asset(db, make_asset(), employee)

    crud.delete_asset(db, "A-100", admin)

    assert db.query(FaultyAsset).count() == 0
    entries = db.query(AuditLog).filter(AuditLog.asset_id == created.id).order_by(AuditLog.id).all()
    assert [e.action for e in entries] == ["created asset SN-1001", "deleted asset SN-1001"]
    assert entries[-1].user == "admin@example.com"


def test_delete_twice_is_not_found_the_second_time(db, make_asset, employee, admin):
    crud.create_asset(db, make_asset(), employee)

    crud.delete_asset(db, "A-100", admin)
    with pytest.raises(NotFoundError):
        crud.delete_asset(db, "A-100", admin)


def test_new_asset_never_inherits_a_deleted_assets_history(db, make_asset, employee, admin):
    deleted = crud.create_asset(db, make_asset(), employee)
    crud.delete_asset(db, "A-100", admin)

    created = crud.create_asset(db, make_asset(asset_tag="B-200", serial_no="SN-2000"), employee)

    assert created.id != deleted.id
    trail = crud.get_audit_trail(db, "B-200")
    assert [entry.action for entry in trail] == ["created asset SN-2000"]

# app/crud/faulty_assets_crud.py
import logging
from contextlib import contextmanager
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from shared.core.auth import ensure_role
from shared.core.schemas import UserToken
from shared.helpers.exceptions import ConflictError, InvalidArgumentError, NotFoundError
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserRole
from ..enum.faulty_assets_enum import FaultyAssetStatus
from ..models.faulty_assets import FaultyAsset
from ..schemas.audit_logs_schemas import AuditLogOut
from ..schemas.faulty_assets_schemas import FaultyAssetBase, FaultyAssetOut
from .audit_logs_crud import (
    AuditSink,
    SqlAlchemyAuditSink,
    get_audit_logs_for_asset,
    latest_audit_subquery,
    principal_name,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = {
    "category": "category",
    "asset_name": "assetName",
    "ticket_id": "ticketId",
    "serial_no": "serialNo",
    "asset_tag": "assetTag",
    "branch": "branch",
    "date_received": "dateReceived",
    "received_by": "receivedBy",
    "vendor": "vendor",
    "fault_reported": "faultReported",
}

CENTS = Decimal("0.01")

# Path segments the router serves ahead of /{asset_tag}
RESERVED_TAGS = {"stats", "search"}


# ----------------------------------------------------------------------
# HELPERS
# ----------------------------------------------------------------------

def clean_asset_values(asset: FaultyAssetBase) -> dict:
    values = asset.model_dump()
    for field, value in values.items():
        if isinstance(value, str):
            values[field] = value.strip()
    return values


def validate_asset_values(values: dict):
    missing = [
        label for field, label in REQUIRED_FIELDS.items()
        if values.get(field) is None or (isinstance(values.get(field), str) and not values.get(field))
    ]
    if missing:
        raise InvalidArgumentError(
            f"Required fields cannot be empty: {', '.join(missing)}",
            AppStatusCode.REQUIRED_VALIDATION_ERROR
        )

    if values["asset_tag"].lower() in RESERVED_TAGS:
        raise InvalidArgumentError(
            f"Asset tag '{values['asset_tag']}' is reserved")

    if values.get("status") not in FaultyAssetStatus.values():
        raise InvalidArgumentError(
            f"Status must be one of: {', '.join(FaultyAssetStatus.values())}")

    repair_cost = values.get("repair_cost")
    if repair_cost is not None:
        repair_cost = Decimal(str(repair_cost))
        if not repair_cost.is_finite():
            raise InvalidArgumentError("Repair cost must be a number.")
        if repair_cost < 0:
            raise InvalidArgumentError("Repair cost cannot be negative.")
        values["repair_cost"] = repair_cost.quantize(CENTS)

    return values


def ensure_unique_keys(db: Session, values: dict, exclude_id: Optional[int] = None):
    filters = [or_(
        FaultyAsset.serial_no == values["serial_no"],
        FaultyAsset.asset_tag == values["asset_tag"]
    )]
    if exclude_id is not None:
        filters.append(FaultyAsset.id != exclude_id)

    existing = db.query(FaultyAsset).filter(*filters).first()
    if not existing:
        return

    if existing.serial_no == values["serial_no"]:
        raise ConflictError(
            f"Asset with serial number '{values['serial_no']}' already exists")

    raise ConflictError(
        f"Asset with tag '{values['asset_tag']}' already exists")


@contextmanager
def unit_of_work(db: Session, asset_tag: str):
    """Commit everything staged in the block as one transaction."""
    try:
        yield
        db.commit()
    except StaleDataError:
        # Row disappeared between read and write
        db.rollback()
        logger.warning("Asset %s vanished during update", asset_tag)
        raise NotFoundError(f"Asset with tag '{asset_tag}' not found")
    except IntegrityError:
        db.rollback()
        logger.warning("Unique constraint hit while writing asset %s", asset_tag)
        raise ConflictError(
            "An asset with the same tag or serial number already exists")
    except Exception:
        db.rollback()
        raise


def to_asset_out(asset: FaultyAsset, last_modified_by=None, last_modified_at=None) -> FaultyAssetOut:
    return FaultyAssetOut.model_validate({
        **asset.__dict__,
        "repair_cost": float(asset.repair_cost) if asset.repair_cost is not None else None,
        "last_modified_by": last_modified_by,
        "last_modified_at": last_modified_at
    })


def get_assets_query(db: Session):
    latest = latest_audit_subquery(db)
    return db.query(
        FaultyAsset,
        latest.c.last_modified_by,
        latest.c.last_modified_at
    ).outerjoin(latest, latest.c.asset_id == FaultyAsset.id)


def find_asset_by_tag(db: Session, asset_tag: str) -> Optional[FaultyAsset]:
    return db.query(FaultyAsset).filter(FaultyAsset.asset_tag == asset_tag).first()


# ----------------------------------------------------------------------
# QUERIES
# ----------------------------------------------------------------------

def get_assets(db: Session) -> List[FaultyAssetOut]:
    rows = get_assets_query(db).order_by(FaultyAsset.id.asc()).all()
    return [to_asset_out(*row) for row in rows]


def get_asset_by_tag(db: Session, asset_tag: str) -> FaultyAssetOut:
    row = get_assets_query(db).filter(
        FaultyAsset.asset_tag == asset_tag).first()
    if not row:
        raise NotFoundError(f"Asset with tag '{asset_tag}' not found")
    return to_asset_out(*row)


def search_assets(db: Session, asset_tag: Optional[str]) -> List[FaultyAssetOut]:
    term = (asset_tag or "").strip()
    if not term:
        raise InvalidArgumentError("Search term 'assetTag' is required")

    rows = (
        get_assets_query(db)
        .filter(func.lower(FaultyAsset.asset_tag).contains(term.lower(), autoescape=True))
        .order_by(FaultyAsset.id.asc())
        .all()
    )
    return [to_asset_out(*row) for row in rows]


def get_audit_trail(db: Session, asset_tag: str) -> List[AuditLogOut]:
    asset = find_asset_by_tag(db, asset_tag)
    if not asset:
        raise NotFoundError(f"Asset with tag '{asset_tag}' not found")

    return [AuditLogOut.model_validate(log) for log in get_audit_logs_for_asset(db, asset.id)]


# ----------------------------------------------------------------------
# MUTATIONS
# ----------------------------------------------------------------------

def create_asset(
        db: Session,
        asset: FaultyAssetBase,
        principal: Optional[UserToken],
        audit: Optional[AuditSink] = None) -> FaultyAssetOut:
    audit = audit or SqlAlchemyAuditSink(db)

    values = validate_asset_values(clean_asset_values(asset))
    ensure_unique_keys(db, values)

    with unit_of_work(db, values["asset_tag"]):
        db_asset = FaultyAsset(**values)
        db.add(db_asset)
        db.flush()  # assigns id for the audit row
        audit.record(db_asset.id,
                     f"created asset {db_asset.serial_no}", principal)

    logger.info("Asset %s (serial %s) created by %s", values["asset_tag"],
                values["serial_no"], principal_name(principal))
    return get_asset_by_tag(db, values["asset_tag"])


def update_asset(
        db: Session,
        asset_tag: str,
        asset: FaultyAssetBase,
        principal: Optional[UserToken],
        audit: Optional[AuditSink] = None) -> None:
    audit = audit or SqlAlchemyAuditSink(db)

    with unit_of_work(db, asset_tag):
        # FOR UPDATE where the backend supports it; last write wins otherwise
        db_asset = (
            db.query(FaultyAsset)
            .filter(FaultyAsset.asset_tag == asset_tag)
            .with_for_update()
            .first()
        )
        if not db_asset:
            raise NotFoundError(f"Asset with tag '{asset_tag}' not found")

        values = validate_asset_values(clean_asset_values(asset))
        ensure_unique_keys(db, values, exclude_id=db_asset.id)

        for field, value in values.items():
            setattr(db_asset, field, value)
        db.flush()

        audit.record(db_asset.id,
                     f"updated asset {values['asset_tag']}", principal)

    logger.info("Asset %s updated by %s (now %s)", asset_tag,
                principal_name(principal), values["asset_tag"])


def delete_asset(
        db: Session,
        asset_tag: str,
        principal: Optional[UserToken],
        audit: Optional[AuditSink] = None) -> None:
    ensure_role(principal, UserRole.ADMIN)
    audit = audit or SqlAlchemyAuditSink(db)

    with unit_of_work(db, asset_tag):
        db_asset = find_asset_by_tag(db, asset_tag)
        if not db_asset:
            raise NotFoundError(f"Asset with tag '{asset_tag}' not found")

        # captured first: the audit row outlives the asset
        asset_id = db_asset.id
        serial_no = db_asset.serial_no

        db.delete(db_asset)
        db.flush()
        audit.record(asset_id, f"deleted asset {serial_no}", principal)

    logger.info("Asset %s (serial %s) deleted by %s",
                asset_tag, serial_no, principal_name(principal))

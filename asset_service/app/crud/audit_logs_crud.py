# app/crud/audit_logs_crud.py
"""
Audit trail for faulty assets.

Entries are append-only. Writers go through an ``AuditSink`` so the asset
service never touches the audit table directly; readers project the newest
entry per asset into the "last modified by/at" fields.
"""
import logging
from typing import List, Optional, Protocol

from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.core.schemas import UserToken
from ..models.audit_logs import AuditLog, utc_now

logger = logging.getLogger(__name__)

SYSTEM_USER = "system"
UNKNOWN_USER = "unknown"


def principal_name(principal: Optional[UserToken]) -> str:
    if principal is None:
        return SYSTEM_USER
    name = (principal.name or "").strip()
    return name or UNKNOWN_USER


class AuditSink(Protocol):
    def record(self, asset_id: int, action: str, principal: Optional[UserToken]) -> None:
        ...


class SqlAlchemyAuditSink:
    """Stages audit rows on the caller's session.

    Nothing is committed here: the row lands in the same transaction as the
    asset mutation it describes.
    """

    def __init__(self, db: Session):
        self.db = db

    def record(self, asset_id: int, action: str, principal: Optional[UserToken]) -> None:
        entry = AuditLog(
            asset_id=asset_id,
            action=action,
            user=principal_name(principal),
            timestamp=utc_now()
        )
        self.db.add(entry)
        logger.debug("Audit staged for asset %s: %s", asset_id, action)


# ----------------------------------------------------------------------
# READ SIDE
# ----------------------------------------------------------------------

def latest_audit_subquery(db: Session):
    """Newest audit row per asset: timestamp desc, ties on highest id."""
    ranked = db.query(
        AuditLog.asset_id.label("asset_id"),
        AuditLog.user.label("last_modified_by"),
        AuditLog.timestamp.label("last_modified_at"),
        func.row_number().over(
            partition_by=AuditLog.asset_id,
            order_by=[AuditLog.timestamp.desc(), AuditLog.id.desc()]
        ).label("rn")
    ).subquery()

    return db.query(
        ranked.c.asset_id,
        ranked.c.last_modified_by,
        ranked.c.last_modified_at
    ).filter(ranked.c.rn == 1).subquery()


def get_audit_logs_for_asset(db: Session, asset_id: int) -> List[AuditLog]:
    return (
        db.query(AuditLog)
        .filter(AuditLog.asset_id == asset_id)
        .order_by(AuditLog.timestamp.desc(), AuditLog.id.desc())
        .all()
    )

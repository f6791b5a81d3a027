# app/models/audit_logs.py
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, Index, Integer, String
from shared.core.database import Base


def utc_now() -> datetime:
    # stored naive, always UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class AuditLog(Base):
    __tablename__ = "audit_logs"
    __table_args__ = (
        Index('ix_audit_logs_asset_id_timestamp', 'asset_id', 'timestamp'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    # No foreign key: entries outlive the asset they describe
    asset_id = Column(Integer, nullable=False)
    action = Column(String(512), nullable=False)
    user = Column(String(256), nullable=True)
    timestamp = Column(DateTime, nullable=False, default=utc_now)

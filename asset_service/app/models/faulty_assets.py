# app/models/faulty_assets.py
from sqlalchemy import Column, DateTime, Integer, Numeric, String, Text, UniqueConstraint
from shared.core.database import Base

from ..enum.faulty_assets_enum import FaultyAssetStatus


class FaultyAsset(Base):
    __tablename__ = "faulty_assets"
    __table_args__ = (
        UniqueConstraint('asset_tag', name='uix_faulty_assets_asset_tag'),
        UniqueConstraint('serial_no', name='uix_faulty_assets_serial_no'),
        {'sqlite_autoincrement': True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    category = Column(String(100), nullable=False)
    asset_name = Column(String(200), nullable=False)
    ticket_id = Column(String(64), nullable=False)
    serial_no = Column(String(128), nullable=False)
    asset_tag = Column(String(64), nullable=False)
    branch = Column(String(128), nullable=False)
    date_received = Column(DateTime, nullable=False)
    received_by = Column(String(128), nullable=False)
    vendor = Column(String(128), nullable=False)
    fault_reported = Column(Text, nullable=False)
    vendor_pickup_date = Column(DateTime, nullable=True)
    repair_cost = Column(Numeric(18, 2), nullable=True)
    status = Column(String(64), nullable=False,
                    default=FaultyAssetStatus.pending.value)

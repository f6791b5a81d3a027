# app/schemas/faulty_assets_schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Optional

from shared.core.schemas import CamelModel


class FaultyAssetBase(CamelModel):
    category: str
    asset_name: str
    ticket_id: str
    serial_no: str
    asset_tag: str
    branch: str
    date_received: datetime
    received_by: str
    vendor: str
    fault_reported: str
    vendor_pickup_date: Optional[datetime] = None
    repair_cost: Optional[Decimal] = None
    status: str


class FaultyAssetCreate(FaultyAssetBase):
    pass


class FaultyAssetUpdate(FaultyAssetBase):
    """Full replacement of every editable field."""
    pass


class FaultyAssetOut(CamelModel):
    id: int
    category: str
    asset_name: str
    ticket_id: str
    serial_no: str
    asset_tag: str
    branch: str
    date_received: datetime
    received_by: str
    vendor: str
    fault_reported: str
    vendor_pickup_date: Optional[datetime] = None
    repair_cost: Optional[float] = None
    status: str
    last_modified_by: Optional[str] = None
    last_modified_at: Optional[datetime] = None

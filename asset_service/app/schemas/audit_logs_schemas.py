from datetime import datetime
from typing import Optional

from shared.core.schemas import CamelModel


class AuditLogOut(CamelModel):
    id: int
    asset_id: int
    action: str
    user: Optional[str] = None
    timestamp: datetime

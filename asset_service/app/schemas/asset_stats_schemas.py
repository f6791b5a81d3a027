from typing import Dict

from shared.core.schemas import CamelModel


class AssetStatsOut(CamelModel):
    total_assets: int
    pending: int
    in_repair: int
    repaired: int
    eol: int
    fixed_and_dispatched: int
    dispatched_to_vendor: int
    # keyed by the display value, e.g. "In Repair"
    by_status: Dict[str, int]
    total_repair_cost: float

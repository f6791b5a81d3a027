from sqlalchemy import func
from sqlalchemy.orm import Session

from ...enum.faulty_assets_enum import FaultyAssetStatus
from ...models.faulty_assets import FaultyAsset
from ...schemas.asset_stats_schemas import AssetStatsOut


def get_asset_stats(db: Session) -> AssetStatsOut:
    status_counts = dict(
        db.query(FaultyAsset.status, func.count(FaultyAsset.id))
        .group_by(FaultyAsset.status)
        .all()
    )

    # every known status appears, even with zero assets
    by_status = {
        status.value: int(status_counts.get(status.value, 0))
        for status in FaultyAssetStatus
    }

    totals = db.query(
        func.count(FaultyAsset.id).label("total_assets"),
        func.coalesce(func.sum(FaultyAsset.repair_cost), 0).label("total_cost")
    ).one()

    return AssetStatsOut(
        total_assets=int(totals.total_assets or 0),
        pending=by_status[FaultyAssetStatus.pending.value],
        in_repair=by_status[FaultyAssetStatus.in_repair.value],
        repaired=by_status[FaultyAssetStatus.repaired.value],
        eol=by_status[FaultyAssetStatus.eol.value],
        fixed_and_dispatched=by_status[FaultyAssetStatus.fixed_and_dispatched.value],
        dispatched_to_vendor=by_status[FaultyAssetStatus.dispatched_to_vendor.value],
        by_status=by_status,
        total_repair_cost=float(totals.total_cost or 0)
    )

# app/router/faulty_assets_router.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from shared.core.auth import require_roles, validate_current_token
from shared.core.database import get_asset_db as get_db
from shared.core.schemas import JsonOutResult, UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserRole
from ..crud import faulty_assets_crud as crud
from ..crud.overview import asset_stats_crud
from ..schemas.asset_stats_schemas import AssetStatsOut
from ..schemas.audit_logs_schemas import AuditLogOut
from ..schemas.faulty_assets_schemas import FaultyAssetCreate, FaultyAssetOut, FaultyAssetUpdate

router = APIRouter(
    prefix="/api/assets",
    tags=["faulty assets"],
    dependencies=[Depends(validate_current_token)]
)

# -----------------------------------------------------------------
@router.get("", response_model=JsonOutResult[List[FaultyAssetOut]])
def get_assets(db: Session = Depends(get_db)):
    return success_response(data=crud.get_assets(db))


@router.get("/stats", response_model=JsonOutResult[AssetStatsOut])
def get_asset_stats(db: Session = Depends(get_db)):
    return success_response(data=asset_stats_crud.get_asset_stats(db))


@router.get("/search", response_model=JsonOutResult[List[FaultyAssetOut]])
def search_assets(
        asset_tag: Optional[str] = Query(None, alias="assetTag"),
        db: Session = Depends(get_db)):
    return success_response(data=crud.search_assets(db, asset_tag))


@router.get("/{asset_tag}", response_model=JsonOutResult[FaultyAssetOut])
def get_asset(asset_tag: str, db: Session = Depends(get_db)):
    return success_response(data=crud.get_asset_by_tag(db, asset_tag))


@router.get("/{asset_tag}/audit", response_model=JsonOutResult[List[AuditLogOut]])
def get_audit_trail(asset_tag: str, db: Session = Depends(get_db)):
    return success_response(data=crud.get_audit_trail(db, asset_tag))


@router.post("", response_model=JsonOutResult[FaultyAssetOut], status_code=status.HTTP_201_CREATED)
def create_asset(
        asset: FaultyAssetCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(require_roles(UserRole.ADMIN, UserRole.EMPLOYEE))):
    result = crud.create_asset(db, asset, current_user)
    return success_response(
        data=result,
        message="Asset created successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY
    )


@router.put("/{asset_tag}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def update_asset(
        asset_tag: str,
        asset: FaultyAssetUpdate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(require_roles(UserRole.ADMIN, UserRole.EMPLOYEE))):
    crud.update_asset(db, asset_tag, asset, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{asset_tag}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_asset(
        asset_tag: str,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(require_roles(UserRole.ADMIN))):
    crud.delete_asset(db, asset_tag, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

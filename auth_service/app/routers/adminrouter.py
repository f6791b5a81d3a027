from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from shared.core.auth import require_roles
from shared.core.database import get_auth_db as get_db
from shared.core.schemas import JsonOutResult
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserRole
from ..schemas.userschema import UserOut
from ..services import userservices

router = APIRouter(
    prefix="/api/admin",
    tags=["Admin"],
    dependencies=[Depends(require_roles(UserRole.ADMIN))]
)


@router.post("/create-user", response_model=JsonOutResult[UserOut], status_code=status.HTTP_201_CREATED)
def create_user(
        email: str,
        password: str,
        role: Optional[str] = None,
        db: Session = Depends(get_db)):
    return success_response(
        data=userservices.create_user(db, email, password, role),
        message="User created.",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY
    )


@router.get("/users", response_model=JsonOutResult[List[str]])
def get_users(db: Session = Depends(get_db)):
    return success_response(data=userservices.get_usernames(db))

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from shared.core.auth import require_roles
from shared.core.database import get_auth_db as get_db
from shared.core.schemas import JsonOutResult, UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.enums import UserRole
from ..schemas import authchemas
from ..services import authservices

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", response_model=JsonOutResult[authchemas.LoginResponse])
def login(
        email: str,
        password: str,
        db: Session = Depends(get_db)):
    return success_response(data=authservices.login(db, email, password), message="Login successful")


@router.put("/change-name", response_model=JsonOutResult[authchemas.ChangeNameResponse])
def change_name(
        request: authchemas.ChangeNameRequest,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(require_roles(UserRole.ADMIN, UserRole.EMPLOYEE))):
    return success_response(
        data=authservices.change_name(db, current_user, request),
        message="Name updated"
    )

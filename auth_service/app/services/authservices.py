import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shared.core import auth
from shared.core.schemas import UserToken
from shared.helpers.exceptions import InvalidArgumentError, UnauthorizedError
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserStatus
from ..models.users import Users
from ..schemas import authchemas
from . import userservices

logger = logging.getLogger(__name__)


def issue_token(user: Users) -> str:
    return auth.create_access_token(
        user.id, user.username or user.email, user.role_names)


def login(db: Session, email: str, password: str) -> authchemas.LoginResponse:
    user = userservices.get_user_by_email(db, email)

    if not user or not password or not user.verify_password(password):
        logger.warning("Failed login for %s", email)
        raise UnauthorizedError(
            "Invalid credentials", AppStatusCode.AUTHENTICATION_CREDENTIALS_INVALID)

    if user.status.lower() != UserStatus.ACTIVE.value:
        raise UnauthorizedError(
            "User is not active. Access denied", AppStatusCode.AUTHENTICATION_USER_INVALID)

    return authchemas.LoginResponse(token=issue_token(user))


def change_name(
        db: Session,
        current_user: UserToken,
        request: authchemas.ChangeNameRequest) -> authchemas.ChangeNameResponse:
    new_name = (request.new_name or "").strip()
    if not new_name:
        raise InvalidArgumentError(
            "name cannot be empty.", AppStatusCode.REQUIRED_VALIDATION_ERROR)

    user = userservices.get_user_by_id(db, current_user.user_id)
    if not user:
        raise UnauthorizedError(
            "user not found.", AppStatusCode.AUTHENTICATION_USER_INVALID)

    existing = db.query(Users).filter(Users.username == new_name).first()
    if existing and existing.id != user.id:
        raise InvalidArgumentError(
            "name already exists.", AppStatusCode.USER_USERNAME_IS_UNIQUE)

    old_name = user.username
    user.username = new_name
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise InvalidArgumentError(
            "name already exists.", AppStatusCode.USER_USERNAME_IS_UNIQUE)
    db.refresh(user)

    logger.info("User %s renamed to %s", old_name, new_name)
    return authchemas.ChangeNameResponse(
        token=issue_token(user),
        display_name=user.username
    )

import logging
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shared.helpers.exceptions import InvalidArgumentError
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserRole
from ..models.roles import Roles
from ..models.users import Users
from ..schemas.userschema import UserOut

logger = logging.getLogger(__name__)


def get_user_by_id(db: Session, user_id) -> Optional[Users]:
    try:
        user_id = int(user_id)
    except (TypeError, ValueError):
        return None
    return db.query(Users).filter(Users.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[Users]:
    return db.query(Users).filter(
        func.lower(Users.email) == (email or "").strip().lower()).first()


def get_role(db: Session, role_name: str) -> Optional[Roles]:
    return db.query(Roles).filter(
        func.lower(Roles.name) == role_name.lower()).first()


def seed_roles(db: Session):
    for role in UserRole:
        if not get_role(db, role.value):
            db.add(Roles(name=role.value))
            logger.info("Seeded role %s", role.value)
    db.commit()


def create_user(db: Session, email: str, password: str, role: Optional[str] = None) -> UserOut:
    email = (email or "").strip()
    if not email or not password:
        raise InvalidArgumentError(
            "Email and password are required.",
            AppStatusCode.REQUIRED_VALIDATION_ERROR
        )

    role_name = (role or UserRole.EMPLOYEE.value).strip()
    role_obj = get_role(db, role_name)
    if not role_obj:
        raise InvalidArgumentError(f"Role '{role_name}' not found")

    if get_user_by_email(db, email) or db.query(Users).filter(Users.username == email).first():
        raise InvalidArgumentError(
            f"Email '{email}' is already registered.",
            AppStatusCode.USER_USERNAME_IS_UNIQUE
        )

    user = Users(username=email, email=email)
    user.set_password(password)
    user.roles.append(role_obj)
    db.add(user)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise InvalidArgumentError(
            f"Email '{email}' is already registered.",
            AppStatusCode.USER_USERNAME_IS_UNIQUE
        )
    db.refresh(user)

    logger.info("User %s created with role %s", email, role_obj.name)
    return to_user_out(user)


def ensure_admin_user(db: Session, email: Optional[str], password: Optional[str]):
    """Create the bootstrap admin once; later startups leave it alone."""
    if not email or not password:
        return None
    if get_user_by_email(db, email):
        return None
    return create_user(db, email, password, UserRole.ADMIN.value)


def get_usernames(db: Session) -> List[str]:
    return [row.username for row in db.query(Users.username).order_by(Users.username).all()]


def to_user_out(user: Users) -> UserOut:
    return UserOut(
        id=user.id,
        username=user.username,
        email=user.email,
        status=user.status,
        roles=user.role_names
    )

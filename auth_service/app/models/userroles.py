from sqlalchemy import Column, ForeignKey, Integer, UniqueConstraint
from shared.core.database import AuthBase


class UserRoles(AuthBase):
    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint(
        'user_id', 'role_id', name='uix_user_role'),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey(
        "users.id", ondelete="CASCADE"), nullable=False)
    role_id = Column(Integer, ForeignKey(
        "roles.id", ondelete="CASCADE"), nullable=False)

from passlib.context import CryptContext
from sqlalchemy import TIMESTAMP, Column, Integer, String, func
from sqlalchemy.orm import relationship
from shared.core.database import AuthBase
from shared.utils.enums import UserStatus

bcrypt_context = CryptContext(schemes=['bcrypt'], deprecated='auto')


class Users(AuthBase):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(256), unique=True, index=True, nullable=False)
    email = Column(String(256), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)
    status = Column(String(16), nullable=False,
                    default=UserStatus.ACTIVE.value)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    roles = relationship("Roles", secondary="user_roles",
                         back_populates="users")

    def set_password(self, password: str):
        self.password = bcrypt_context.hash(password)

    def verify_password(self, password: str) -> bool:
        return bcrypt_context.verify(password, self.password)

    @property
    def role_names(self):
        return [role.name for role in self.roles]

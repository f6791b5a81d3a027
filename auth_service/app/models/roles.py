from sqlalchemy import Column, Integer, String, Text
from shared.core.database import AuthBase
from sqlalchemy.orm import relationship


class Roles(AuthBase):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(64), unique=True, nullable=False)  # Admin, Employee
    description = Column(Text, nullable=True)

    users = relationship("Users", secondary="user_roles",
                         back_populates="roles")

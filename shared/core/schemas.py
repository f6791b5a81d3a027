from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Generic, List, Optional, TypeVar

# Shared properties
T = TypeVar("T")


class UserToken(BaseModel):
    """Authenticated caller decoded from a bearer token."""
    user_id: str
    name: Optional[str] = None
    roles: List[str] = []
    exp: Optional[int] = None

    def has_role(self, *roles: str) -> bool:
        wanted = {str(getattr(r, "value", r)).lower() for r in roles}
        return any(role.lower() in wanted for role in self.roles)


class CamelModel(BaseModel):
    # camelCase on the wire, snake_case accepted on input
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class JsonOutResult(BaseModel, Generic[T]):
    data: Optional[T] = None
    status: str
    status_code: str
    message: str

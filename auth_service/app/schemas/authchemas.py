from typing import Optional

from shared.core.schemas import CamelModel


class LoginResponse(CamelModel):
    token: str


class ChangeNameRequest(CamelModel):
    new_name: Optional[str] = None


class ChangeNameResponse(CamelModel):
    token: str
    display_name: str

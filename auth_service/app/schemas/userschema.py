from typing import List

from shared.core.schemas import CamelModel


class UserOut(CamelModel):
    id: int
    username: str
    email: str
    status: str
    roles: List[str] = []

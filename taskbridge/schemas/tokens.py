# taskbridge/schemas/tokens.py
from taskbridge.models.user import Role
from taskbridge.schemas.common import CamelModel
from taskbridge.schemas.user import UserOut


class Token(CamelModel):
    token: str
    token_type: str = "bearer"
    role: Role
    user: UserOut

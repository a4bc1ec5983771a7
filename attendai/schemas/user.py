# attendai/schemas/user.py
from datetime import datetime

from attendai.schemas.base import CamelModel


class UserRead(CamelModel):
    user_id: int
    name: str
    email: str
    created_at: datetime

# attendai/schemas/token.py

from typing import Optional
from pydantic import BaseModel

from attendai.schemas.user import UserRead


class Token(BaseModel):
    access_token: str
    token_type: str
    user: UserRead


class TokenData(BaseModel):
    email: Optional[str] = None
    user_id: Optional[int] = None

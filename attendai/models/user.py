from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime

from attendai.utils.time_utils import get_current_time


class User(SQLModel, table=True):
    user_id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100)
    email: str = Field(unique=True, index=True, max_length=255)
    password: str = Field()
    created_at: datetime = Field(default_factory=get_current_time)

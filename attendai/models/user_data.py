from sqlmodel import JSON, Column, SQLModel, Field
from typing import List
from datetime import datetime

from attendai.utils.time_utils import get_current_time


class UserData(SQLModel, table=True):
    """Per-user document holding the schedule and the attendance ledger as JSON."""

    __tablename__ = "user_data"

    user_id: int = Field(foreign_key="user.user_id", primary_key=True, ondelete="CASCADE")
    schedule: List[dict] = Field(default_factory=list, sa_column=Column(JSON))
    records: List[dict] = Field(default_factory=list, sa_column=Column(JSON))
    updated_at: datetime = Field(default_factory=get_current_time)

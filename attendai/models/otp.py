from sqlmodel import SQLModel, Field
from datetime import datetime


class OTPCode(SQLModel, table=True):
    __tablename__ = "otp_code"

    email: str = Field(primary_key=True, max_length=255)
    code: str = Field(max_length=6)
    expires_at: datetime = Field()
    failed_attempts: int = Field(default=0)

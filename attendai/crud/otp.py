from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Session

from attendai.models.otp import OTPCode


def save_otp(db: Session, email: str, code: str, expires_at: datetime) -> OTPCode:
    """Store a one-time code for an email, replacing any pending one."""
    db_otp = db.get(OTPCode, email.lower())
    if db_otp:
        db_otp.code = code
        db_otp.expires_at = expires_at
        db_otp.failed_attempts = 0
    else:
        db_otp = OTPCode(email=email.lower(), code=code, expires_at=expires_at)

    db.add(db_otp)
    db.commit()
    db.refresh(db_otp)
    return db_otp


def get_otp(db: Session, email: str) -> Optional[OTPCode]:
    db_otp = db.get(OTPCode, email.lower())
    # SQLite hands back naive datetimes
    if db_otp and db_otp.expires_at.tzinfo is None:
        db_otp.expires_at = db_otp.expires_at.replace(tzinfo=timezone.utc)
    return db_otp


def record_failed_attempt(db: Session, db_otp: OTPCode) -> int:
    """Count a wrong guess against a pending code and return the new total."""
    db_otp.failed_attempts += 1
    db.add(db_otp)
    db.commit()
    db.refresh(db_otp)
    return db_otp.failed_attempts


def delete_otp(db: Session, email: str) -> None:
    db_otp = db.get(OTPCode, email.lower())
    if db_otp:
        db.delete(db_otp)
        db.commit()

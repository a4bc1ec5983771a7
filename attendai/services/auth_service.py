import logging
import secrets
from datetime import timedelta
from typing import Tuple

from fastapi import HTTPException, status
from sqlmodel import Session

from attendai import config
from attendai.crud.otp import delete_otp, get_otp, record_failed_attempt, save_otp
from attendai.crud.user import create_user, get_user_by_email
from attendai.models.user import User
from attendai.schemas.auth import RegisterRequest
from attendai.utils.authentication import authenticate, create_access_token
from attendai.utils.time_utils import get_current_time

logger = logging.getLogger(__name__)


def issue_token(user: User) -> str:
    return create_access_token(
        data={"sub": user.email},
        expires_delta=timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES),
        user_id=user.user_id,
    )


def login_user(db: Session, email: str, password: str) -> Tuple[User, str]:
    """Check credentials and return the user with a fresh access token."""
    user = authenticate(db, email, password)
    return user, issue_token(user)


def send_otp(db: Session, email: str) -> None:
    """
    Issue a 6-digit registration code for an email address.

    Codes are delivered through the application log; a pending code for the
    same address is replaced.
    """
    if get_user_by_email(db, email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email is already registered",
        )

    code = f"{secrets.randbelow(10**6):06d}"
    expires_at = get_current_time() + timedelta(minutes=config.OTP_EXPIRE_MINUTES)
    save_otp(db, email, code, expires_at)

    logger.info(f"Registration code for {email}: {code}")


def register_user(db: Session, request: RegisterRequest) -> Tuple[User, str]:
    """Create an account after checking the one-time code sent to its email."""
    if get_user_by_email(db, request.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email is already registered",
        )

    otp = get_otp(db, request.email)
    if otp is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid verification code",
        )

    if otp.code != request.otp:
        # A code dies after OTP_MAX_ATTEMPTS wrong guesses
        if record_failed_attempt(db, otp) >= config.OTP_MAX_ATTEMPTS:
            delete_otp(db, request.email)
            logger.warning(f"Too many wrong codes for {request.email}, code revoked")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Too many attempts. Please request a new code",
            )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid verification code",
        )

    if otp.expires_at < get_current_time():
        delete_otp(db, request.email)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Verification code has expired",
        )

    user = create_user(db, name=request.name, email=request.email, password=request.password)
    delete_otp(db, request.email)
    logger.info(f"Registered user {user.user_id}")

    return user, issue_token(user)

from typing import Optional
from datetime import timedelta
from fastapi import HTTPException, status
from jose import jwt
from passlib.context import CryptContext
from sqlmodel import Session

from attendai.config import ALGORITHM, SECRET_KEY
from attendai.utils.time_utils import get_current_time

# Password hashing context
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Generate a password hash."""
    return pwd_context.hash(password)


def authenticate(db: Session, email: str, password: str):
    """
    Look up a user by email and check the password.
    Raises 401 when the account does not exist or the password is wrong.
    """
    # Import here to avoid circular imports
    from attendai.crud.user import get_user_by_email

    user = get_user_by_email(db, email)
    if user and verify_password(password, user.password):
        return user

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Incorrect email or password",
        headers={"WWW-Authenticate": "Bearer"},
    )


def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None,
    user_id: int = None,
):
    """Create a JWT access token carrying the user ID."""
    to_encode = data.copy()

    if expires_delta:
        expire = get_current_time() + expires_delta
    else:
        expire = get_current_time() + timedelta(minutes=15)

    to_encode.update({"exp": expire})
    if user_id:
        to_encode.update({"user_id": user_id})

    encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)

    return encoded_jwt

from typing import Generator
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session, SQLModel, create_engine
from jose import JWTError, jwt

from attendai import config
from attendai.crud.user import get_user_by_email
from attendai.models.user import User
from attendai.schemas.token import TokenData
from attendai.services.extraction_service import ScheduleExtractionService

connect_args = (
    {"check_same_thread": False} if config.DATABASE_URL.startswith("sqlite") else {}
)

# Create engine
engine = create_engine(
    config.DATABASE_URL,
    connect_args=connect_args,
    echo=config.SQL_ECHO,
)

# OAuth2 setup - Configure this to use the form token endpoint
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")


def create_db_and_tables():
    """Create database and tables if they don't exist"""
    # Register table models on the metadata
    import attendai.models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency for getting the database session."""
    with Session(engine) as session:
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


async def get_current_user(
    token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)
) -> User:
    """Get the authenticated user from the JWT bearer token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
        email: str = payload.get("sub")

        if email is None:
            raise credentials_exception

        token_data = TokenData(email=email, user_id=payload.get("user_id"))

    except JWTError:
        raise credentials_exception

    user = get_user_by_email(db, token_data.email)
    if user is None:
        raise credentials_exception

    return user


async def validate_user_self_access(
    user_id: int, current_user: User = Depends(get_current_user)
) -> User:
    """
    Dependency to validate that a user only touches their own data.

    Args:
        user_id: The ID in the request path
        current_user: The current authenticated user

    Returns:
        The user object if validation passes

    Raises:
        HTTPException if the path belongs to another user
    """
    if user_id != current_user.user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You don't have access to this user's data",
        )

    return current_user


def get_extraction_service() -> ScheduleExtractionService:
    return ScheduleExtractionService()

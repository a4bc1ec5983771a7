from typing import Optional

from sqlmodel import Session, select

from attendai.models.user import User
from attendai.models.user_data import UserData
from attendai.utils.authentication import get_password_hash
from attendai.utils.time_utils import get_current_time


def create_user(db: Session, name: str, email: str, password: str) -> User:
    """
    Create a new user account together with its empty data document.

    The password is stored hashed. The user and the data row are committed in
    one transaction so that every account always has a data document to merge
    into.

    Args:
        db (Session): Active database session for executing queries
        name (str): Display name
        email (str): Login email, unique across accounts
        password (str): Plain-text password

    Returns:
        User: Newly created user with generated ID
    """
    db_user = User(
        name=name,
        email=email.lower(),
        password=get_password_hash(password),
        created_at=get_current_time(),
    )
    db.add(db_user)
    db.flush()

    db.add(UserData(user_id=db_user.user_id, schedule=[], records=[]))
    db.commit()
    db.refresh(db_user)

    return db_user


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.exec(select(User).where(User.email == email.lower())).first()

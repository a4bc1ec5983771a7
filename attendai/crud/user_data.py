import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from attendai.exceptions import StorageError
from attendai.models.user_data import UserData
from attendai.schemas.data import UserDataRead, UserDataUpdate
from attendai.utils.time_utils import get_current_time

logger = logging.getLogger(__name__)


def _dump(items: List) -> List[dict]:
    return [item.model_dump(by_alias=True, mode="json") for item in items]


def get_user_data(db: Session, user_id: int) -> UserDataRead:
    """
    Load the schedule and attendance ledger stored for a user.

    A user that has never saved anything gets empty collections.

    Raises:
        StorageError: If the database could not be read
    """
    try:
        db_data = db.get(UserData, user_id)
    except SQLAlchemyError as e:
        logger.error(f"Failed to read data for user {user_id}: {e}")
        raise StorageError("Failed to fetch data") from e

    if db_data is None:
        return UserDataRead()

    return UserDataRead.model_validate(
        {"schedule": db_data.schedule or [], "records": db_data.records or []}
    )


def save_user_data(db: Session, user_id: int, update: UserDataUpdate) -> UserDataRead:
    """
    Merge new data into the stored document field by field.

    Each of ``schedule`` and ``records`` replaces the stored collection
    wholesale when given and keeps the stored one when omitted, so a client
    that only changed its ledger can never wipe its schedule.

    Args:
        db (Session): Active database session for executing queries
        user_id (int): Owner of the document
        update (UserDataUpdate): Collections to replace

    Returns:
        UserDataRead: The merged document as stored

    Raises:
        StorageError: If the database could not be written
    """
    existing = get_user_data(db, user_id)

    merged = UserDataRead(
        schedule=update.schedule if update.schedule is not None else existing.schedule,
        records=update.records if update.records is not None else existing.records,
    )

    try:
        db_data = db.get(UserData, user_id)
        if db_data is None:
            db_data = UserData(user_id=user_id)

        db_data.schedule = _dump(merged.schedule)
        db_data.records = _dump(merged.records)
        db_data.updated_at = get_current_time()

        db.add(db_data)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to save data for user {user_id}: {e}")
        raise StorageError("Failed to save data") from e

    return merged


def clear_user_data(db: Session, user_id: int) -> UserDataRead:
    return save_user_data(db, user_id, UserDataUpdate(schedule=[], records=[]))

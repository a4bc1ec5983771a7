from fastapi import APIRouter, Depends
from sqlmodel import Session

from attendai.crud.user_data import clear_user_data, get_user_data, save_user_data
from attendai.dependencies import get_db, validate_user_self_access
from attendai.schemas.data import UserDataRead, UserDataSaveResponse, UserDataUpdate

# Access Control: the authenticated user only
# Storage failures surface as 500 through the StorageError handler in main.py

router = APIRouter(
    prefix="/api/data",
    tags=["data"],
)


@router.get("/{user_id}", response_model=UserDataRead)
def read_data_endpoint(
    user_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(validate_user_self_access),
):
    """
    Retrieve the stored schedule and attendance records of a user.
    Users that never saved anything get empty collections.
    """
    return get_user_data(db, user_id)


@router.post("/{user_id}", response_model=UserDataSaveResponse)
def save_data_endpoint(
    user_id: int,
    data: UserDataUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(validate_user_self_access),
):
    """
    Save a user's schedule and/or attendance records.

    Each field that is sent replaces the stored collection; a field that is
    omitted keeps its stored value, so partial updates never wipe the other
    collection. Returns the merged document.
    """
    merged = save_user_data(db, user_id, data)
    return {"success": True, "data": merged}


@router.delete("/{user_id}", response_model=UserDataSaveResponse)
def clear_data_endpoint(
    user_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(validate_user_self_access),
):
    """Clear the schedule and every attendance record of a user."""
    cleared = clear_user_data(db, user_id)
    return {"success": True, "data": cleared}

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from sqlmodel import Session

from attendai.crud.user_data import get_user_data, save_user_data
from attendai.dependencies import get_current_user, get_db, get_extraction_service
from attendai.models.user import User
from attendai.schemas.data import UserDataUpdate
from attendai.schemas.schedule import ScheduleItem, ScheduleItemCreate, WeekLayout
from attendai.services.calendar_layout import current_time_position, week_layout
from attendai.services.extraction_service import ScheduleExtractionService
from attendai.services.schedule_service import (
    classes_for_date,
    classes_for_day,
    delete_schedule_item,
    new_item_id,
    upsert_schedule_item,
)
from attendai.utils.file_management import validate_schedule_image
from attendai.utils.time_utils import get_current_date, get_current_time, normalize_day

# Access Control: the authenticated user manages only their own schedule

router = APIRouter(
    prefix="/api/schedule",
    tags=["schedule"],
    responses={404: {"description": "Not found"}},
)


@router.get("/", response_model=List[ScheduleItem])
def read_schedule_endpoint(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Retrieve every weekly class slot of the current user, in stored order."""
    return get_user_data(db, current_user.user_id).schedule


@router.put("/", response_model=List[ScheduleItem])
def replace_schedule_endpoint(
    schedule: List[ScheduleItem],
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Replace the whole schedule, e.g. with the result of an extraction."""
    data = save_user_data(db, current_user.user_id, UserDataUpdate(schedule=schedule))
    return data.schedule


@router.post("/items", response_model=ScheduleItem)
def save_schedule_item_endpoint(
    item: ScheduleItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Add a class slot or edit an existing one.

    Without an id a new slot is created. With an id the matching slot is
    overwritten in place; an unknown id is rejected with 404.
    """
    schedule = get_user_data(db, current_user.user_id).schedule

    if item.id is not None and not any(s.id == item.id for s in schedule):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Schedule item with ID {item.id} not found",
        )

    payload = item.model_dump(exclude={"id"})
    saved = ScheduleItem(id=item.id or new_item_id(), **payload)

    save_user_data(
        db,
        current_user.user_id,
        UserDataUpdate(schedule=upsert_schedule_item(schedule, saved)),
    )
    return saved


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_schedule_item_endpoint(
    item_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Delete a class slot.
    Attendance records already taken for it are kept.
    """
    schedule = get_user_data(db, current_user.user_id).schedule

    if not any(s.id == item_id for s in schedule):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Schedule item with ID {item_id} not found",
        )

    save_user_data(
        db,
        current_user.user_id,
        UserDataUpdate(schedule=delete_schedule_item(schedule, item_id)),
    )


@router.get("/day/{day}", response_model=List[ScheduleItem])
def read_day_endpoint(
    day: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Classes held on a weekday (any letter case), earliest first."""
    day_name = normalize_day(day)
    return classes_for_day(get_user_data(db, current_user.user_id).schedule, day_name)


@router.get("/today", response_model=List[ScheduleItem])
def read_today_endpoint(
    on: Optional[date] = None,
    tz: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Classes held on a calendar date.

    Without ``on`` the date is today in the caller's ``tz`` (an IANA zone
    name such as "Asia/Jakarta"), or in UTC when no zone is given.
    """
    schedule = get_user_data(db, current_user.user_id).schedule
    return classes_for_date(schedule, on or get_current_date(tz))


@router.get("/week", response_model=WeekLayout)
def read_week_endpoint(
    tz: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Weekly grid: every class with its offset and height, per day.
    The now-marker follows the caller's ``tz`` (UTC by default).
    """
    schedule = get_user_data(db, current_user.user_id).schedule
    return WeekLayout(
        days=week_layout(schedule),
        current_time_position=current_time_position(get_current_time(tz)),
    )


@router.post("/extract", response_model=List[ScheduleItem])
async def extract_schedule_endpoint(
    file: UploadFile = File(...),
    save: bool = Form(False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    extraction_service: ScheduleExtractionService = Depends(get_extraction_service),
):
    """
    Read a photo of a weekly timetable and return the classes found on it.

    The file must be an image of at most 5MB; it is checked before the
    extraction model is called. With ``save`` set, the extracted classes
    replace the stored schedule.
    """
    content = await file.read()
    validate_schedule_image(file.content_type, len(content))

    schedule = await run_in_threadpool(
        extraction_service.parse_schedule_image, content, file.content_type
    )

    if save:
        save_user_data(db, current_user.user_id, UserDataUpdate(schedule=schedule))

    return schedule

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import Session

from attendai.crud.user_data import get_user_data, save_user_data
from attendai.dependencies import get_current_user, get_db
from attendai.models.user import User
from attendai.schemas.attendance import (
    AttendanceMark,
    AttendanceRecord,
    AttendanceStatsRead,
    SubjectStats,
)
from attendai.schemas.data import UserDataUpdate
from attendai.services.attendance_service import (
    attendance_message,
    compute_overall_stats,
    delete_record,
    subject_stats,
    upsert_record,
)

router = APIRouter(
    prefix="/api/attendance",
    tags=["attendance"],
)


@router.get("/", response_model=List[AttendanceRecord])
def read_records_endpoint(
    on: Optional[date] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Retrieve attendance records, optionally only those of one date."""
    records = get_user_data(db, current_user.user_id).records
    if on is not None:
        records = [r for r in records if r.date == on]
    return records


@router.put("/", response_model=AttendanceRecord)
def mark_attendance_endpoint(
    mark: AttendanceMark,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Mark a class as present, absent, late, excused or cancelled on a date.
    A previous mark for the same class and date is replaced and keeps its id.
    """
    data = get_user_data(db, current_user.user_id)

    if not any(item.id == mark.schedule_item_id for item in data.schedule):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Schedule item with ID {mark.schedule_item_id} not found",
        )

    records = upsert_record(data.records, mark.schedule_item_id, mark.date, mark.status)
    save_user_data(db, current_user.user_id, UserDataUpdate(records=records))

    return records[-1]


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
def clear_attendance_endpoint(
    schedule_item_id: str = Query(..., alias="scheduleItemId"),
    on: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Remove the mark of a class on a date. Clearing an unmarked class does nothing."""
    records = get_user_data(db, current_user.user_id).records
    save_user_data(
        db,
        current_user.user_id,
        UserDataUpdate(records=delete_record(records, schedule_item_id, on)),
    )


@router.get("/stats", response_model=AttendanceStatsRead)
def read_stats_endpoint(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Overall attendance percentage and counts, with a short summary message."""
    stats = compute_overall_stats(get_user_data(db, current_user.user_id).records)
    return AttendanceStatsRead(**stats.model_dump(), message=attendance_message(stats))


@router.get("/stats/subjects", response_model=List[SubjectStats])
def read_subject_stats_endpoint(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    data = get_user_data(db, current_user.user_id)
    return subject_stats(data.schedule, data.records)

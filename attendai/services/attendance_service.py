import uuid
from collections import OrderedDict
from datetime import date
from typing import Dict, List, Optional, Sequence, Union

from attendai import config
from attendai.schemas.attendance import (
    ATTENDED_STATUSES,
    AttendanceRecord,
    AttendanceStatus,
    OverallStats,
    SubjectStats,
)
from attendai.schemas.schedule import ScheduleItem
from attendai.utils.time_utils import timestamp_ms


def _as_date(day: Union[date, str]) -> date:
    """Accept a `date` or an ISO calendar date string ("2024-01-01")."""
    if isinstance(day, str):
        return date.fromisoformat(day)
    return day


def _matches(record: AttendanceRecord, schedule_item_id: str, day: date) -> bool:
    return record.schedule_item_id == schedule_item_id and record.date == day


def find_record(
    records: Sequence[AttendanceRecord], schedule_item_id: str, day: Union[date, str]
) -> Optional[AttendanceRecord]:
    """Return the record marked for a class on a date, if any."""
    day = _as_date(day)
    for record in records:
        if _matches(record, schedule_item_id, day):
            return record
    return None


def upsert_record(
    records: Sequence[AttendanceRecord],
    schedule_item_id: str,
    day: Union[date, str],
    status: AttendanceStatus,
) -> List[AttendanceRecord]:
    """
    Set the status of a class on a date, replacing any previous mark.

    Every record for the (schedule_item_id, day) pair is dropped and a single
    new record is appended, so exactly one record for the pair survives. The
    id of the replaced record is kept so clients can keep tracking it.

    Args:
        records: Current attendance ledger (not modified)
        schedule_item_id: Id of the schedule item being marked
        day: Calendar date of the class, as a `date` or ISO string
        status: Status to record

    Returns:
        List[AttendanceRecord]: New ledger containing the updated record last
    """
    day = _as_date(day)
    previous = find_record(records, schedule_item_id, day)
    remaining = [r for r in records if not _matches(r, schedule_item_id, day)]

    new_record = AttendanceRecord(
        id=previous.id if previous else uuid.uuid4().hex,
        schedule_item_id=schedule_item_id,
        date=day,
        status=status,
        timestamp=timestamp_ms(),
    )
    return remaining + [new_record]


def delete_record(
    records: Sequence[AttendanceRecord], schedule_item_id: str, day: Union[date, str]
) -> List[AttendanceRecord]:
    """Remove the mark for a class on a date. Unknown pairs leave the ledger unchanged."""
    day = _as_date(day)
    return [r for r in records if not _matches(r, schedule_item_id, day)]


def compute_overall_stats(
    records: Sequence[AttendanceRecord], empty_percentage: Optional[float] = None
) -> OverallStats:
    """
    Aggregate an attendance ledger into totals and a percentage.

    Cancelled classes are counted separately and never affect the
    percentage. Present and late both count as attended; absent and excused
    count as missed.
    """
    if empty_percentage is None:
        empty_percentage = config.EMPTY_ATTENDANCE_PERCENTAGE

    active = [r for r in records if r.status != AttendanceStatus.CANCELLED]
    cancelled_classes = len(records) - len(active)

    total_classes = len(active)
    attended_classes = len([r for r in active if r.status in ATTENDED_STATUSES])

    if total_classes > 0:
        percentage = attended_classes / total_classes * 100
    else:
        percentage = empty_percentage

    return OverallStats(
        percentage=percentage,
        total_classes=total_classes,
        attended_classes=attended_classes,
        missed_classes=total_classes - attended_classes,
        cancelled_classes=cancelled_classes,
    )


def attendance_message(stats: OverallStats) -> str:
    if stats.total_classes == 0 and stats.cancelled_classes == 0:
        return "No data yet"
    if stats.percentage >= 90:
        return "Excellent! Keep it up!"
    if stats.percentage >= 75:
        return "Good job, you're on track."
    if stats.percentage >= 60:
        return "Attendance is slipping."
    return "You need to attend more classes."


def subject_stats(
    schedule: Sequence[ScheduleItem], records: Sequence[AttendanceRecord]
) -> List[SubjectStats]:
    """
    Break the ledger down per subject.

    Records are grouped through their schedule item, so two slots of the same
    subject share one entry. Records whose item was deleted are reported
    under "Unknown". Subjects keep the order in which they first appear in
    the schedule.
    """
    subject_by_item: Dict[str, str] = {item.id: item.subject for item in schedule}

    grouped: "OrderedDict[str, List[AttendanceRecord]]" = OrderedDict()
    for item in schedule:
        grouped.setdefault(item.subject, [])
    for record in records:
        subject = subject_by_item.get(record.schedule_item_id, "Unknown")
        grouped.setdefault(subject, []).append(record)

    return [
        SubjectStats(subject=subject, stats=compute_overall_stats(subject_records))
        for subject, subject_records in grouped.items()
    ]

import logging
from datetime import date
from typing import List, Optional, Union

from attendai.exceptions import AttendAIError, StorageError
from attendai.schemas.attendance import (
    AttendanceRecord,
    AttendanceStatus,
    OverallStats,
    SubjectStats,
)
from attendai.schemas.schedule import ScheduleItem
from attendai.schemas.user import UserRead
from attendai.services import attendance_service, schedule_service
from attendai.utils.time_utils import get_current_date

logger = logging.getLogger(__name__)


class UserSession:
    """
    In-memory working copy of one signed-in user's schedule and ledger.

    Create one with ``UserSession.open`` after login and call ``close`` at
    logout. Every change replaces the affected collection locally first and
    then writes it through the storage collaborator (LocalStorage or
    RemoteStorage). A failed write is logged and the local state is kept;
    nothing is retried or rolled back.
    """

    def __init__(self, user: UserRead, storage):
        self.user = user
        self.storage = storage
        self.schedule: List[ScheduleItem] = []
        self.records: List[AttendanceRecord] = []
        self.is_open = True

    @classmethod
    def open(cls, user: UserRead, storage) -> "UserSession":
        session = cls(user, storage)
        session.refresh()
        return session

    def close(self) -> None:
        """Drop the working copy and release the storage collaborator."""
        self.schedule = []
        self.records = []
        self.is_open = False
        self.storage.close()

    def _ensure_open(self) -> None:
        if not self.is_open:
            raise AttendAIError("Session is closed")

    def refresh(self) -> None:
        """Reload both collections from storage, keeping the current ones on failure."""
        self._ensure_open()
        try:
            self.schedule, self.records = self.storage.load()
        except StorageError as e:
            logger.error(f"Failed to load data for user {self.user.user_id}: {e}")

    def _save_schedule(self) -> None:
        try:
            self.storage.set_schedule(self.schedule)
        except StorageError as e:
            logger.error(f"Failed to save schedule for user {self.user.user_id}: {e}")

    def _save_records(self) -> None:
        try:
            self.storage.set_records(self.records)
        except StorageError as e:
            logger.error(f"Failed to save records for user {self.user.user_id}: {e}")

    # Attendance

    def mark_attendance(
        self, schedule_item_id: str, day: Union[date, str], status: AttendanceStatus
    ) -> AttendanceRecord:
        self._ensure_open()
        self.records = attendance_service.upsert_record(
            self.records, schedule_item_id, day, status
        )
        self._save_records()
        return self.records[-1]

    def clear_attendance(self, schedule_item_id: str, day: Union[date, str]) -> None:
        self._ensure_open()
        self.records = attendance_service.delete_record(self.records, schedule_item_id, day)
        self._save_records()

    def status_for(
        self, schedule_item_id: str, day: Union[date, str]
    ) -> Optional[AttendanceStatus]:
        record = attendance_service.find_record(self.records, schedule_item_id, day)
        return record.status if record else None

    def stats(self) -> OverallStats:
        return attendance_service.compute_overall_stats(self.records)

    def message(self) -> str:
        return attendance_service.attendance_message(self.stats())

    def subject_stats(self) -> List[SubjectStats]:
        return attendance_service.subject_stats(self.schedule, self.records)

    # Schedule

    def classes_for_day(self, day: str) -> List[ScheduleItem]:
        return schedule_service.classes_for_day(self.schedule, day)

    def todays_classes(self, today: Optional[date] = None) -> List[ScheduleItem]:
        return schedule_service.classes_for_date(self.schedule, today or get_current_date())

    def replace_schedule(self, schedule: List[ScheduleItem]) -> None:
        self._ensure_open()
        self.schedule = list(schedule)
        self._save_schedule()

    def save_item(self, item: ScheduleItem) -> None:
        self._ensure_open()
        self.schedule = schedule_service.upsert_schedule_item(self.schedule, item)
        self._save_schedule()

    def delete_item(self, item_id: str) -> None:
        self._ensure_open()
        self.schedule = schedule_service.delete_schedule_item(self.schedule, item_id)
        self._save_schedule()

    def reset(self) -> None:
        """Forget the whole schedule and ledger, locally and in storage."""
        self._ensure_open()
        self.schedule = []
        self.records = []
        try:
            self.storage.clear_all()
        except StorageError as e:
            logger.error(f"Failed to clear data for user {self.user.user_id}: {e}")

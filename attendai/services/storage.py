import json
import logging
import os
from typing import List, Optional, Tuple

import httpx
from pydantic import ValidationError as PydanticValidationError

from attendai.exceptions import StorageError
from attendai.schemas.attendance import AttendanceRecord
from attendai.schemas.data import UserDataRead
from attendai.schemas.schedule import ScheduleItem

logger = logging.getLogger(__name__)

SCHEDULE_KEY = "attendai_schedule"
RECORDS_KEY = "attendai_records"


def _dump(items) -> List[dict]:
    return [item.model_dump(by_alias=True, mode="json") for item in items]


class LocalStorage:
    """
    Keeps a user's schedule and ledger in one JSON file on this device.

    The file holds two keys, one per collection. A missing file or key reads
    as an empty collection.
    """

    def __init__(self, filepath: str):
        self.filepath = filepath

    def _read(self) -> dict:
        if not os.path.exists(self.filepath):
            return {}
        try:
            with open(self.filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable storage file {self.filepath}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        try:
            folder = os.path.dirname(self.filepath)
            if folder:
                os.makedirs(folder, exist_ok=True)
            with open(self.filepath, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=4)
        except OSError as e:
            raise StorageError(f"Failed to write {self.filepath}: {e}") from e

    def load(self) -> Tuple[List[ScheduleItem], List[AttendanceRecord]]:
        data = self._read()
        try:
            parsed = UserDataRead.model_validate(
                {
                    "schedule": data.get(SCHEDULE_KEY) or [],
                    "records": data.get(RECORDS_KEY) or [],
                }
            )
        except PydanticValidationError as e:
            raise StorageError(f"Stored data in {self.filepath} is invalid") from e
        return parsed.schedule, parsed.records

    def get_schedule(self) -> List[ScheduleItem]:
        return self.load()[0]

    def get_records(self) -> List[AttendanceRecord]:
        return self.load()[1]

    def set_schedule(self, schedule: List[ScheduleItem]) -> None:
        data = self._read()
        data[SCHEDULE_KEY] = _dump(schedule)
        self._write(data)

    def set_records(self, records: List[AttendanceRecord]) -> None:
        data = self._read()
        data[RECORDS_KEY] = _dump(records)
        self._write(data)

    def clear_all(self) -> None:
        data = self._read()
        data.pop(SCHEDULE_KEY, None)
        data.pop(RECORDS_KEY, None)
        self._write(data)

    def close(self) -> None:
        """Nothing to release, the file is opened per call."""


class RemoteStorage:
    """
    Reads and writes a user's data through the ``/api/data/{user_id}`` API.

    Writes send only the collection that changed; the server keeps the other
    one. Any transport or HTTP error is raised as StorageError.

    Args:
        user_id: Account whose data is accessed
        token: Bearer token of that account
        base_url: Backend address, used when no client is given
        client: Pre-configured httpx client (for example a FastAPI TestClient).
            A client passed in is left open by ``close``
    """

    def __init__(
        self,
        user_id: int,
        token: str,
        base_url: str = "http://localhost:8000",
        client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        self.user_id = user_id
        self._owns_client = client is None
        self.client = client or httpx.Client(base_url=base_url, timeout=timeout)
        self.headers = {"Authorization": f"Bearer {token}"}

    @property
    def url(self) -> str:
        return f"/api/data/{self.user_id}"

    def _request(self, method: str, json_body: Optional[dict] = None) -> UserDataRead:
        try:
            response = self.client.request(
                method, self.url, json=json_body, headers=self.headers
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"{method} {self.url} failed: {e}")
            raise StorageError(f"{method} {self.url} failed") from e

        # POST wraps the merged document as {"success": ..., "data": ...}
        if method != "GET":
            payload = payload.get("data", {})

        try:
            return UserDataRead.model_validate(payload)
        except PydanticValidationError as e:
            raise StorageError(f"Unexpected response from {self.url}") from e

    def load(self) -> Tuple[List[ScheduleItem], List[AttendanceRecord]]:
        data = self._request("GET")
        return data.schedule, data.records

    def get_schedule(self) -> List[ScheduleItem]:
        return self.load()[0]

    def get_records(self) -> List[AttendanceRecord]:
        return self.load()[1]

    def set_schedule(self, schedule: List[ScheduleItem]) -> None:
        self._request("POST", {"schedule": _dump(schedule)})

    def set_records(self, records: List[AttendanceRecord]) -> None:
        self._request("POST", {"records": _dump(records)})

    def clear_all(self) -> None:
        self._request("DELETE")

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "RemoteStorage":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

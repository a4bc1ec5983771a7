from datetime import date

import pytest

from attendai.schemas.attendance import AttendanceRecord, AttendanceStatus
from attendai.schemas.schedule import ScheduleItem
from attendai.services.attendance_service import (
    attendance_message,
    compute_overall_stats,
    delete_record,
    find_record,
    subject_stats,
    upsert_record,
)


def record(record_id, item_id, day, status):
    return AttendanceRecord(
        id=record_id,
        schedule_item_id=item_id,
        date=day,
        status=status,
        timestamp=0,
    )


@pytest.fixture
def ledger():
    return [
        record("r1", "A", date(2024, 1, 1), AttendanceStatus.PRESENT),
        record("r2", "A", date(2024, 1, 2), AttendanceStatus.ABSENT),
        record("r3", "B", date(2024, 1, 1), AttendanceStatus.CANCELLED),
    ]


def _for_key(records, item_id, day):
    return [r for r in records if r.schedule_item_id == item_id and r.date == day]


@pytest.mark.parametrize("status", list(AttendanceStatus))
def test_upsert_leaves_exactly_one_record_with_status(ledger, status):
    updated = upsert_record(ledger, "A", date(2024, 1, 1), status)

    matching = _for_key(updated, "A", date(2024, 1, 1))
    assert len(matching) == 1
    assert matching[0].status == status


def test_upsert_new_pair_appends_record_with_fresh_id(ledger):
    updated = upsert_record(ledger, "C", date(2024, 1, 3), AttendanceStatus.LATE)

    assert len(updated) == len(ledger) + 1
    new_record = updated[-1]
    assert new_record.schedule_item_id == "C"
    assert new_record.id not in {r.id for r in ledger}
    assert new_record.timestamp > 0


def test_upsert_twice_keeps_latest_status_and_original_id():
    first = upsert_record([], "A", date(2024, 1, 1), AttendanceStatus.PRESENT)
    second = upsert_record(first, "A", date(2024, 1, 1), AttendanceStatus.ABSENT)

    assert len(second) == 1
    assert second[0].status == AttendanceStatus.ABSENT
    assert second[0].id == first[0].id


def test_upsert_with_iso_string_date_replaces_record():
    first = upsert_record([], "A", "2024-01-01", AttendanceStatus.PRESENT)
    second = upsert_record(first, "A", "2024-01-01", AttendanceStatus.ABSENT)

    assert len(second) == 1
    assert second[0].date == date(2024, 1, 1)
    assert second[0].status == AttendanceStatus.ABSENT
    assert second[0].id == first[0].id


def test_upsert_string_and_date_keys_are_the_same_pair(ledger):
    updated = upsert_record(ledger, "A", "2024-01-01", AttendanceStatus.LATE)

    matching = _for_key(updated, "A", date(2024, 1, 1))
    assert len(matching) == 1
    assert matching[0].id == "r1"
    assert len(updated) == len(ledger)


def test_upsert_collapses_existing_duplicates():
    duplicated = [
        record("r1", "A", date(2024, 1, 1), AttendanceStatus.PRESENT),
        record("r2", "A", date(2024, 1, 1), AttendanceStatus.ABSENT),
    ]

    updated = upsert_record(duplicated, "A", date(2024, 1, 1), AttendanceStatus.LATE)

    assert len(updated) == 1
    assert updated[0].id == "r1"


def test_upsert_does_not_modify_input(ledger):
    before = list(ledger)
    upsert_record(ledger, "A", date(2024, 1, 1), AttendanceStatus.EXCUSED)
    assert ledger == before


def test_delete_removes_matching_record(ledger):
    updated = delete_record(ledger, "A", date(2024, 1, 2))

    assert [r.id for r in updated] == ["r1", "r3"]


def test_delete_with_iso_string_date(ledger):
    updated = delete_record(ledger, "A", "2024-01-02")

    assert [r.id for r in updated] == ["r1", "r3"]


def test_delete_missing_pair_is_noop(ledger):
    assert delete_record(ledger, "Z", date(2030, 1, 1)) == ledger
    assert delete_record(ledger, "Z", "2030-01-01") == ledger


def test_find_record(ledger):
    assert find_record(ledger, "B", date(2024, 1, 1)).id == "r3"
    assert find_record(ledger, "B", "2024-01-01").id == "r3"
    assert find_record(ledger, "B", date(2024, 1, 2)) is None


def test_stats_scenario(ledger):
    stats = compute_overall_stats(ledger)

    assert stats.total_classes == 2
    assert stats.attended_classes == 1
    assert stats.missed_classes == 1
    assert stats.cancelled_classes == 1
    assert stats.percentage == 50


def test_stats_empty_collection_uses_default():
    stats = compute_overall_stats([])

    assert stats.total_classes == 0
    assert stats.attended_classes == 0
    assert stats.missed_classes == 0
    assert stats.cancelled_classes == 0
    assert stats.percentage == 0


def test_stats_empty_default_can_be_overridden():
    assert compute_overall_stats([], empty_percentage=100).percentage == 100


def test_stats_only_cancelled_has_no_active_classes():
    stats = compute_overall_stats(
        [record("r1", "A", date(2024, 1, 1), AttendanceStatus.CANCELLED)]
    )

    assert stats.total_classes == 0
    assert stats.cancelled_classes == 1
    assert stats.percentage == 0


def test_stats_counts_add_up():
    statuses = [
        AttendanceStatus.PRESENT,
        AttendanceStatus.LATE,
        AttendanceStatus.EXCUSED,
        AttendanceStatus.ABSENT,
        AttendanceStatus.CANCELLED,
        AttendanceStatus.LATE,
    ]
    records = [
        record(f"r{i}", "A", date(2024, 1, i + 1), status)
        for i, status in enumerate(statuses)
    ]

    stats = compute_overall_stats(records)

    assert stats.attended_classes + stats.missed_classes == stats.total_classes
    assert stats.total_classes + stats.cancelled_classes == len(records)
    assert stats.attended_classes == 3
    assert stats.missed_classes == 2
    assert stats.percentage == pytest.approx(60)


@pytest.mark.parametrize(
    "attended, total, expected",
    [
        (9, 10, "Excellent! Keep it up!"),
        (8, 10, "Good job, you're on track."),
        (6, 10, "Attendance is slipping."),
        (1, 10, "You need to attend more classes."),
    ],
)
def test_attendance_message_thresholds(attended, total, expected):
    records = [
        record(
            f"r{i}",
            "A",
            date(2024, 1, i + 1),
            AttendanceStatus.PRESENT if i < attended else AttendanceStatus.ABSENT,
        )
        for i in range(total)
    ]

    assert attendance_message(compute_overall_stats(records)) == expected


def test_attendance_message_without_data():
    assert attendance_message(compute_overall_stats([])) == "No data yet"


def test_subject_stats_groups_by_subject_through_schedule(ledger):
    schedule = [
        ScheduleItem(id="A", day="Monday", start_time="9:00 AM", end_time="10:00 AM", subject="Math"),
        ScheduleItem(id="B", day="Monday", start_time="11:00 AM", end_time="12:00 PM", subject="Art"),
        ScheduleItem(id="C", day="Friday", start_time="9:00 AM", end_time="10:00 AM", subject="Math"),
    ]
    ledger.append(record("r4", "C", date(2024, 1, 5), AttendanceStatus.PRESENT))
    ledger.append(record("r5", "gone", date(2024, 1, 5), AttendanceStatus.ABSENT))

    by_subject = {entry.subject: entry.stats for entry in subject_stats(schedule, ledger)}

    assert list(by_subject) == ["Math", "Art", "Unknown"]
    assert by_subject["Math"].total_classes == 3
    assert by_subject["Math"].attended_classes == 2
    assert by_subject["Art"].cancelled_classes == 1
    assert by_subject["Unknown"].missed_classes == 1

import pytest

from attendai.exceptions import ScheduleExtractionError, ValidationError
from attendai.services.extraction_service import (
    EMPTY_RESULT_MESSAGE,
    FAILED_MESSAGE,
    ScheduleExtractionService,
)
from attendai.utils.file_management import validate_schedule_image

from conftest import EXTRACTED_ITEMS, fake_genai_client


def test_parse_schedule_image_assigns_ids():
    client = fake_genai_client(EXTRACTED_ITEMS)
    service = ScheduleExtractionService(api_key="key", model="test-model", client=client)

    items = service.parse_schedule_image(b"png-bytes", "image/png")

    assert [i.subject for i in items] == ["Physics", "Math"]
    assert items[0].room == "B2"
    assert items[1].room is None
    assert len({i.id for i in items}) == 2
    assert client.models.calls[0]["model"] == "test-model"


def test_missing_api_key_is_reported():
    service = ScheduleExtractionService(api_key="")

    with pytest.raises(ScheduleExtractionError) as exc_info:
        service.parse_schedule_image(b"png-bytes")

    assert exc_info.value.reason == "config"


def test_empty_result_is_reported():
    service = ScheduleExtractionService(api_key="key", client=fake_genai_client([]))

    with pytest.raises(ScheduleExtractionError) as exc_info:
        service.parse_schedule_image(b"png-bytes")

    assert exc_info.value.reason == "empty"
    assert exc_info.value.message == EMPTY_RESULT_MESSAGE


def test_no_response_text_is_an_empty_result():
    service = ScheduleExtractionService(api_key="key", client=fake_genai_client(text=""))

    with pytest.raises(ScheduleExtractionError) as exc_info:
        service.parse_schedule_image(b"png-bytes")

    assert exc_info.value.reason == "empty"


@pytest.mark.parametrize(
    "client",
    [
        fake_genai_client(text="not json"),
        fake_genai_client(text='{"day": "Monday"}'),
        fake_genai_client(error=RuntimeError("quota exceeded")),
    ],
)
def test_upstream_failures_become_one_message(client):
    service = ScheduleExtractionService(api_key="key", client=client)

    with pytest.raises(ScheduleExtractionError) as exc_info:
        service.parse_schedule_image(b"png-bytes")

    assert exc_info.value.reason == "upstream"
    assert exc_info.value.message == FAILED_MESSAGE


def test_abbreviated_day_names_are_normalized():
    items = [
        {"day": "Mon", "startTime": "9:00 AM", "endTime": "10:00 AM", "subject": "Math"},
        {"day": "Tues.", "startTime": "9:00 AM", "endTime": "10:00 AM", "subject": "Art"},
        {"day": "thurs", "startTime": "1:00 PM", "endTime": "2:00 PM", "subject": "Music"},
    ]
    service = ScheduleExtractionService(api_key="key", client=fake_genai_client(items))

    extracted = service.parse_schedule_image(b"png-bytes")

    assert [i.day for i in extracted] == ["Monday", "Tuesday", "Thursday"]


def test_unreadable_classes_are_dropped(caplog):
    items = [
        {"day": "Someday", "startTime": "9:00 AM", "endTime": "10:00 AM", "subject": "X"},
        {"day": "Friday", "startTime": "9:00 AM", "endTime": "10:00 AM", "subject": "Biology"},
        {"day": "Friday", "startTime": "11:00 AM", "endTime": "12:00 PM"},
    ]
    service = ScheduleExtractionService(api_key="key", client=fake_genai_client(items))

    extracted = service.parse_schedule_image(b"png-bytes")

    assert [i.subject for i in extracted] == ["Biology"]
    assert "Skipping unreadable class" in caplog.text


def test_no_readable_class_is_an_empty_result():
    items = [{"day": "Someday", "startTime": "9:00 AM", "endTime": "10:00 AM", "subject": "X"}]
    service = ScheduleExtractionService(api_key="key", client=fake_genai_client(items))

    with pytest.raises(ScheduleExtractionError) as exc_info:
        service.parse_schedule_image(b"png-bytes")

    assert exc_info.value.reason == "empty"


def test_validate_schedule_image_accepts_images():
    validate_schedule_image("image/jpeg", 1024)


def test_validate_schedule_image_rejects_other_types():
    with pytest.raises(ValidationError, match="Please upload an image file"):
        validate_schedule_image("application/pdf", 1024)


def test_validate_schedule_image_rejects_large_files():
    with pytest.raises(ValidationError, match="File is too large"):
        validate_schedule_image("image/png", 5 * 1024 * 1024 + 1)

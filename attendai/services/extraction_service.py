import json
import logging
from typing import List, Optional

from google import genai
from google.genai import types
from pydantic import ValidationError as PydanticValidationError

from attendai import config
from attendai.exceptions import ScheduleExtractionError
from attendai.schemas.schedule import ExtractedScheduleItem, ScheduleItem
from attendai.services.schedule_service import assign_ids

logger = logging.getLogger(__name__)

EXTRACTION_PROMPT = """Analyze this image of a weekly class schedule.
Extract all class sessions into a structured list.
Return a JSON array where each object contains:
- day: Full English name of the day (e.g., "Monday")
- startTime: format HH:MM AM/PM
- endTime: format HH:MM AM/PM
- subject: Name of the course or subject
- room: (Optional) Room number or location if visible

Strictly output valid JSON matching the schema."""

RESPONSE_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "day": types.Schema(type=types.Type.STRING),
            "startTime": types.Schema(type=types.Type.STRING),
            "endTime": types.Schema(type=types.Type.STRING),
            "subject": types.Schema(type=types.Type.STRING),
            "room": types.Schema(type=types.Type.STRING, nullable=True),
        },
        required=["day", "startTime", "endTime", "subject"],
    ),
)

MISSING_KEY_MESSAGE = "API Key is missing. Please set GEMINI_API_KEY."
EMPTY_RESULT_MESSAGE = (
    "No classes found. Please ensure the image is a clear weekly schedule."
)
FAILED_MESSAGE = "Failed to process schedule image. Please try again."


class ScheduleExtractionService:
    """
    Turns a photo of a weekly timetable into schedule items using Gemini.

    Every failure is reported as a ScheduleExtractionError carrying a single
    message that can be shown to the user as is.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client=None,
    ):
        self.api_key = api_key if api_key is not None else config.GEMINI_API_KEY
        self.model = model or config.GEMINI_MODEL
        self._client = client

    def _get_client(self):
        if self._client is None:
            if not self.api_key:
                raise ScheduleExtractionError(MISSING_KEY_MESSAGE, reason="config")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    @staticmethod
    def _valid_items(raw_items: list) -> List[ExtractedScheduleItem]:
        """Validate each extracted class on its own, dropping the unreadable ones."""
        items = []
        for raw in raw_items:
            try:
                items.append(ExtractedScheduleItem.model_validate(raw))
            except PydanticValidationError as e:
                logger.warning(f"Skipping unreadable class {raw!r}: {e.error_count()} errors")
        return items

    def parse_schedule_image(
        self, image_bytes: bytes, mime_type: str = "image/png"
    ) -> List[ScheduleItem]:
        """
        Extract the class sessions shown in a timetable image.

        Args:
            image_bytes: Raw image content
            mime_type: Content type of the image

        Returns:
            List[ScheduleItem]: Extracted classes in model order, each with a
            fresh id

        Raises:
            ScheduleExtractionError: If no API key is configured, the model
                call fails or returns malformed data, or no readable class was found
        """
        client = self._get_client()

        try:
            logger.info(f"Requesting schedule extraction from {self.model}")
            response = client.models.generate_content(
                model=self.model,
                contents=[
                    types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                    EXTRACTION_PROMPT,
                ],
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=RESPONSE_SCHEMA,
                ),
            )

            text = response.text
            raw_items = json.loads(text) if text else []
            if not isinstance(raw_items, list):
                raise ValueError("Expected a JSON array of classes")
        except Exception as e:
            logger.error(f"Gemini API error: {e}")
            raise ScheduleExtractionError(FAILED_MESSAGE) from e

        extracted = self._valid_items(raw_items)
        if not extracted:
            raise ScheduleExtractionError(EMPTY_RESULT_MESSAGE, reason="empty")

        logger.info(f"Extracted {len(extracted)} classes from schedule image")
        return assign_ids(extracted)

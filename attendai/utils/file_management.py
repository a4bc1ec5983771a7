from attendai import config
from attendai.exceptions import ValidationError


def validate_schedule_image(content_type: str, size: int) -> None:
    """
    Reject uploads that cannot be a timetable photo before calling the model.

    Raises:
        ValidationError: If the file is not an image or is larger than
            MAX_UPLOAD_BYTES
    """
    if not content_type or not content_type.startswith("image/"):
        raise ValidationError("Please upload an image file (PNG, JPG).")

    if size > config.MAX_UPLOAD_BYTES:
        max_mb = config.MAX_UPLOAD_BYTES // (1024 * 1024)
        raise ValidationError(f"File is too large. Max size is {max_mb}MB.")

# Import all models to make them available from attendai.models
from attendai.models.otp import OTPCode
from attendai.models.user import User
from attendai.models.user_data import UserData


# Export all models
__all__ = [
    "OTPCode",
    "User",
    "UserData",
]

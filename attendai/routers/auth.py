from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session

from attendai.dependencies import get_current_user, get_db
from attendai.models.user import User
from attendai.schemas.auth import LoginRequest, RegisterRequest, SendOTPRequest
from attendai.schemas.token import Token
from attendai.schemas.user import UserRead
from attendai.services.auth_service import login_user, register_user, send_otp


router = APIRouter(
    prefix="/auth",
    tags=["authentication"],
)


def _token_response(user: User, access_token: str) -> dict:
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": UserRead.model_validate(user),
    }


@router.post("/send-otp")
def send_otp_endpoint(request: SendOTPRequest, db: Session = Depends(get_db)):
    """
    Send a registration code to an email address.
    Fails with 400 if the address already has an account.
    """
    send_otp(db=db, email=request.email)
    return {"message": "Verification code sent"}


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register_endpoint(request: RegisterRequest, db: Session = Depends(get_db)):
    """
    Create an account using the code sent by /auth/send-otp.
    Returns an access token so the client is signed in right away.
    """
    user, access_token = register_user(db=db, request=request)
    return _token_response(user, access_token)


@router.post("/login", response_model=Token)
def login_endpoint(request: LoginRequest, db: Session = Depends(get_db)):
    """Sign in with email and password."""
    user, access_token = login_user(db=db, email=request.email, password=request.password)
    return _token_response(user, access_token)


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)
):
    """
    OAuth2 compatible token login endpoint.
    The form's username field carries the email address.
    """
    user, access_token = login_user(
        db=db, email=form_data.username, password=form_data.password
    )
    return _token_response(user, access_token)


@router.get("/me", response_model=UserRead)
def read_me_endpoint(current_user: User = Depends(get_current_user)):
    return current_user

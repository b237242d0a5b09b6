from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from storagebox.core.config import Settings
from storagebox.core.exceptions import NotFoundError
from storagebox.core.security import TokenService
from storagebox.deps import AuthContext, get_auth_context, get_db, get_settings, get_token_service
from storagebox.schemas import LoginRequest, LoginResponse, MessageResponse, RegisterRequest, UserProfile
from storagebox.services import credentials

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    credentials.create_user(db, body.name, body.email, body.password)
    return MessageResponse(message="user created")


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    token_service: TokenService = Depends(get_token_service),
):
    user = credentials.authenticate(db, body.email, body.password)

    # login success → set the session cookie
    response.set_cookie(
        settings.cookie_name,
        token_service.issue(user.id),
        max_age=token_service.ttl_seconds,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )
    return LoginResponse(user=UserProfile.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response, settings: Settings = Depends(get_settings)):
    response.delete_cookie(settings.cookie_name, httponly=True, secure=settings.cookie_secure, samesite="strict")
    return MessageResponse(message="logged out")


@router.get("/get", response_model=UserProfile)
def profile(auth: AuthContext = Depends(get_auth_context), db: Session = Depends(get_db)):
    user = credentials.find_user_by_id(db, auth.user_id)
    if not user:
        raise NotFoundError("User not found")
    return user

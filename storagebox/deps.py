from dataclasses import dataclass
from typing import Iterator, Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from storagebox.core.config import Settings
from storagebox.core.security import TokenService
from storagebox.services.blob_store import S3BlobStore


@dataclass(frozen=True)
class AuthContext:
    """Identity of the caller, established by the token check."""
    user_id: int


# DB session dependency
def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_blob_store(request: Request) -> S3BlobStore:
    return request.app.state.blob_store


def get_token(request: Request, settings: Settings = Depends(get_settings)) -> Optional[str]:
    # cookie first, then a Bearer header
    token = request.cookies.get(settings.cookie_name)
    if token:
        return token
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[len("Bearer "):].strip()
    return None


def get_auth_context(
    token: Optional[str] = Depends(get_token),
    token_service: TokenService = Depends(get_token_service),
) -> AuthContext:
    # raises InvalidTokenError -> 401 before the handler runs
    return AuthContext(user_id=token_service.verify(token))

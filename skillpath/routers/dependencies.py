# dependencies.py
from typing import Generator

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from skillpath.clients.analysis_api import AnalysisApiClient, AnalysisApiError, get_analysis_client
from skillpath.config import settings
from skillpath.database import SessionLocal
from skillpath.errors import to_http_exception
from skillpath.schemas.user import TokenData, UserIdentity
from skillpath.services.progress_storage import InMemoryProgressStorage, ProgressStorage, SqlProgressStorage
from skillpath.utils.jwt_handler import decode_access_token, user_id_from_claims


# Login happens against the analysis service; the URL is only used for OpenAPI docs.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")

_memory_storage = InMemoryProgressStorage()


def get_token_data(token: str = Depends(oauth2_scheme)) -> TokenData:
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    payload = decode_access_token(token)
    user_id = user_id_from_claims(payload)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload")
    return TokenData(user_id=user_id)


def get_current_user(
    token: str = Depends(oauth2_scheme),
    token_data: TokenData = Depends(get_token_data),
    client: AnalysisApiClient = Depends(get_analysis_client),
) -> UserIdentity:
    try:
        raw = client.get_profile(token)
    except AnalysisApiError as exc:
        raise to_http_exception(exc) from exc
    try:
        user = UserIdentity.model_validate(raw)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Invalid profile payload") from exc
    if user.id != token_data.user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token subject mismatch")
    return user


def get_progress_storage() -> Generator[ProgressStorage, None, None]:
    if settings.progress_storage == "memory":
        yield _memory_storage
        return
    # Only the sql backend opens a session.
    db = SessionLocal()
    try:
        yield SqlProgressStorage(db)
    finally:
        db.close()

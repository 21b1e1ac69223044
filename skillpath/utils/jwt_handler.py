# jwt_handler.py
from fastapi import HTTPException, status
from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError
from skillpath.config import settings


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired") from exc
    except JWTError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token") from exc


def user_id_from_claims(payload: dict) -> str | None:
    # Tokens from the analysis service carry the id under "userId"; "sub" is the JWT standard.
    for claim in ("sub", "userId", "id"):
        value = payload.get(claim)
        if value is not None and str(value).strip():
            return str(value).strip()
    return None

from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from video_downloader.config.settings import config
from video_downloader.core.exceptions import Unauthorized
from video_downloader.infra.database import get_db
from video_downloader.models.database import User
from video_downloader.services.history import HistoryStore

BEARER = HTTPBearer(auto_error=False)


def decode_user_id(token: str) -> int:
    """Extract the user id from a bearer token issued by the auth service"""
    try:
        payload = jwt.decode(token, config.auth.jwt_secret, algorithms=[config.auth.algorithm])
    except JWTError:
        raise Unauthorized()

    user_id = payload.get("id", payload.get("sub"))
    try:
        return int(user_id)
    except (TypeError, ValueError):
        raise Unauthorized()


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Security(BEARER),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the authenticated principal.
    Tokens are issued elsewhere; this only verifies them.
    """
    if not credentials or not credentials.credentials:
        raise Unauthorized()

    user = HistoryStore(db).find_user(decode_user_id(credentials.credentials))
    if user is None:
        raise Unauthorized()
    return user

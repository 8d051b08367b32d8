import jwt
import datetime
from typing import Any, Dict

from config.settings import settings  # must define SECRET_KEY and ALGORITHM
from api.user.user_model import User

def create_access_token(
    payload: Dict[str, Any],
    expires_hours: int = 1,
) -> str:
    """
    Generate a JWT access token with the given payload and expiration.
    """
    expire = datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(hours=expires_hours)
    to_encode = payload.copy()
    to_encode.update({"exp": expire})

    token = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return token


def create_user_token(
    user: User,
    expires_hours: int = settings.ACCESS_TOKEN_EXPIRE_HOURS
) -> str:
    """
    Generate a JWT for a User instance, embedding id, email and role.
    Login/session issuance lives in the frontend; this is used by
    tooling and tests.
    """
    token_payload: Dict[str, Any] = {
        "id":    user.id,
        "email": user.email,
        "role":  user.role.value,
    }
    return create_access_token(token_payload, expires_hours)

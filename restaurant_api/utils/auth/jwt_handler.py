from jose import JWTError, ExpiredSignatureError, jwt
from datetime import datetime, timedelta
from typing import Optional, Tuple
from restaurant_api.utils.config import settings
from restaurant_api.utils.errors import ExpiredToken, MalformedToken
import uuid

ACCESS = "access"
REFRESH = "refresh"


def _encode(payload: dict, token_type: str, expire_minutes: int) -> str:
    to_encode = payload.copy()
    now = datetime.utcnow()
    expire = now + timedelta(minutes=expire_minutes)
    to_encode.update({
        "exp": expire,
        "iat": now,
        "jti": str(uuid.uuid4()),
        "type": token_type
    })
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(payload: dict, expire_minutes: Optional[int] = None) -> str:
    if expire_minutes is None:
        expire_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES
    return _encode(payload, ACCESS, expire_minutes)


def create_refresh_token(payload: dict, expire_minutes: Optional[int] = None) -> str:
    if expire_minutes is None:
        expire_minutes = settings.REFRESH_TOKEN_EXPIRE_MINUTES
    return _encode(payload, REFRESH, expire_minutes)


def issue_token_pair(email: str, first_name: Optional[str], last_name: Optional[str], uid: str) -> Tuple[str, str]:
    claims = {
        "email": email,
        "first_name": first_name or "",
        "last_name": last_name or "",
        "uid": uid,
    }
    return create_access_token(claims), create_refresh_token(claims)


def verify_token(token: str, expected_type: str = ACCESS) -> dict:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError:
        raise ExpiredToken("Token has been expired, please login again")
    except JWTError:
        raise MalformedToken("Token is invalid")
    if payload.get("type") != expected_type:
        raise MalformedToken(f"Expected a token of type {expected_type}")
    if not payload.get("uid"):
        raise MalformedToken("Token is missing the user id")
    return payload

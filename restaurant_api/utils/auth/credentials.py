from typing import Tuple

from passlib.context import CryptContext

from restaurant_api.utils.config import settings

INCORRECT_CREDENTIALS = "login or password is incorrect"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> Tuple[bool, str]:
    # The message never says whether the login or the password was wrong.
    try:
        matches = pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        matches = False
    if not matches:
        return False, INCORRECT_CREDENTIALS
    return True, ""

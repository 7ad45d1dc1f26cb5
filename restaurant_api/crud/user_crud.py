import logging
from typing import Any, Dict, Optional

from bson import ObjectId
from starlette.concurrency import run_in_threadpool

from restaurant_api.crud.mongo_crud import MongoCRUD
from restaurant_api.schemas.user_schema import UserCreate
from restaurant_api.utils.auth.credentials import hash_password, verify_password, INCORRECT_CREDENTIALS
from restaurant_api.utils.auth.jwt_handler import issue_token_pair, verify_token, REFRESH
from restaurant_api.utils.deadline import Deadline
from restaurant_api.utils.errors import AuthFailure, DuplicateConflict

logger = logging.getLogger(__name__)


class CRUDUser:
    def __init__(self, users: MongoCRUD):
        self.users = users

    async def create(self, obj_in: UserCreate, deadline: Optional[Deadline] = None) -> Dict[str, Any]:
        existing = await self.users.count(
            {"$or": [{"email": obj_in.email}, {"phone": obj_in.phone}]}, deadline=deadline
        )
        if existing:
            raise DuplicateConflict("this email or phone number already exists")

        # bcrypt blocks for the whole work factor, so it runs in the threadpool
        password = await run_in_threadpool(hash_password, obj_in.password)

        oid = ObjectId()
        user_id = str(oid)
        token, refresh_token = issue_token_pair(obj_in.email, obj_in.first_name, obj_in.last_name, user_id)

        document = obj_in.model_dump()
        document.update({
            "_id": oid,
            "user_id": user_id,
            "password": password,
            "token": token,
            "refresh_token": refresh_token,
        })
        new_user = await self.users.insert_one(document, deadline=deadline)
        logger.info("user %s signed up", user_id)
        return new_user

    async def login(self, email: str, password: str, deadline: Optional[Deadline] = None) -> Dict[str, Any]:
        user = await self.users.find_one({"email": email}, deadline=deadline)
        if user is None:
            raise AuthFailure(INCORRECT_CREDENTIALS)

        matches, msg = await run_in_threadpool(verify_password, password, user["password"])
        if not matches:
            raise AuthFailure(msg)

        token, refresh_token = issue_token_pair(
            user["email"], user.get("first_name"), user.get("last_name"), user["user_id"]
        )
        await self.rotate_tokens(user["user_id"], token, refresh_token, deadline=deadline)
        user.update(token=token, refresh_token=refresh_token)
        return user

    async def rotate_tokens(self, user_id: str, token: str, refresh_token: str, deadline: Optional[Deadline] = None) -> None:
        await self.users.update_by_filter(
            {"user_id": user_id},
            {"token": token, "refresh_token": refresh_token},
            deadline=deadline,
        )

    async def refresh(self, refresh_token: str, deadline: Optional[Deadline] = None) -> Dict[str, str]:
        claims = verify_token(refresh_token, expected_type=REFRESH)
        user = await self.users.find_one({"user_id": claims["uid"]}, deadline=deadline)
        # Only the most recently issued refresh token is accepted.
        if user is None or user.get("refresh_token") != refresh_token:
            raise AuthFailure("Refresh token is no longer valid, please login again")

        token, new_refresh_token = issue_token_pair(
            user["email"], user.get("first_name"), user.get("last_name"), user["user_id"]
        )
        await self.rotate_tokens(user["user_id"], token, new_refresh_token, deadline=deadline)
        return {"token": token, "refresh_token": new_refresh_token, "token_type": "bearer"}

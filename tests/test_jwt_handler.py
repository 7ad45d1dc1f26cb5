import pytest
from jose import jwt

from restaurant_api.utils.auth.jwt_handler import (
    REFRESH,
    create_access_token,
    issue_token_pair,
    verify_token,
)
from restaurant_api.utils.config import settings
from restaurant_api.utils.errors import AuthFailure, ExpiredToken, MalformedToken


def test_issue_token_pair_embeds_claims():
    access, refresh = issue_token_pair("a@b.com", "Ann", "Lee", "abc123")

    claims = verify_token(access)
    assert claims["email"] == "a@b.com"
    assert claims["first_name"] == "Ann"
    assert claims["last_name"] == "Lee"
    assert claims["uid"] == "abc123"
    assert claims["type"] == "access"

    refresh_claims = verify_token(refresh, expected_type=REFRESH)
    assert refresh_claims["uid"] == "abc123"
    assert refresh_claims["exp"] > claims["exp"]


def test_missing_names_become_empty_strings():
    access, _ = issue_token_pair("a@b.com", None, None, "abc123")
    claims = verify_token(access)
    assert claims["first_name"] == ""
    assert claims["last_name"] == ""


def test_expired_token():
    token = create_access_token({"uid": "abc123"}, expire_minutes=-1)
    with pytest.raises(ExpiredToken) as exc_info:
        verify_token(token)
    assert exc_info.value.status_code == 401


def test_bad_signature_is_malformed():
    token = jwt.encode({"uid": "abc123", "type": "access"}, "another-secret", algorithm=settings.ALGORITHM)
    with pytest.raises(MalformedToken):
        verify_token(token)


def test_garbage_is_malformed():
    with pytest.raises(MalformedToken):
        verify_token("not.a.token")


def test_refresh_token_is_not_an_access_token():
    _, refresh = issue_token_pair("a@b.com", "Ann", "Lee", "abc123")
    with pytest.raises(AuthFailure):
        verify_token(refresh)

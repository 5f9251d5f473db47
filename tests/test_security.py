"""Tests for JWT access-token verification."""
import uuid
from datetime import timedelta

import jwt

from catalog.core.security import (
    ALGORITHM,
    create_access_token,
    decode_token,
    verify_access_token,
)
from tests.conftest import TEST_JWT_SECRET

JWT_DECODE_OPTS = {
    "algorithms": [ALGORITHM],
    "issuer": "catalog-tools",
    "audience": "catalog-tools",
}


class TestCreateAccessToken:
    def test_creates_valid_jwt(self):
        user_id = str(uuid.uuid4())
        token = create_access_token(user_id, "admin@example.com", "admin")
        payload = jwt.decode(token, TEST_JWT_SECRET, **JWT_DECODE_OPTS)
        assert payload["sub"] == user_id
        assert payload["role"] == "admin"
        assert payload["type"] == "access"

    def test_unique_jti_per_call(self):
        uid = str(uuid.uuid4())
        p1 = decode_token(create_access_token(uid, "u@x.com", "admin"))
        p2 = decode_token(create_access_token(uid, "u@x.com", "admin"))
        assert p1["jti"] != p2["jti"]


class TestVerifyAccessToken:
    def test_valid(self):
        token = create_access_token(str(uuid.uuid4()), "u@x.com", "admin")
        assert verify_access_token(token)["email"] == "u@x.com"

    def test_expired(self):
        token = create_access_token(
            str(uuid.uuid4()), "u@x.com", "admin", expires_delta=timedelta(seconds=-10)
        )
        assert verify_access_token(token) is None

    def test_wrong_secret(self):
        token = jwt.encode(
            {"sub": "x", "type": "access", "iss": "catalog-tools", "aud": "catalog-tools"},
            "another-secret-that-is-long-enough-to-sign",
            algorithm=ALGORITHM,
        )
        assert verify_access_token(token) is None

    def test_wrong_type(self):
        token = jwt.encode(
            {"sub": "x", "type": "refresh", "iss": "catalog-tools", "aud": "catalog-tools"},
            TEST_JWT_SECRET,
            algorithm=ALGORITHM,
        )
        assert verify_access_token(token) is None

    def test_garbage(self):
        assert verify_access_token("not-a-token") is None

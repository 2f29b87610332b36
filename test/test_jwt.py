"""
Tests for JWT handling.
"""

from datetime import timedelta

import pytest

from forget_me_not.auth.jwt import JWTHandler
from forget_me_not.shared.exceptions import InvalidTokenError, TokenExpiredError


class TestJWTHandler:
    def test_create_and_validate(self, jwt_handler: JWTHandler) -> None:
        token = jwt_handler.create_access_token(
            subject="user-1", email="a@example.com", role="admin"
        )
        payload = jwt_handler.validate_access_token(token)

        assert payload["sub"] == "user-1"
        assert payload["email"] == "a@example.com"
        assert payload["role"] == "admin"
        assert payload["type"] == "access"
        assert "permissions" not in payload

    def test_permissions_claim(self, jwt_handler: JWTHandler) -> None:
        token = jwt_handler.create_access_token(
            subject="user-1",
            email="a@example.com",
            role="viewer",
            permissions=["view update reports"],
        )
        assert jwt_handler.validate_access_token(token)["permissions"] == [
            "view update reports"
        ]

    def test_expired(self, jwt_handler: JWTHandler) -> None:
        token = jwt_handler.create_access_token(
            subject="user-1",
            email="a@example.com",
            role="admin",
            expires_delta=timedelta(seconds=-1),
        )
        with pytest.raises(TokenExpiredError):
            jwt_handler.validate_access_token(token)

    def test_garbage(self, jwt_handler: JWTHandler) -> None:
        with pytest.raises(InvalidTokenError) as exc_info:
            jwt_handler.decode_token("not.a.token")
        assert exc_info.value.code == "INVALID_TOKEN"

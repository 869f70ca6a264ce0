"""test_auth_controller: 로그인 및 Bearer 토큰 인증 테스트 (JWT 기반)."""

import jwt
import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock, patch
from fastapi import HTTPException
from httpx import AsyncClient

from controllers import auth_controller
from core.config import settings
from dependencies.auth import get_current_user
from utils.jwt_utils import create_access_token, decode_access_token


class TestLogin:
    """POST /api/v1/login 테스트."""

    @pytest.fixture
    def credentials(self):
        return {"email": "reader@example.com", "password": "Password123!"}

    @pytest.mark.asyncio
    @patch("models.user_models.get_user_by_email", new_callable=AsyncMock)
    @patch("controllers.auth_controller.verify_password")
    async def test_login_success(
        self, mock_verify, mock_get_user, client: AsyncClient, credentials, member
    ):
        """올바른 자격 증명으로 로그인 성공."""
        mock_get_user.return_value = member
        mock_verify.return_value = True

        res = await client.post("/api/v1/login", json=credentials)

        assert res.status_code == 200
        body = res.json()
        assert body["code"] == "LOGIN_SUCCESS"
        assert body["data"]["token_type"] == "bearer"
        assert body["data"]["expires_in"] == settings.JWT_ACCESS_EXPIRE_MINUTES * 60
        assert body["data"]["user"]["email"] == member.email
        assert decode_access_token(body["data"]["access_token"])["sub"] == str(member.id)

    @pytest.mark.asyncio
    @patch("models.user_models.get_user_by_email", new_callable=AsyncMock)
    @patch("controllers.auth_controller.verify_password")
    async def test_login_invalid_password(
        self, mock_verify, mock_get_user, client: AsyncClient, credentials, member
    ):
        """잘못된 비밀번호로 로그인 실패."""
        mock_get_user.return_value = member
        mock_verify.return_value = False

        res = await client.post("/api/v1/login", json=credentials)

        assert res.status_code == 401
        assert res.json()["detail"]["error"] == "unauthorized"

    @pytest.mark.asyncio
    @patch("models.user_models.get_user_by_email", new_callable=AsyncMock)
    @patch("controllers.auth_controller.verify_password")
    async def test_login_user_not_found(
        self, mock_verify, mock_get_user, client: AsyncClient, credentials
    ):
        """존재하지 않는 사용자로 로그인 시도."""
        mock_get_user.return_value = None
        mock_verify.return_value = False

        res = await client.post("/api/v1/login", json=credentials)

        assert res.status_code == 401
        # 타이밍 공격 방지를 위해 사용자가 없어도 비밀번호 검증을 수행
        mock_verify.assert_called_once_with(
            credentials["password"], auth_controller._TIMING_ATTACK_DUMMY_HASH
        )

    @pytest.mark.asyncio
    async def test_login_missing_fields(self, client: AsyncClient):
        res = await client.post("/api/v1/login", json={"email": "reader@example.com"})

        assert res.status_code == 422

    @pytest.mark.asyncio
    async def test_login_get_not_routed(self, client: AsyncClient):
        res = await client.get("/api/v1/login")

        assert res.status_code == 404


class TestAccessToken:
    """Access Token 발급 및 검증 테스트."""

    def test_round_trip_claims(self):
        payload = decode_access_token(create_access_token(5))

        assert payload["sub"] == "5"
        assert payload["type"] == "access"
        assert payload["exp"] > payload["iat"]

    def test_expired_token(self):
        past = datetime.now(timezone.utc) - timedelta(minutes=5)
        token = jwt.encode(
            {"sub": "1", "type": "access", "iat": int(past.timestamp()), "exp": int(past.timestamp())},
            settings.SECRET_KEY,
            algorithm="HS256",
        )

        with pytest.raises(HTTPException) as exc_info:
            decode_access_token(token)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail["error"] == "token_expired"

    def test_wrong_signature(self):
        token = jwt.encode(
            {"sub": "1", "type": "access"},
            "another-secret-key-that-is-long-enough-0123456789",
            algorithm="HS256",
        )

        with pytest.raises(HTTPException) as exc_info:
            decode_access_token(token)

        assert exc_info.value.detail["error"] == "token_invalid"

    def test_non_access_type_rejected(self):
        token = jwt.encode(
            {"sub": "1", "type": "refresh"}, settings.SECRET_KEY, algorithm="HS256"
        )

        with pytest.raises(HTTPException) as exc_info:
            decode_access_token(token)

        assert exc_info.value.detail["error"] == "token_invalid"

    def test_non_integer_subject_rejected(self):
        token = jwt.encode(
            {"sub": "abc", "type": "access"}, settings.SECRET_KEY, algorithm="HS256"
        )

        with pytest.raises(HTTPException):
            decode_access_token(token)


class TestCurrentUser:
    """Authorization 헤더 기반 사용자 인증 테스트."""

    @staticmethod
    def _request(headers: dict) -> MagicMock:
        request = MagicMock()
        request.headers = headers
        request.state = MagicMock()
        return request

    @pytest.mark.asyncio
    async def test_missing_header(self):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(self._request({}))

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_non_bearer_scheme(self):
        with pytest.raises(HTTPException):
            await get_current_user(self._request({"Authorization": "Basic abc"}))

    @pytest.mark.asyncio
    async def test_valid_token(self, login_as, member):
        headers = login_as(member)

        user = await get_current_user(self._request(headers))

        assert user == member

    @pytest.mark.asyncio
    @patch("models.user_models.get_user_by_id", new_callable=AsyncMock)
    async def test_deleted_user(self, mock_get_user):
        mock_get_user.return_value = None
        headers = {"Authorization": f"Bearer {create_access_token(404)}"}

        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(self._request(headers))

        assert exc_info.value.status_code == 401

"""Unit tests for the dual-secret token service."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from croctop.services._shared.errors import InvalidTokenError
from croctop.services.tokens import Identity, TokenKind, TokenService

ACCESS_SECRET = "access-secret"
REFRESH_SECRET = "refresh-secret"


def make_service(clock=None) -> TokenService:
    return TokenService(
        secrets={TokenKind.ACCESS: ACCESS_SECRET, TokenKind.REFRESH: REFRESH_SECRET},
        clock=clock,
    )


@pytest.fixture()
def service() -> TokenService:
    return make_service()


class TestConstruction:
    def test_rejects_identical_secrets(self):
        with pytest.raises(ValueError, match="distinct"):
            TokenService(secrets={TokenKind.ACCESS: "same", TokenKind.REFRESH: "same"})

    def test_rejects_missing_secret(self):
        with pytest.raises(ValueError, match="refresh"):
            TokenService(secrets={TokenKind.ACCESS: "only-access"})

    def test_from_config_reads_keys(self):
        svc = TokenService.from_config(
            {
                "JWT_ACCESS_SECRET_KEY": "a",
                "JWT_REFRESH_SECRET_KEY": "r",
                "JWT_TOKEN_TTL_DAYS": 3,
            }
        )
        assert svc.ttl == timedelta(days=3)
        assert svc.algorithm == "HS256"


class TestIssueAndVerify:
    def test_access_token_round_trips_identity(self, service):
        token = service.issue_access_token(Identity(user_id=7, role="partner"))
        assert service.verify(token, TokenKind.ACCESS) == Identity(user_id=7, role="partner")

    def test_claims_expire_after_seven_days(self, service):
        now = datetime(2030, 1, 1, tzinfo=UTC)
        svc = make_service(clock=lambda: now)
        token = svc.issue_refresh_token(Identity(user_id=1))
        claims = jwt.decode(token, options={"verify_signature": False})
        assert claims["exp"] - claims["iat"] == int(timedelta(days=7).total_seconds())
        assert claims["type"] == "refresh"
        assert claims["sub"] == "1"

    def test_pair_tokens_verify_to_same_user(self, service):
        pair = service.issue_pair(Identity(user_id=42))
        access = service.verify(pair.access_token, TokenKind.ACCESS)
        refresh = service.verify(pair.refresh_token, TokenKind.REFRESH)
        assert access.user_id == refresh.user_id == 42

    def test_pair_for_one_identity_uses_two_keys(self, service):
        pair = service.issue_pair(Identity(user_id=42))
        jwt.decode(pair.access_token, ACCESS_SECRET, algorithms=["HS256"])
        jwt.decode(pair.refresh_token, REFRESH_SECRET, algorithms=["HS256"])
        with pytest.raises(jwt.InvalidSignatureError):
            jwt.decode(pair.access_token, REFRESH_SECRET, algorithms=["HS256"])
        with pytest.raises(jwt.InvalidSignatureError):
            jwt.decode(pair.refresh_token, ACCESS_SECRET, algorithms=["HS256"])

    def test_refresh_token_is_not_an_access_token(self, service):
        refresh = service.issue_refresh_token(Identity(user_id=1))
        with pytest.raises(InvalidTokenError):
            service.verify(refresh, TokenKind.ACCESS)

    def test_access_token_is_not_a_refresh_token(self, service):
        access = service.issue_access_token(Identity(user_id=1))
        with pytest.raises(InvalidTokenError):
            service.verify(access, TokenKind.REFRESH)

    def test_wrong_kind_claim_with_right_secret_is_rejected(self, service):
        now = datetime.now(UTC)
        forged = jwt.encode(
            {
                "sub": "1",
                "type": "refresh",
                "iat": int(now.timestamp()),
                "exp": int((now + timedelta(days=1)).timestamp()),
            },
            ACCESS_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            service.verify(forged, TokenKind.ACCESS)

    @pytest.mark.parametrize(
        "token",
        ["", "garbage", "a.b.c"],
    )
    def test_malformed_tokens_are_invalid(self, service, token):
        with pytest.raises(InvalidTokenError):
            service.verify(token, TokenKind.ACCESS)

    def test_bad_signature_is_invalid(self, service):
        other = TokenService(
            secrets={TokenKind.ACCESS: "other-access", TokenKind.REFRESH: "other-refresh"}
        )
        token = other.issue_access_token(Identity(user_id=1))
        with pytest.raises(InvalidTokenError):
            service.verify(token, TokenKind.ACCESS)

    def test_expired_token_is_invalid(self):
        past = datetime.now(UTC) - timedelta(days=8)
        svc = make_service(clock=lambda: past)
        token = svc.issue_access_token(Identity(user_id=1))
        with pytest.raises(InvalidTokenError):
            svc.verify(token, TokenKind.ACCESS)

    def test_failures_share_one_message(self, service):
        past = datetime.now(UTC) - timedelta(days=8)
        expired = make_service(clock=lambda: past).issue_access_token(Identity(user_id=1))
        messages = set()
        for token in ("garbage", expired, service.issue_refresh_token(Identity(user_id=1))):
            with pytest.raises(InvalidTokenError) as excinfo:
                service.verify(token, TokenKind.ACCESS)
            messages.add(str(excinfo.value))
        assert messages == {"Invalid or expired token"}


class TestRefresh:
    def test_refresh_mints_access_for_same_identity(self, service):
        refresh = service.issue_refresh_token(Identity(user_id=5, role="certified"))
        access = service.refresh(refresh)
        assert service.verify(access, TokenKind.ACCESS) == Identity(user_id=5, role="certified")

    def test_refresh_token_stays_usable(self, service):
        refresh = service.issue_refresh_token(Identity(user_id=5))
        service.refresh(refresh)
        assert service.refresh(refresh)

    def test_refresh_with_access_token_fails(self, service):
        access = service.issue_access_token(Identity(user_id=5))
        with pytest.raises(InvalidTokenError):
            service.refresh(access)

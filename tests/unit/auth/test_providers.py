"""Unit tests for identity providers."""

import time

import pytest
from jose import jwt

from trustlink.auth import (
    AuthenticationError,
    JWTIdentityProvider,
    StaticIdentityProvider,
    create_identity_provider,
)
from trustlink.config.models.auth import AuthConfig

SECRET = "test-secret"


def make_token(claims: dict, key: str = SECRET) -> str:
    return jwt.encode(claims, key, algorithm="HS256")


@pytest.fixture
def provider() -> JWTIdentityProvider:
    return JWTIdentityProvider(key=SECRET, algorithms=["HS256"])


class TestJWTIdentityProvider:
    """Tests for JWTIdentityProvider.verify."""

    async def test_maps_claims(self, provider: JWTIdentityProvider) -> None:
        token = make_token(
            {
                "sub": "alice",
                "email": "alice@example.com",
                "name": "Alice",
                "picture": "https://img.example/alice.png",
                "exp": int(time.time()) + 60,
            }
        )

        identity = await provider.verify(token)

        assert identity.uid == "alice"
        assert identity.email == "alice@example.com"
        assert identity.name == "Alice"
        assert identity.picture == "https://img.example/alice.png"

    async def test_user_id_fallback(self, provider: JWTIdentityProvider) -> None:
        identity = await provider.verify(make_token({"user_id": "bob"}))
        assert identity.uid == "bob"

    async def test_wrong_key_rejected(self, provider: JWTIdentityProvider) -> None:
        with pytest.raises(AuthenticationError):
            await provider.verify(make_token({"sub": "alice"}, key="other"))

    async def test_expired_token_rejected(self, provider: JWTIdentityProvider) -> None:
        with pytest.raises(AuthenticationError):
            await provider.verify(make_token({"sub": "alice", "exp": int(time.time()) - 60}))

    async def test_garbage_rejected(self, provider: JWTIdentityProvider) -> None:
        with pytest.raises(AuthenticationError):
            await provider.verify("not-a-jwt")

    async def test_missing_subject_rejected(self, provider: JWTIdentityProvider) -> None:
        with pytest.raises(AuthenticationError):
            await provider.verify(make_token({"email": "x@example.com"}))

    async def test_audience_enforced_when_configured(self) -> None:
        provider = JWTIdentityProvider(key=SECRET, algorithms=["HS256"], audience="trustlink")

        assert (await provider.verify(make_token({"sub": "a", "aud": "trustlink"}))).uid == "a"
        with pytest.raises(AuthenticationError):
            await provider.verify(make_token({"sub": "a", "aud": "someone-else"}))


class TestStaticIdentityProvider:
    async def test_token_is_uid(self) -> None:
        identity = await StaticIdentityProvider().verify("alice")
        assert identity.uid == "alice"

    async def test_blank_token_rejected(self) -> None:
        with pytest.raises(AuthenticationError):
            await StaticIdentityProvider().verify("   ")


class TestCreateIdentityProvider:
    def test_static(self) -> None:
        assert isinstance(
            create_identity_provider(AuthConfig(provider="static")), StaticIdentityProvider
        )

    def test_jwt_requires_key(self) -> None:
        with pytest.raises(RuntimeError):
            create_identity_provider(AuthConfig(provider="jwt"))

    def test_jwt_with_key(self) -> None:
        provider = create_identity_provider(AuthConfig(provider="jwt", jwt_key=SECRET))
        assert isinstance(provider, JWTIdentityProvider)

"""Unit tests for JWTAuthProvider: claim mapping, local tokens and the JWKS path."""

from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from jose import jwt as jose_jwt

from infrastructure.auth import jwt_provider as jwt_provider_module
from infrastructure.auth.jwt_provider import (
    JWTAuthProvider,
    _get_jwks_keys,
    _principal_from_payload,
)
from infrastructure.auth.provider import TokenUser

JWKS_URL = "https://example.supabase.co/auth/v1/.well-known/jwks.json"


def _make_hs256_token(payload: dict, secret: str = "test-secret") -> str:
    return jose_jwt.encode(payload, secret, algorithm="HS256")


def _mock_jwks_client(jwks: dict | None = None, error: Exception | None = None) -> AsyncMock:
    response = MagicMock()
    response.json.return_value = jwks or {"keys": []}
    response.raise_for_status = MagicMock()

    client = AsyncMock()
    if error is not None:
        client.get.side_effect = error
    else:
        client.get.return_value = response
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


@pytest.fixture(autouse=True)
def _clear_jwks_cache():
    jwt_provider_module._jwks_cache = None
    yield
    jwt_provider_module._jwks_cache = None


@pytest.fixture
def provider() -> JWTAuthProvider:
    return JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=30)


class TestPrincipalFromPayload:
    def test_maps_signup_metadata(self):
        user_id = uuid4()
        principal = _principal_from_payload(
            {
                "sub": str(user_id),
                "email": "alice@example.com",
                "role": "authenticated",
                "user_metadata": {"name": "Alice", "bio": "Engineer"},
            }
        )

        assert principal is not None
        assert principal.id == user_id
        assert principal.display_name == "Alice"
        assert principal.bio == "Engineer"
        assert principal.role == "authenticated"

    def test_falls_back_through_name_claims(self):
        principal = _principal_from_payload(
            {
                "sub": str(uuid4()),
                "email": "bob@example.com",
                "user_metadata": {"full_name": "Bob Builder"},
            }
        )

        assert principal is not None
        assert principal.display_name == "Bob Builder"

    def test_no_metadata_leaves_name_and_bio_empty(self):
        principal = _principal_from_payload({"sub": str(uuid4()), "email": "c@example.com"})

        assert principal is not None
        assert principal.display_name is None
        assert principal.bio is None

    @pytest.mark.parametrize(
        "payload",
        [
            {"email": "user@example.com"},
            {"sub": str(uuid4())},
            {"sub": "", "email": "user@example.com"},
            {"sub": "not-a-uuid", "email": "user@example.com"},
        ],
    )
    def test_rejects_incomplete_identity(self, payload: dict):
        assert _principal_from_payload(payload) is None


class TestHs256Tokens:
    async def test_created_token_validates_with_metadata(self, provider: JWTAuthProvider):
        user = TokenUser(id=uuid4(), email="alice@example.com", display_name="Alice", bio="Hi")

        result = await provider.validate_token(provider.create_token(user))

        assert result is not None
        assert result.id == user.id
        assert result.display_name == "Alice"
        assert result.bio == "Hi"
        assert result.role == "authenticated"

    async def test_wrong_secret_is_rejected(self, provider: JWTAuthProvider):
        token = _make_hs256_token(
            {"sub": str(uuid4()), "email": "x@example.com", "exp": 9999999999},
            secret="other-secret",
        )

        assert await provider.validate_token(token) is None

    async def test_garbage_token_is_rejected(self, provider: JWTAuthProvider):
        assert await provider.validate_token("not.a.jwt") is None

    async def test_token_without_email_is_rejected(self, provider: JWTAuthProvider):
        token = _make_hs256_token({"sub": str(uuid4()), "exp": 9999999999})

        assert await provider.validate_token(token) is None


class TestGetJwksKeys:
    async def test_returns_empty_without_supabase_url(self):
        with patch.object(jwt_provider_module, "settings") as mock_settings:
            mock_settings.supabase_jwks_url = ""

            assert await _get_jwks_keys() == {}

    async def test_fetches_once_and_caches_by_kid(self):
        client = _mock_jwks_client(
            {
                "keys": [
                    {"kid": "key-1", "kty": "EC"},
                    {"kty": "EC"},
                ]
            }
        )

        with (
            patch.object(jwt_provider_module, "settings") as mock_settings,
            patch.object(jwt_provider_module, "httpx") as mock_httpx,
        ):
            mock_settings.supabase_jwks_url = JWKS_URL
            mock_httpx.AsyncClient.return_value = client

            first = await _get_jwks_keys()
            second = await _get_jwks_keys()

        assert list(first) == ["key-1"]
        assert second == first
        client.get.assert_called_once()

    async def test_fetch_failure_returns_empty(self):
        client = _mock_jwks_client(error=Exception("Connection refused"))

        with (
            patch.object(jwt_provider_module, "settings") as mock_settings,
            patch.object(jwt_provider_module, "httpx") as mock_httpx,
        ):
            mock_settings.supabase_jwks_url = JWKS_URL
            mock_httpx.AsyncClient.return_value = client

            assert await _get_jwks_keys() == {}


class TestValidateEs256:
    async def test_missing_kid_is_rejected(self, provider: JWTAuthProvider):
        assert await provider._validate_es256("t.o.k", {"alg": "ES256"}) is None

    async def test_unknown_kid_refetches_once(self, provider: JWTAuthProvider):
        with patch.object(
            jwt_provider_module, "_get_jwks_keys", new_callable=AsyncMock
        ) as mock_get_jwks:
            mock_get_jwks.return_value = {"other-kid": {"kty": "EC"}}

            result = await provider._validate_es256("t.o.k", {"alg": "ES256", "kid": "missing"})

        assert result is None
        assert mock_get_jwks.call_count == 2

    async def test_rotated_key_found_after_refetch(self, provider: JWTAuthProvider):
        key_data = {"kid": "rotated", "kty": "EC", "crv": "P-256"}
        payload = {"sub": str(uuid4()), "email": "rotated@example.com"}

        with (
            patch.object(
                jwt_provider_module,
                "_get_jwks_keys",
                new_callable=AsyncMock,
                side_effect=[{}, {"rotated": key_data}],
            ),
            patch.object(jwt_provider_module, "ECKey") as mock_eckey_cls,
            patch.object(jwt_provider_module, "jwt") as mock_jwt,
        ):
            mock_jwt.decode.return_value = payload

            result = await provider._validate_es256("t.o.k", {"alg": "ES256", "kid": "rotated"})

        assert result == payload
        mock_eckey_cls.assert_called_once_with(key_data, algorithm="ES256")

    async def test_validate_token_routes_es256_header(self, provider: JWTAuthProvider):
        user_id = uuid4()
        payload = {
            "sub": str(user_id),
            "email": "es@example.com",
            "user_metadata": {"name": "Es User"},
        }

        with patch.object(jwt_provider_module, "jwt") as mock_jwt:
            mock_jwt.get_unverified_header.return_value = {"alg": "ES256", "kid": "k1"}
            with patch.object(provider, "_validate_es256", new_callable=AsyncMock) as mock_es256:
                mock_es256.return_value = payload

                result = await provider.validate_token("es.token.here")

        mock_es256.assert_called_once_with("es.token.here", {"alg": "ES256", "kid": "k1"})
        assert result is not None
        assert result.id == user_id
        assert result.display_name == "Es User"

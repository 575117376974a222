"""Authentication gate, token adapter and dependency tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
import os
import unittest

import jwt
from fastapi import Request
from fastapi.testclient import TestClient

from bloglist.adapters.auth import AuthVerificationError, JwtTokenProvider, MockTokenProvider
from bloglist.core.config import Settings, get_settings
from bloglist.errors import Forbidden, TokenInvalid, TokenMissing, UserNotFound
from bloglist.main import create_app
from bloglist.repositories.memory import InMemoryStore
from bloglist.routes.dependencies import get_post_service, get_token_provider
from bloglist.schemas.auth import AuthPrincipal
from bloglist.schemas.post import Post
from bloglist.services.auth_gate import AuthGate, ensure_post_owner, extract_bearer_token

_TEST_SECRET = "test-secret-key-for-bloglist-api-tests"


class _SettingsEnvCase(unittest.TestCase):
    _env_keys = (
        "BLOGLIST_AUTH_PROVIDER",
        "BLOGLIST_SECRET_KEY",
    )

    def setUp(self) -> None:
        self._old_env = {k: os.environ.get(k) for k in self._env_keys}
        os.environ["BLOGLIST_AUTH_PROVIDER"] = "jwt"
        os.environ["BLOGLIST_SECRET_KEY"] = _TEST_SECRET
        get_settings.cache_clear()

    def tearDown(self) -> None:
        for key, value in self._old_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        get_settings.cache_clear()


class _CapturingPostService:
    def __init__(self) -> None:
        self.owner_ids: list[str] = []

    def create_post(self, *, owner, title, url, author=None, likes=None) -> Post:
        self.owner_ids.append(owner.id)
        return Post(id="post-1", title=title, author=author, url=url, likes=likes or 0)


class ExtractBearerTokenTests(unittest.TestCase):
    def test_bearer_prefix_is_stripped(self) -> None:
        self.assertEqual(extract_bearer_token("Bearer abc.def.ghi"), "abc.def.ghi")

    def test_missing_header_gives_none(self) -> None:
        self.assertIsNone(extract_bearer_token(None))
        self.assertIsNone(extract_bearer_token(""))

    def test_other_schemes_give_none(self) -> None:
        self.assertIsNone(extract_bearer_token("Basic dXNlcjpwYXNz"))
        self.assertIsNone(extract_bearer_token("bearer abc"))
        self.assertIsNone(extract_bearer_token("Bearerabc"))


class AuthGateUnitTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = InMemoryStore()
        self.user = self.store.create_user(username="owner", name="Owner", password_hash="x")
        self.provider = JwtTokenProvider(_TEST_SECRET)
        self.gate = AuthGate(store=self.store, token_provider=self.provider)

    def test_missing_token_is_rejected_as_token_missing(self) -> None:
        with self.assertRaises(TokenMissing) as context:
            self.gate.authenticate(None)
        self.assertEqual(context.exception.status_code, 401)
        self.assertEqual(context.exception.payload.code, "TOKEN_MISSING")

    def test_bad_signature_is_rejected_as_token_invalid(self) -> None:
        forged = JwtTokenProvider("another-secret-key-entirely-different").issue_token(
            user_id=self.user.id,
            username=self.user.username,
        )

        with self.assertRaises(TokenInvalid) as context:
            self.gate.authenticate(forged)
        self.assertEqual(context.exception.status_code, 401)

    def test_token_without_identity_claim_is_rejected(self) -> None:
        token = jwt.encode({"username": "owner"}, _TEST_SECRET, algorithm="HS256")

        with self.assertRaises(TokenInvalid):
            self.gate.authenticate(token)

    def test_unknown_subject_is_rejected_as_user_not_found(self) -> None:
        token = self.provider.issue_token(user_id="missing-user", username="ghost")

        with self.assertRaises(UserNotFound) as context:
            self.gate.authenticate(token)
        self.assertEqual(context.exception.status_code, 401)
        self.assertEqual(context.exception.payload.code, "USER_NOT_FOUND")

    def test_valid_token_resolves_user(self) -> None:
        token = self.provider.issue_token(user_id=self.user.id, username=self.user.username)

        self.assertIs(self.gate.authenticate(token), self.user)

    def test_ownership_mismatch_is_forbidden(self) -> None:
        other = self.store.create_user(username="other", name="Other", password_hash="x")
        post = self.store.create_post_for_owner(owner=self.user, title="T", author=None, url="u", likes=0)

        ensure_post_owner(self.user, post)
        with self.assertRaises(Forbidden) as context:
            ensure_post_owner(other, post)
        self.assertEqual(context.exception.status_code, 403)


class TokenProviderUnitTests(unittest.TestCase):
    def test_jwt_provider_round_trips_identity(self) -> None:
        provider = JwtTokenProvider(_TEST_SECRET)

        principal = provider.verify_token(provider.issue_token(user_id="user-1", username="matti"))

        self.assertEqual(principal, AuthPrincipal(user_id="user-1", username="matti"))

    def test_jwt_provider_rejects_expired_token(self) -> None:
        past = datetime.now(UTC) - timedelta(hours=2)
        token = jwt.encode({"id": "user-1", "exp": past}, _TEST_SECRET, algorithm="HS256")

        with self.assertRaises(AuthVerificationError):
            JwtTokenProvider(_TEST_SECRET).verify_token(token)

    def test_jwt_provider_rejects_malformed_token(self) -> None:
        with self.assertRaises(AuthVerificationError):
            JwtTokenProvider(_TEST_SECRET).verify_token("not-a-jwt")

    def test_mock_provider_parses_test_tokens(self) -> None:
        provider = MockTokenProvider()

        principal = provider.verify_token(provider.issue_token(user_id="user-9", username="liisa"))

        self.assertEqual(principal.user_id, "user-9")
        self.assertEqual(principal.username, "liisa")

    def test_mock_provider_rejects_invalid_token(self) -> None:
        with self.assertRaises(AuthVerificationError):
            MockTokenProvider().verify_token("invalid")

    def test_dependency_selects_provider_from_settings(self) -> None:
        jwt_settings = Settings(auth_provider="jwt", secret_key=_TEST_SECRET)
        mock_settings = Settings(auth_provider="mock", secret_key=_TEST_SECRET)

        self.assertIsInstance(get_token_provider(jwt_settings), JwtTokenProvider)
        self.assertIsInstance(get_token_provider(mock_settings), MockTokenProvider)


class AuthApiTests(_SettingsEnvCase):
    def _create_user(self, app) -> tuple[str, str]:
        user = app.state.store.create_user(username="matti", name="Matti", password_hash="x")
        token = JwtTokenProvider(_TEST_SECRET).issue_token(user_id=user.id, username=user.username)
        return user.id, token

    def test_missing_authorization_header_returns_401_and_no_post_side_effect(self) -> None:
        app = create_app()
        client = TestClient(app)

        response = client.post("/api/posts", json={"title": "Moi", "url": "http://google.com"})

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["code"], "TOKEN_MISSING")
        self.assertEqual(app.state.store.post_write_count, 0)

    def test_non_bearer_scheme_counts_as_missing_token(self) -> None:
        app = create_app()
        client = TestClient(app)

        response = client.post(
            "/api/posts",
            headers={"Authorization": "Basic dXNlcjpwYXNz"},
            json={"title": "Moi", "url": "http://google.com"},
        )

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["code"], "TOKEN_MISSING")

    def test_invalid_bearer_token_returns_401_and_no_post_side_effect(self) -> None:
        app = create_app()
        client = TestClient(app)

        response = client.post(
            "/api/posts",
            headers={"Authorization": "Bearer not-a-valid-token"},
            json={"title": "Moi", "url": "http://google.com"},
        )

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["code"], "TOKEN_INVALID")
        self.assertEqual(app.state.store.post_write_count, 0)

    def test_expired_token_returns_401_token_invalid(self) -> None:
        app = create_app()
        client = TestClient(app)
        user_id, _ = self._create_user(app)
        expired = jwt.encode(
            {"id": user_id, "exp": datetime.now(UTC) - timedelta(minutes=5)},
            _TEST_SECRET,
            algorithm="HS256",
        )

        response = client.post(
            "/api/posts",
            headers={"Authorization": f"Bearer {expired}"},
            json={"title": "Moi", "url": "http://google.com"},
        )

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["code"], "TOKEN_INVALID")

    def test_unknown_user_returns_401_user_not_found(self) -> None:
        app = create_app()
        client = TestClient(app)
        token = JwtTokenProvider(_TEST_SECRET).issue_token(user_id="nobody", username="nobody")

        response = client.post(
            "/api/posts",
            headers={"Authorization": f"Bearer {token}"},
            json={"title": "Moi", "url": "http://google.com"},
        )

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["code"], "USER_NOT_FOUND")
        self.assertEqual(app.state.store.post_write_count, 0)

    def test_valid_token_resolves_user_for_downstream_handler(self) -> None:
        app = create_app()
        client = TestClient(app)
        user_id, token = self._create_user(app)

        capturing_service = _CapturingPostService()
        app.dependency_overrides[get_post_service] = lambda: capturing_service

        response = client.post(
            "/api/posts",
            headers={"Authorization": f"Bearer {token}"},
            json={"title": "Moi", "url": "http://google.com"},
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(capturing_service.owner_ids, [user_id])

    def test_token_and_user_are_attached_to_request_state(self) -> None:
        app = create_app()
        client = TestClient(app)
        user_id, token = self._create_user(app)

        capturing_service = _CapturingPostService()
        observed: dict[str, str] = {}

        def _override_post_service(request: Request) -> _CapturingPostService:
            observed["token"] = request.state.token
            observed["user_id"] = request.state.user.id
            return capturing_service

        app.dependency_overrides[get_post_service] = _override_post_service

        response = client.post(
            "/api/posts",
            headers={"Authorization": f"Bearer {token}"},
            json={"title": "Moi", "url": "http://google.com"},
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(observed, {"token": token, "user_id": user_id})

    def test_openapi_documents_contract_response_codes(self) -> None:
        client = TestClient(create_app())

        response = client.get("/openapi.json")
        self.assertEqual(response.status_code, 200)
        paths = response.json()["paths"]

        self.assertEqual(set(paths["/api/posts"]["post"]["responses"].keys()), {"201", "400", "401"})
        self.assertEqual(
            set(paths["/api/posts/{postId}"]["delete"]["responses"].keys()),
            {"204", "401", "403", "404"},
        )
        self.assertEqual(set(paths["/api/login"]["post"]["responses"].keys()), {"200", "401"})

    def test_read_routes_do_not_require_token(self) -> None:
        client = TestClient(create_app())

        self.assertEqual(client.get("/api/posts").status_code, 200)
        self.assertEqual(client.get("/api/posts/stats").status_code, 200)
        self.assertEqual(client.get("/api/users").status_code, 200)


if __name__ == "__main__":
    unittest.main()

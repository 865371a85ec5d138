from __future__ import annotations

from types import SimpleNamespace
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from src.app.deps import CurrentUser, get_catalog_service, get_supabase, require_admin
from src.app.infra.db.memory_catalog_repo import InMemoryCatalogRepository
from src.app.main import app
from src.app.services.catalog_service import CatalogService


class FakeSupabaseAuth:
    def __init__(self) -> None:
        self.users_by_token: dict[str, SimpleNamespace] = {}
        self.passwords: dict[str, tuple[str, SimpleNamespace]] = {}

    def add_user(self, token: str, email: str, password: str = "secret", name: str | None = None) -> SimpleNamespace:
        user = SimpleNamespace(
            id=f"user-{len(self.users_by_token) + 1}",
            email=email,
            user_metadata={"name": name} if name else {},
        )
        self.users_by_token[token] = user
        self.passwords[email] = (password, user)
        return user

    def get_user(self, token: str) -> SimpleNamespace:
        user = self.users_by_token.get(token)
        if user is None:
            raise RuntimeError("invalid JWT")
        return SimpleNamespace(user=user)

    def sign_in_with_password(self, credentials: dict[str, str]) -> SimpleNamespace:
        stored = self.passwords.get(credentials["email"])
        if stored is None or stored[0] != credentials["password"]:
            raise RuntimeError("Invalid login credentials")
        password, user = stored
        token = next(t for t, u in self.users_by_token.items() if u is user)
        return SimpleNamespace(
            user=user,
            session=SimpleNamespace(access_token=token, expires_in=3600),
        )


class FakeSupabase:
    def __init__(self) -> None:
        self.auth = FakeSupabaseAuth()


@pytest.fixture
def repo() -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository()


@pytest.fixture
def catalog(repo: InMemoryCatalogRepository) -> CatalogService:
    return CatalogService(repo)


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    supa = FakeSupabase()
    supa.auth.add_user("good-token", "admin@example.com", password="hunter2", name="Admin")
    return supa


@pytest.fixture
def client(catalog: CatalogService, fake_supabase: FakeSupabase) -> Iterator[TestClient]:
    app.dependency_overrides[get_catalog_service] = lambda: catalog
    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_user() -> CurrentUser:
    return CurrentUser(id="admin-1", email="admin@example.com", name="Admin")


@pytest.fixture
def admin_client(client: TestClient, admin_user: CurrentUser) -> TestClient:
    app.dependency_overrides[require_admin] = lambda: admin_user
    return client

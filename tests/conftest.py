"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from view_layer.config import Settings
from view_layer.helpers.navigation import Navigation
from view_layer.main import app as fastapi_app


class StubResolver:
    """Resolver returning canned sources and recording every lookup."""

    def __init__(self, templates=None, error=None):
        self.templates = dict(templates or {})
        self.error = error
        self.calls = []

    def resolve(self, name):
        self.calls.append(name)
        if self.error is not None:
            raise self.error
        return self.templates.get(name)


class StubAcl:
    """ACL allowing only the (role, resource, privilege) triples it was given."""

    def __init__(self, allowed=()):
        self.allowed = set(allowed)

    def is_allowed(self, role=None, resource=None, privilege=None):
        return (role, resource, privilege) in self.allowed


@pytest.fixture
def test_client():
    """FastAPI test client with lifespan context."""
    with TestClient(fastapi_app) as client:
        yield client


@pytest.fixture
def stub_resolver_factory():
    """Build stub resolvers: ``factory({"name": "source"})``."""
    return StubResolver


@pytest.fixture
def stub_acl_factory():
    return StubAcl


@pytest.fixture
def template_dirs(tmp_path: Path) -> tuple[Path, Path]:
    """Two template directories; ``app`` overrides ``layout.html`` from ``library``."""
    library = tmp_path / "library"
    app = tmp_path / "app"
    (library / "partials").mkdir(parents=True)
    app.mkdir()

    (library / "layout.html").write_text("<main>library {{ content }}</main>", encoding="utf-8")
    (library / "partials" / "item.html").write_text("<li>{{ name }}</li>", encoding="utf-8")
    (library / "only-library.phtml").write_text("phtml", encoding="utf-8")
    (app / "layout.html").write_text("<main>{{ content }}</main>", encoding="utf-8")
    return library, app


@pytest.fixture
def mock_settings(tmp_path: Path) -> Settings:
    """Settings instance with test values, independent of the environment."""
    return Settings(
        api_host="0.0.0.0",
        api_port=8000,
        log_level="debug",
        log_dir=str(tmp_path / "logs"),
        template_paths=str(tmp_path),
        template_suffix=".html",
        json_merge_unnamed_children=False,
        server_url_use_proxy=False,
        _env_file=None,
    )


@pytest.fixture(autouse=True)
def reset_navigation_defaults():
    """Navigation keeps class-wide ACL/role defaults; start every test clean."""
    Navigation.set_default_acl(None)
    Navigation.set_default_role(None)
    yield
    Navigation.set_default_acl(None)
    Navigation.set_default_role(None)

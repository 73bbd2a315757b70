import pytest
from fastapi.testclient import TestClient

from runtime_dynamics.core.config import Settings
from runtime_dynamics.main import create_app

ENV_VARS = [
    "DATASTORE_NAME",
    "FRONTEND_ENDPOINT",
    "FIREBASE_API_KEY",
    "FIREBASE_AUTH_DOMAIN",
    "GOOGLE_PROJECT_ID",
    "HOST",
    "LISTEN_PORT",
    "DEBUG",
    "LOG_DIR",
    "STATIC_DIR",
    "IS_DEV",
    "NO_STATIC",
    "TLS_CERT",
    "TLS_KEY",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the host environment out of Settings."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def static_root(tmp_path):
    """A small static tree, including files that collide with reserved URLs."""
    root = tmp_path / "static"
    (root / "css").mkdir(parents=True)
    (root / "js").mkdir()
    (root / "images").mkdir()
    (root / "docs").mkdir()

    (root / "about.html").write_text("<h1>About us</h1>")
    (root / "index.html").write_text("<h1>static index</h1>")
    (root / "desktop-login.html").write_text("<h1>desktop login</h1>")
    (root / "css" / "site.css").write_text("body { color: red; }")
    (root / "js" / "app.js").write_text("console.log('hi');")
    (root / "images" / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\nfake")
    (root / "docs" / "index.html").write_text("<h1>docs</h1>")
    return root


@pytest.fixture
def make_settings(static_root):
    def _make(**overrides):
        values = {"STATIC_DIR": str(static_root)}
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def client(make_settings):
    """Production-mode client serving static_root."""
    with TestClient(create_app(make_settings())) as c:
        yield c

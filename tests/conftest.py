from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from contact_site.core.config import Settings
from contact_site.db.store import InMemoryMessageStore
from contact_site.main import create_app

INDEX_HTML = "<!DOCTYPE html><title>Home</title><h1>Hello</h1>"


def build_site(root: Path) -> Path:
    """Public root with a few assets plus a secret file next to it."""
    public = root / "public"
    (public / "css").mkdir(parents=True)
    (public / "index.html").write_text(INDEX_HTML)
    (public / "css" / "site.css").write_text("body { color: red; }")
    (public / "logo.PNG").write_bytes(b"\x89PNG\r\n")
    (public / "notes.txt").write_text("plain notes")
    (root / "secret.txt").write_text("top secret")
    return public


def make_settings(tmp_path: Path, **overrides) -> Settings:
    values = {
        "public_dir": tmp_path / "public",
        "message_store": tmp_path / "data" / "messages.json",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def public_dir(tmp_path: Path) -> Path:
    return build_site(tmp_path)


@pytest.fixture
def settings(tmp_path: Path, public_dir: Path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture
def store() -> InMemoryMessageStore:
    return InMemoryMessageStore()


@pytest.fixture
def client(settings: Settings, store: InMemoryMessageStore):
    with TestClient(create_app(settings=settings, store=store)) as test_client:
        yield test_client

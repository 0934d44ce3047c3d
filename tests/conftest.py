import pytest
from fastapi.testclient import TestClient

from notes_website.backend.config import Settings
from notes_website.backend.main import create_app
from notes_website.backend.services import NoteStore


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(notes_file=tmp_path / "notes.json", website_dir=tmp_path / "website")


@pytest.fixture
def client(settings) -> TestClient:
    return TestClient(create_app(settings))


@pytest.fixture
def store(tmp_path) -> NoteStore:
    return NoteStore(tmp_path / "notes.json")

from pathlib import Path

from notes_website.backend.config import Settings


def test_defaults_when_env_is_empty(monkeypatch) -> None:
    for name in ("NOTES_FILE", "NOTES_WEBSITE_DIR", "HOST", "PORT", "NOTES_SERIALIZE_WRITES", "NOTES_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings.from_env()
    assert settings.port == 3000
    assert settings.serialize_writes is False
    assert settings.notes_file == Path("notes.json")
    assert (settings.website_dir / "index.html").is_file()


def test_env_overrides(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("NOTES_FILE", str(tmp_path / "n.json"))
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("NOTES_SERIALIZE_WRITES", "yes")
    monkeypatch.setenv("NOTES_LOG_LEVEL", "debug")
    settings = Settings.from_env()
    assert settings.notes_file == Path(tmp_path / "n.json")
    assert settings.port == 8080
    assert settings.serialize_writes is True
    assert settings.log_level == "DEBUG"

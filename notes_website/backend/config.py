import os
from dataclasses import dataclass
from pathlib import Path


def _package_root() -> Path:
    # notes_website/backend/config.py -> notes_website
    return Path(__file__).resolve().parents[1]


def _getenv_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return default if value is None or value == "" else value


def _getenv_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return int(value)


def _getenv_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


@dataclass(frozen=True)
class Settings:
    notes_file: Path = Path("notes.json")
    website_dir: Path = _package_root() / "website"
    host: str = "0.0.0.0"
    port: int = 3000
    serialize_writes: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        return cls(
            notes_file=Path(_getenv_str("NOTES_FILE", str(defaults.notes_file))).expanduser(),
            website_dir=Path(_getenv_str("NOTES_WEBSITE_DIR", str(defaults.website_dir))).expanduser(),
            host=_getenv_str("HOST", defaults.host),
            port=_getenv_int("PORT", defaults.port),
            serialize_writes=_getenv_bool("NOTES_SERIALIZE_WRITES", defaults.serialize_writes),
            log_level=_getenv_str("NOTES_LOG_LEVEL", defaults.log_level).upper(),
        )

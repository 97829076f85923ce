import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = ROOT / "data"

DEFAULT_MAX_RESULTS = 10


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _path_env(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if not raw:
        return default
    path = Path(raw).expanduser()
    return path if path.is_absolute() else ROOT / path


@dataclass(frozen=True)
class Settings:
    """Runtime settings. Relative data paths resolve against the project root."""

    doctors_path: Path = DATA_DIR / "doctors.json"
    clubs_path: Path = DATA_DIR / "htuClubs.json"
    name_system_path: Path = DATA_DIR / "htuNameSystem.json"
    max_results: int = DEFAULT_MAX_RESULTS
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        max_results = _int_env("MAX_RESULTS", DEFAULT_MAX_RESULTS)
        if max_results < 1:
            max_results = DEFAULT_MAX_RESULTS
        return cls(
            doctors_path=_path_env("DOCTORS_DATA_PATH", cls.doctors_path),
            clubs_path=_path_env("CLUBS_DATA_PATH", cls.clubs_path),
            name_system_path=_path_env("NAME_SYSTEM_PATH", cls.name_system_path),
            max_results=max_results,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

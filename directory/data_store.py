import hashlib
import json
import logging
import re
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .config import DATA_DIR, Settings
from .records import BuildingInfo, Club, Person

logger = logging.getLogger(__name__)

CLUB_TYPE_FIELD = "Club/ Volunteer team"
CLUB_NAME_FIELD = "Name of it "
CLUB_EMAIL_FIELD = "The email"
CLUB_SOCIAL_FIELD = "Instagram account link"
CLUB_ABOUT_FIELD = "What is yours club or volunteer team about ?"

_BUILDING_PREFIX = re.compile(r'\s*([A-Za-z]+)')


class DataLoadError(Exception):
    """A data source is missing or malformed."""


# --------------------------
# --- Loaders --------------
# --------------------------
def _read_json(path: Path):
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise DataLoadError(f"Data file not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise DataLoadError(f"Could not read {path}: {e}") from e


def _people_candidates(path: Path):
    yield path
    yield DATA_DIR / "doctors.json"
    yield Path.cwd() / "doctors.json"


def load_people(path: Path) -> Tuple[Person, ...]:
    tried = []
    for candidate in _people_candidates(Path(path)):
        tried.append(str(candidate))
        if candidate.is_file():
            rows = _read_json(candidate)
            break
    else:
        raise DataLoadError(f"Doctors data file not found. Tried: {', '.join(tried)}")

    if not isinstance(rows, list):
        raise DataLoadError(f"Expected a list of doctors in {candidate}")
    people = tuple(Person.from_dict(row) for row in rows if isinstance(row, dict))
    logger.debug("Loaded %d doctors from %s", len(people), candidate)
    return people


def _clean(value, default: str = "") -> str:
    if value is None or value == "":
        return default
    return str(value).strip()


def load_clubs(path: Path) -> Tuple[Club, ...]:
    rows = _read_json(Path(path))
    if not isinstance(rows, list):
        raise DataLoadError(f"Expected a list of clubs in {path}")

    clubs = []
    seen_names = set()
    for index, row in enumerate(rows):
        if not isinstance(row, dict) or not row.get(CLUB_TYPE_FIELD) or not row.get(CLUB_NAME_FIELD):
            logger.warning("Skipping invalid club at index %d: missing required fields", index)
            continue
        name = re.sub(r'\s+', ' ', str(row[CLUB_NAME_FIELD]).strip())
        if name in seen_names:
            logger.warning('Skipping duplicate club "%s" at index %d', name, index)
            continue
        seen_names.add(name)
        clubs.append(Club(
            name=name,
            category=_clean(row.get(CLUB_TYPE_FIELD), "N/A"),
            email=_clean(row.get(CLUB_EMAIL_FIELD), "N/A"),
            social_link=_clean(row.get(CLUB_SOCIAL_FIELD), "N/A"),
            description=_clean(row.get(CLUB_ABOUT_FIELD)),
        ))

    logger.info("Loaded %d valid clubs (filtered %d invalid/duplicate entries)",
                len(clubs), len(rows) - len(clubs))
    return tuple(clubs)


def load_name_system(path: Path) -> Tuple[Mapping[str, BuildingInfo], tuple]:
    data = _read_json(Path(path))
    if not isinstance(data, dict):
        raise DataLoadError(f"Expected an object in {path}")

    raw_legend = data.get("legend") or {}
    raw_examples = data.get("examples") or []
    if not isinstance(raw_legend, dict):
        raise DataLoadError(f"Expected 'legend' to be an object in {path}")
    if not isinstance(raw_examples, list):
        raise DataLoadError(f"Expected 'examples' to be a list in {path}")

    legend = {}
    for code, info in raw_legend.items():
        info = info if isinstance(info, dict) else {}
        key = str(code).strip().upper()
        legend[key] = BuildingInfo(
            code=key,
            name=_clean(info.get("name")),
            nickname=_clean(info.get("nickname")),
            color=_clean(info.get("color")),
        )
    examples = tuple(ex for ex in raw_examples if isinstance(ex, dict))
    return MappingProxyType(legend), examples


# --------------------------
# --- Hash helper ----------
# --------------------------
def _hash_payload(people, clubs, legend) -> str:
    payload = {
        "people": [p.name for p in people],
        "departments": [p.department for p in people],
        "clubs": [c.name for c in clubs],
        "legend": sorted(legend),
    }
    s = json.dumps(payload, sort_keys=True).encode("utf-8")
    return hashlib.sha256(s).hexdigest()


# --------------------------
# --- Snapshot -------------
# --------------------------
def extract_departments(people) -> Tuple[str, ...]:
    return tuple(sorted({p.department.strip() for p in people if p.department.strip()}))


@dataclass(frozen=True)
class Snapshot:
    """One complete, read-only generation of the directory data."""

    people: Tuple[Person, ...] = ()
    clubs: Tuple[Club, ...] = ()
    legend: Mapping[str, BuildingInfo] = field(default_factory=lambda: MappingProxyType({}))
    examples: tuple = ()
    departments: Tuple[str, ...] = ()
    generation: int = 0
    fingerprint: str = ""
    loaded_at: Optional[datetime] = None

    @classmethod
    def empty(cls, generation: int = 0) -> "Snapshot":
        return cls(generation=generation, loaded_at=datetime.now(timezone.utc))


def build_snapshot(settings: Settings, generation: int = 1) -> Snapshot:
    people = load_people(settings.doctors_path)
    clubs = load_clubs(settings.clubs_path)
    legend, examples = load_name_system(settings.name_system_path)
    return Snapshot(
        people=people,
        clubs=clubs,
        legend=legend,
        examples=examples,
        departments=extract_departments(people),
        generation=generation,
        fingerprint=_hash_payload(people, clubs, legend),
        loaded_at=datetime.now(timezone.utc),
    )


class DirectoryStore:
    """Holds the published snapshot and swaps it wholesale on reload."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._reload_lock = threading.Lock()
        try:
            self._snapshot = build_snapshot(settings, generation=1)
        except DataLoadError as e:
            logger.error("Initial data load failed, serving an empty directory: %s", e)
            self._snapshot = Snapshot.empty(generation=1)

    @property
    def current(self) -> Snapshot:
        return self._snapshot

    def reload(self) -> dict:
        with self._reload_lock:
            generation = self._snapshot.generation + 1
            try:
                snapshot = build_snapshot(self.settings, generation=generation)
            except DataLoadError as e:
                logger.error("Reload failed, keeping generation %d: %s", self._snapshot.generation, e)
                return {"ok": False, "error": str(e)}
            self._snapshot = snapshot

        logger.info("Directory reloaded: %d doctors, %d clubs (generation %d)",
                    len(snapshot.people), len(snapshot.clubs), snapshot.generation)
        return {
            "ok": True,
            "doctors": len(snapshot.people),
            "clubs": len(snapshot.clubs),
            "generation": snapshot.generation,
        }


# --------------------------
# --- Derived lookups ------
# --------------------------
def get_building_info(snapshot: Snapshot, office_code) -> Optional[BuildingInfo]:
    if not office_code or not snapshot.legend:
        return None
    match = _BUILDING_PREFIX.match(str(office_code))
    if not match:
        return None
    return snapshot.legend.get(match.group(1).upper())


def get_stats(snapshot: Snapshot) -> dict:
    return {
        "total_doctors": len(snapshot.people),
        "departments": len(snapshot.departments),
        "total_clubs": len(snapshot.clubs),
        "club_types": len({c.category for c in snapshot.clubs}),
        "with_office_hours": sum(1 for p in snapshot.people if p.office_hours),
        "with_office": sum(1 for p in snapshot.people if p.office),
    }

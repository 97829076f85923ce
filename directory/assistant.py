"""
Public entry point for the directory lookup core.

``DirectoryAssistant`` wraps a ``DirectoryStore`` and exposes the read
operations (search, clubs, departments, intents) plus ``reload``. Each call
reads the published snapshot once and works on that generation only, so a
reload running in parallel never shows a caller a mix of old and new records.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from . import matcher
from .config import Settings
from .data_store import DirectoryStore, Snapshot, get_building_info, get_stats
from .detectors import Intent, IntentResult, parse_intent
from .records import BuildingInfo, Club, Person

logger = logging.getLogger(__name__)


@dataclass
class Resolution:
    """Data behind one answer; turning it into a message is the caller's job."""

    query: str
    intent: Optional[IntentResult] = None
    people: List[Person] = field(default_factory=list)
    clubs: List[Club] = field(default_factory=list)
    department: Optional[str] = None
    department_faculty: List[Person] = field(default_factory=list)

    @property
    def has_results(self) -> bool:
        return bool(self.people or self.clubs or self.department_faculty)


class DirectoryAssistant:
    def __init__(self, settings: Optional[Settings] = None, store: Optional[DirectoryStore] = None):
        self.settings = settings or (store.settings if store else Settings.from_env())
        self.store = store or DirectoryStore(self.settings)

    @property
    def snapshot(self) -> Snapshot:
        return self.store.current

    def reload(self) -> dict:
        return self.store.reload()

    # --------------------------
    # --- Search ---------------
    # --------------------------
    def search(self, query: str) -> List[Person]:
        return matcher.search_people(self.snapshot, query, self.settings.max_results)

    def search_clubs(self, query: str) -> List[Club]:
        return matcher.search_clubs(self.snapshot, query, self.settings.max_results)

    def get_departments(self) -> List[str]:
        return list(self.snapshot.departments)

    def search_by_department(self, department: str) -> List[Person]:
        return matcher.search_by_department(self.snapshot, department)

    def get_all_clubs(self) -> List[Club]:
        return matcher.get_all_clubs(self.snapshot)

    def suggest(self, query: str) -> List[str]:
        return matcher.suggest_people(self.snapshot, query)

    def suggest_clubs(self, query: str) -> List[str]:
        return matcher.suggest_clubs(self.snapshot, query)

    def get_building_info(self, office_code: str) -> Optional[BuildingInfo]:
        return get_building_info(self.snapshot, office_code)

    def get_stats(self) -> dict:
        return get_stats(self.snapshot)

    # --------------------------
    # --- Intents --------------
    # --------------------------
    def parse_intent(self, query: str) -> Optional[IntentResult]:
        return parse_intent(query)

    def resolve(self, query: str) -> Resolution:
        snapshot = self.snapshot
        limit = self.settings.max_results
        parsed = parse_intent(query)
        resolution = Resolution(query=query or "", intent=parsed)

        if parsed is None:
            resolution.people = matcher.search_people(snapshot, query, limit)
            resolution.clubs = matcher.search_clubs(snapshot, query, limit)
            return resolution

        entity = parsed.entity
        if entity:
            resolution.people = matcher.search_people(snapshot, entity, limit)
            resolution.clubs = matcher.search_clubs(snapshot, entity, limit)

        if parsed.intent == Intent.DEPARTMENT and not resolution.people and entity:
            wanted = entity.lower()
            match = next((d for d in snapshot.departments
                          if wanted in d.lower() or d.lower() in wanted), None)
            if match:
                resolution.department = match
                resolution.department_faculty = matcher.search_by_department(snapshot, match)

        logger.debug("Resolved %r as %s (entity=%r, people=%d, clubs=%d)",
                     query, parsed.intent.value, entity, len(resolution.people), len(resolution.clubs))
        return resolution

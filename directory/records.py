from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Mapping, Union

from .nlp_utils import normalize

_EMPTY_HOURS: Mapping[str, str] = MappingProxyType({})


def _text(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


@dataclass(frozen=True)
class Person:
    name: str
    department: str = ""
    office: str = ""
    school: str = ""
    email: str = ""
    office_hours: Mapping[str, str] = field(default_factory=lambda: _EMPTY_HOURS)

    @property
    def canonical_key(self) -> str:
        return normalize(self.name)

    @classmethod
    def from_dict(cls, row: dict) -> "Person":
        hours = row.get("office_hours") or {}
        if not isinstance(hours, dict):
            hours = {}
        return cls(
            name=_text(row.get("name")),
            department=_text(row.get("department")),
            office=_text(row.get("office")),
            school=_text(row.get("school")),
            email=_text(row.get("email")),
            office_hours=MappingProxyType({str(day): _text(span) for day, span in hours.items()}),
        )


@dataclass(frozen=True)
class Club:
    name: str
    category: str = ""
    email: str = "N/A"
    social_link: str = "N/A"
    description: str = ""

    @property
    def canonical_key(self) -> str:
        return normalize(self.name)


@dataclass(frozen=True)
class BuildingInfo:
    code: str
    name: str = ""
    nickname: str = ""
    color: str = ""


Record = Union[Person, Club]


@dataclass
class ScoredMatch:
    record: Record
    score: int
    matched_fields: List[str] = field(default_factory=list)
    key: str = ""

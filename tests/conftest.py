import json

import pytest

from directory.config import Settings
from directory.data_store import DirectoryStore

PEOPLE = [
    {"name": "Omar Khalil", "department": "Computer Science", "office": "S-321",
     "school": "School of Computing", "email": "omar.khalil@htu.edu.jo",
     "office_hours": {"Sunday": "10:00 - 12:00"}},
    {"name": "Omar", "department": "Civil", "office": "N-101",
     "school": "School of Engineering", "email": "omar@htu.edu.jo"},
    {"name": "Mohammad Al Rashid", "department": "Electrical Engineering", "office": "N-402",
     "school": "School of Engineering", "email": "m.alrashid@htu.edu.jo"},
    {"name": "Lina Haddad", "department": "Computer Science", "office": "IJC 104",
     "school": "School of Computing", "email": "lina.haddad@htu.edu.jo"},
    {"name": "Sara Nasser", "department": "Business"},
]

CLUBS = [
    {"Club/ Volunteer team": "Club", "Name of it ": "Entrepreneurship Club",
     "The email": "ent@htu.edu.jo", "Instagram account link": "https://instagram.com/ent",
     "What is yours club or volunteer team about ?": "Startup workshops and pitch nights."},
    {"Club/ Volunteer team": "Volunteer team", "Name of it ": "Green  Campus Team",
     "The email": "", "Instagram account link": "",
     "What is yours club or volunteer team about ?": "Recycling drives."},
    {"Club/ Volunteer team": "Club", "Name of it ": "Chess Club",
     "The email": "chess@htu.edu.jo", "Instagram account link": "N/A",
     "What is yours club or volunteer team about ?": "Weekly programming-free games."},
]

NAME_SYSTEM = {
    "legend": {
        "N": {"name": "North Building", "nickname": "Engineering", "color": "Blue"},
        "S": {"name": "South Building", "nickname": "Computing", "color": "Orange"},
        "IJC": {"name": "Innovation and Jobs Center", "nickname": "IJC", "color": "Red"},
    },
    "examples": [{"code": "S-321", "building": "South Building", "floor": "3", "room": "21"}],
}


def write_json(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
def settings(tmp_path):
    return Settings(
        doctors_path=write_json(tmp_path / "doctors.json", PEOPLE),
        clubs_path=write_json(tmp_path / "clubs.json", CLUBS),
        name_system_path=write_json(tmp_path / "names.json", NAME_SYSTEM),
        max_results=10,
    )


@pytest.fixture
def store(settings):
    return DirectoryStore(settings)


@pytest.fixture
def snapshot(store):
    return store.current


@pytest.fixture
def json_file(tmp_path):
    def _write(name, payload):
        return write_json(tmp_path / name, payload)
    return _write

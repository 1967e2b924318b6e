"""
Pytest fixtures and test configuration for roster tests.
"""

import logging
from typing import Any, Dict, List

import pytest

from roster.testing.backend import InMemoryBackend
from roster.types import Person

CURRENT_DATE = "June 14, 2010"

NAMES: List[str] = [
    "",  # 0 is never a valid name id
    "John",
    "Smith",
    "Mary",
    "Pickford",
    "Charles",
    "Chaplin",
    "Greta",
    "Garbo",
    "Buster",
    "Keaton",
]


def make_raw_person(person_id: Any = 1, **overrides: Any) -> Dict[str, Any]:
    """A backend-shaped person dict with sensible defaults."""
    data: Dict[str, Any] = {
        "id": person_id,
        "firstNameId": "1",
        "lastNameId": "2",
        "customName": None,
        "birthDate": "15-6-1990",
        "gender": 0,
        "studioId": "PL",
        "portraitBaseId": 3,
        "mood": 0.5,
        "attitude": 0.5,
        "selfEsteem": "0.25",
        "limit": 0.8,
        "state": 0,
        "professions": {"Actor": "0.5"},
        "labels": ["LAZY"],
        "isShady": False,
        "activeOrPlannedMovies": [],
    }
    data.update(overrides)
    return data


@pytest.fixture(autouse=True)
def roster_home(tmp_path, monkeypatch):
    """Point ROSTER_DATA_DIR at a temp dir and reset the roster logger."""
    monkeypatch.setenv("ROSTER_DATA_DIR", str(tmp_path))
    for name in (
        "ROSTER_BACKEND_URL",
        "ROSTER_AUTH_TOKEN",
        "ROSTER_LANGUAGE",
        "ROSTER_SAVE_DELAY",
        "ROSTER_LOG_LEVEL",
        "ROSTER_REQUEST_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
    logger = logging.getLogger("roster")
    handlers = list(logger.handlers)
    yield tmp_path
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers = handlers


@pytest.fixture
def raw_person():
    return make_raw_person()


@pytest.fixture
def person(raw_person):
    return Person.from_dict(raw_person)


@pytest.fixture
def names():
    return list(NAMES)


@pytest.fixture
def raw_actors():
    """Five actors spread over studios and states."""
    return [
        make_raw_person(1, studioId="PL", professions={"Actor": "0.5"}),
        make_raw_person(
            2, firstNameId="3", lastNameId="4", studioId="GB", professions={"Actor": "0.9"}
        ),
        make_raw_person(
            3, firstNameId="5", lastNameId="6", studioId="NONE", professions={"Actor": "0.1"}
        ),
        make_raw_person(
            4,
            firstNameId="7",
            lastNameId="8",
            studioId="EM",
            gender=1,
            state=16,
            professions={"Actor": "0.7"},
        ),
        make_raw_person(
            5,
            firstNameId="9",
            lastNameId="2",
            studioId="GB",
            state=64,
            isShady=True,
            professions={"Actor": "0.3"},
        ),
    ]


@pytest.fixture
def actors(raw_actors):
    return [Person.from_dict(raw) for raw in raw_actors]


@pytest.fixture
def memory_backend(raw_actors):
    """In-memory backend holding the five actors plus one director."""
    persons = raw_actors + [make_raw_person(10, professions={"Director": "0.6"})]
    return InMemoryBackend(persons=persons, names={"en": list(NAMES)}, current_date=CURRENT_DATE)


@pytest.fixture
def make_raw():
    """Factory for backend-shaped person dicts."""
    return make_raw_person

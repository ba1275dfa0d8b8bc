#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests run against an in-memory SQLite record store; no external
services are required.

    # Run all tests
    python -m pytest tests/ -v

    # Using unittest
    python -m unittest discover tests -v
"""

from functools import partial
from typing import Any, Dict

from core.clock import MS_PER_DAY
from core.models import Position, Role, UserProfile
from database.database import make_engine, make_session_factory
from database.models import Base
from database.uow import record_uow

# 2024-01-01T00:00:00Z
T0 = 1_704_067_200_000


def make_test_store():
    """
    Build an in-memory record store.

    Returns (engine, session_factory, uow) where ``uow`` is a zero-argument
    unit-of-work factory suitable for the core services.
    """
    engine = make_engine("sqlite://")
    Base.metadata.create_all(engine)
    session_factory = make_session_factory(engine)
    return engine, session_factory, partial(record_uow, session_factory)


def days(n: float) -> int:
    return int(n * MS_PER_DAY)


def volunteer_data(**overrides) -> Dict[str, Any]:
    data = {
        "role": "volunteer",
        "name": "Asha Rao",
        "email": "asha@example.com",
        "location": "delhi",
        "credential": "opaque-token",
        "skills": ["teaching"],
        "causes": ["education"],
        "availability": ["weekends"],
    }
    data.update(overrides)
    return data


def organization_data(**overrides) -> Dict[str, Any]:
    data = {
        "role": "organization",
        "name": "Meera Iyer",
        "email": "contact@literacy.example.org",
        "location": "delhi",
        "organizationName": "Literacy First",
    }
    data.update(overrides)
    return data


def position_data(**overrides) -> Dict[str, Any]:
    data = {
        "title": "Weekend reading tutor",
        "description": "Help children practise reading on weekends.",
        "cause": "education",
        "location": "delhi",
        "requiredSkills": ["teaching"],
        "availability": ["weekends"],
        "urgency": 3,
        "validForDays": 30,
    }
    data.update(overrides)
    return data


def make_volunteer(**overrides) -> UserProfile:
    fields = dict(
        id="v1",
        role=Role.VOLUNTEER,
        name="Asha",
        email="asha@example.com",
        location="delhi",
        skills=frozenset({"teaching"}),
        causes=frozenset({"education"}),
        availability=frozenset({"weekends"}),
    )
    fields.update(overrides)
    return UserProfile(**fields)


def make_position(**overrides) -> Position:
    fields = dict(
        id="p1",
        ngo_id="o1",
        title="Tutor",
        description="Reading help",
        cause="education",
        location="delhi",
        required_skills=frozenset({"teaching"}),
        availability=frozenset({"weekends"}),
        urgency=3,
    )
    fields.update(overrides)
    return Position(**fields)

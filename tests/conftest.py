"""Shared fixtures for quill-safety tests."""

import sys
from pathlib import Path

import pytest

# Allow running the suite from a checkout without installing the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from quill_safety.config import CONFIG_ENV_VAR, clear_cache  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Every test starts from the repository config, not a cached or env-selected one."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def minor_profile():
    """Minor author record carrying PII that must never reach the output."""
    return {
        "id": 123,
        "first_name": "Jonathan",
        "last_name": "Smith",
        "email": "jonathan.smith@example.org",
        "date_of_birth": "2011-04-17",
        "is_minor": True,
        "pen_name": "J. Quill",
        "profile_photo": "https://cdn.example.org/photos/123.jpg",
    }


@pytest.fixture
def adult_profile():
    """Adult author record with a profile photo."""
    return {
        "id": "a-77",
        "first_name": "Maya",
        "last_name": "Okafor",
        "email": "maya@example.org",
        "date_of_birth": "1985-09-02",
        "is_minor": False,
        "pen_name": None,
        "profile_photo": "https://cdn.example.org/photos/a-77.jpg",
    }


@pytest.fixture
def application_records():
    """Application rows as joined for the compliance export."""
    return [
        {
            "id": 1,
            "first_name": "Ava",
            "last_name": "Lopez",
            "is_minor": True,
            "guardian_name": "Rosa Lopez",
            "guardian_email": "rosa@example.org",
            "guardian_consent_method": "e-signature",
            "guardian_consent_verified": True,
            "data_retention_until": "2031-06-30T00:00:00",
        },
        {
            "id": 2,
            "first_name": "Ben",
            "last_name": "Carter",
            "is_minor": False,
        },
        {
            "id": 3,
            "is_minor": True,
            "guardian_name": "Sam Reed",
            "guardian_email": "sam@example.org",
            "guardian_consent_method": None,
            "guardian_consent_verified": False,
        },
    ]

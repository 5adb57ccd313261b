"""
Global pytest configuration and fixtures.
"""
import datetime as dt
import json
import os
from typing import Any, Callable, Dict

import pytest

from service_charges.config import ServiceChargesConfig, reload_config
from service_charges.models import DailyRecord, TravelExpenseConfig

# 2024-03-04 is a Monday
WEDNESDAY = dt.date(2024, 3, 6)
SATURDAY = dt.date(2024, 3, 9)
SUNDAY = dt.date(2024, 3, 10)


@pytest.fixture(scope="session")
def test_env_vars() -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        'LOG_LEVEL': 'DEBUG',
        'LOG_FORMAT': 'standard',
    }


@pytest.fixture
def mock_env(test_env_vars, monkeypatch):
    """Mock environment variables for testing."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)

    # Clear the global config to force reload with test values
    import service_charges.config.settings
    service_charges.config.settings._config = None

    yield test_env_vars

    service_charges.config.settings._config = None


@pytest.fixture
def test_config(mock_env) -> ServiceChargesConfig:
    """Test configuration instance."""
    return reload_config()


@pytest.fixture
def make_record() -> Callable[..., DailyRecord]:
    """Factory for daily records with an on-site window."""

    def _make(
        date: Any = WEDNESDAY,
        onsite: Any = ("08:00", "16:00"),
        travel_to: Any = None,
        travel_home: Any = None,
        **kwargs,
    ) -> DailyRecord:
        def window(times):
            if times is None:
                return {"active": False}
            return {"active": True, "start": times[0], "end": times[1]}

        return DailyRecord(
            date=date,
            onsite=window(onsite),
            travel_to=window(travel_to),
            travel_home=window(travel_home),
            **kwargs,
        )

    return _make


@pytest.fixture
def sample_travel_config() -> TravelExpenseConfig:
    """Travel expenses: 3 non-local per diem days, 100 miles, $20, $300 airfare."""
    return TravelExpenseConfig(
        perDiemType="nonLocal",
        perDiemDays=3,
        mileage=100,
        otherTravel=20,
        airTravel={"cost": 300},
    )


@pytest.fixture
def sample_timesheet_document() -> Dict[str, Any]:
    """Timesheet document in the entry form's export shape."""
    return {
        "entries": [
            {
                "date": "2024-03-06",
                "travel": {
                    "to": {"active": True, "start": "06:00", "end": "08:00"},
                    "home": {"active": True, "start": "18:00", "end": "20:00"},
                },
                "onsite": {"active": True, "start": "08:00", "end": "18:00"},
                "lunch": False,
                "lunchDuration": 0,
                "holiday": False,
                "travelOnly": False,
                "serviceWork": "Replaced pump seal",
            },
            {
                "date": "2024-03-09",
                "travel": {
                    "to": {"active": False},
                    "home": {"active": True, "start": "13:00", "end": "15:00"},
                },
                "onsite": {"active": True, "start": "08:00", "end": "13:00"},
                "lunch": True,
                "lunchDuration": "1",
                "holiday": False,
                "travelOnly": False,
                "serviceWork": "Commissioning",
            },
        ],
        "travel": {
            "perDiemType": "nonLocal",
            "perDiemDays": 3,
            "mileage": 100,
            "otherTravel": 20,
            "airTravel": {"cost": 300, "origin": "SEA", "destination": "PHX"},
        },
    }


@pytest.fixture
def timesheet_file(tmp_path, sample_timesheet_document):
    """Write the sample timesheet document to a JSON file."""
    path = tmp_path / "visit.json"
    path.write_text(json.dumps(sample_timesheet_document), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def cleanup_test_files():
    """Clean up any test files created during testing."""
    yield

    # Remove test coverage files in case they're created
    test_files = ['coverage.xml', '.coverage']
    for file in test_files:
        if os.path.exists(file):
            os.remove(file)


# Pytest configuration for different test types
def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on location."""
    for item in items:
        if "tests/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)

"""
Pytest configuration and shared fixtures for inflation_lens tests.

Usage:
    @pytest.fixture functions are automatically available to all tests.
    Import helpers from conftest when needed.
"""
import sys
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest


def pytest_configure():
    """
    Ensure `src/` is on sys.path for the src-layout package import (`inflation_lens`).
    This keeps tests runnable without requiring an editable install.
    """
    root = Path(__file__).resolve().parents[1]
    src = root / "src"
    if src.exists():
        sys.path.insert(0, str(src))


# =============================================================================
# Sample Data Fixtures
# =============================================================================

@pytest.fixture
def annual_percent_observations():
    """World Bank style annual % changes, deliberately out of order."""
    from inflation_lens.inflation.models import Observation

    return [
        Observation("2022", 8.0),
        Observation("2020", 1.2),
        Observation("2021", 4.7),
        Observation("2023", 4.1),
    ]


@pytest.fixture
def sample_valuations():
    """Sparse valuation snapshots spanning a month boundary."""
    from inflation_lens.portfolio.models import ValuationSnapshot

    return [
        ValuationSnapshot("2023-01-30", 1000.0, 1000.0),
        ValuationSnapshot("2023-02-02", 1050.0, 1000.0),
        ValuationSnapshot("2023-02-03", 1100.0, 1050.0),
    ]


@pytest.fixture
def world_bank_payload() -> list:
    return [
        {"page": 1, "pages": 1, "per_page": 20000, "total": 4},
        [
            {"date": "2023", "value": 4.1},
            {"date": "2022", "value": 8.0},
            {"date": "2021", "value": None},
            {"date": "2020", "value": 1.2},
        ],
    ]


# =============================================================================
# Test Data Helpers
# =============================================================================

def make_response(payload: Any, status: int = 200) -> MagicMock:
    """
    Create a mock `requests.Response`.

    Usage:
        get.return_value = make_response({"values": {...}})
    """
    resp = MagicMock()
    resp.ok = 200 <= status < 400
    resp.status_code = status
    resp.json.return_value = payload
    return resp


class FakeProvider:
    """In-memory provider returning fixed observations."""

    name = "fake"
    metrics: list = []

    def __init__(self, observations):
        self.observations = list(observations)
        self.requests = []

    def fetch(self, request):
        self.requests.append(request)
        return list(self.observations)

# tests/conftest.py
import os
import sys

import pytest

# Make the repo root importable without an install
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
sys.path.insert(0, ROOT)

from chart_engine.highlight import HighlightState  # noqa: E402
from chart_engine.models import HeatPoint, Observation  # noqa: E402


@pytest.fixture
def highlight():
    return HighlightState()


@pytest.fixture
def two_slices():
    return [Observation(label="A", value=25), Observation(label="B", value=75)]


@pytest.fixture
def facility_points():
    """3 facilities x 1 vaccine with F3 missing for BCG, plus a second vaccine row."""
    return [
        HeatPoint(x="F1", y="BCG", value=10),
        HeatPoint(x="F2", y="BCG", value=90),
        HeatPoint(x="F3", y="OPV", value=50),
    ]

"""
Shared fixtures: engines over the test catalog with in-memory collaborators.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import pytest

from matching.logic.adapter import InMemoryCandidateStore, InMemoryProfileRepository
from matching.logic.engine import MatchingEngine

from catalog import CATALOG, clone_catalog


@pytest.fixture
def engine():
    return MatchingEngine(InMemoryCandidateStore(CATALOG), InMemoryProfileRepository())


@pytest.fixture
def ten_university_engine():
    catalog = clone_catalog(
        10,
        avg_gpa=lambda i: round(3.0 + i * 0.1, 2),
        avg_sat_score=lambda i: 1200 + i * 50,
    )
    return MatchingEngine(InMemoryCandidateStore(catalog), InMemoryProfileRepository())

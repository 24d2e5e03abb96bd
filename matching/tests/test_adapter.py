"""
SQLAlchemy adapter tests against an in-memory SQLite database.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from db import Base
from matching.models import AcademicProfile, FinancialProfile, University, User
from matching.logic.adapter import SqlCandidateStore, SqlProfileRepository
from matching.logic.candidate_filter import CandidateQuery
from matching.logic.constants import AccessTier, CampusSetting, FocusArea
from matching.logic.engine import MatchingEngine
from matching.logic.contracts import MatchRequest

from catalog import CATALOG


@pytest.fixture
def db():
    engine = create_engine("sqlite://", future=True)
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, future=True)()

    for candidate in CATALOG:
        data = candidate.model_dump()
        data["setting"] = candidate.setting.value
        session.add(University(**data))
    session.add(University(id="uni-4", name="Quiet College", country="Canada"))

    session.add(User(id="u1", email="a@example.com", role="premium", gpa=3.1,
                     preferred_major="History", focus_area="sciences", persona_role="astronaut"))
    session.add(AcademicProfile(
        user_id="u1",
        gpa=3.7,
        primary_major="Physics",
        extracurriculars=["Chess"],
        academic_honors=[{"name": "Olympiad", "level": "National"}],
        ap_exams=[{"subject": "Physics C", "score": 5}],
    ))
    session.add(FinancialProfile(user_id="u1", max_budget=45000, savings=10000))
    session.commit()

    yield session
    session.close()


def test_store_orders_by_name_then_id(db):
    candidates = SqlCandidateStore(db).find_candidates(CandidateQuery())

    assert [c.name for c in candidates] == [
        "Elite Research U", "Local Party State", "Mid-Tier Safety School", "Quiet College"
    ]


def test_store_maps_rows_to_candidates(db):
    elite = SqlCandidateStore(db).find_candidates(CandidateQuery(countries=["usa"]))[0]

    assert elite.setting == CampusSetting.URBAN
    assert elite.popular_majors == ["Physics", "Computer Science", "Engineering"]
    assert elite.tuition_international == 75000


def test_store_missing_attributes_fail_explicit_bounds(db):
    store = SqlCandidateStore(db)

    with_bound = store.find_candidates(CandidateQuery(min_safety_rating=1))
    by_text = store.find_candidates(CandidateQuery(search_text="quiet"))

    assert "uni-4" not in [c.id for c in with_bound]
    assert [c.id for c in by_text] == ["uni-4"]


def test_store_applies_python_only_filters(db):
    store = SqlCandidateStore(db)

    results = store.find_candidates(CandidateQuery(majors=["psych"], max_net_cost=30000))

    assert [c.name for c in results] == ["Mid-Tier Safety School"]


def test_profile_repository(db):
    repo = SqlProfileRepository(db)

    user = repo.get_user("u1")
    academic = repo.get_academic_profile("u1")
    financial = repo.get_financial_profile("u1")

    assert user.role == AccessTier.PREMIUM
    assert user.focus_area == FocusArea.SCIENCES
    assert user.persona_role is None
    assert academic.gpa == 3.7
    assert academic.gpa_scale == 4.0
    assert academic.academic_honors[0].level == "National"
    assert academic.ap_exams[0].score == 5
    assert financial.max_budget == 45000

    assert repo.get_user("ghost") is None
    assert repo.get_academic_profile("ghost") is None


def test_engine_over_sql_collaborators(db):
    engine = MatchingEngine(SqlCandidateStore(db), SqlProfileRepository(db))

    matches = engine.find_matches(MatchRequest(gpa=3.6, preferred_major="Physics", preferred_country="USA"))
    recommended = engine.get_recommended_universities("u1")
    criteria = engine.get_initial_criteria("u1")

    assert len(matches) == 3
    assert {r.candidate.name for r in recommended} == {"Elite Research U", "Mid-Tier Safety School"}
    assert criteria.academics.min_gpa == 3.4
    assert criteria.financials.max_tuition == 45000

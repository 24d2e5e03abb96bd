from sqlalchemy import Column, Float, ForeignKey, Integer, String, JSON

from .base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True)
    email = Column(String, unique=True, index=True)
    role = Column(String, default="FREE")

    # Legacy scalar profile fields, used as fallbacks
    gpa = Column(Float)
    sat_score = Column(Integer)
    act_score = Column(Integer)
    preferred_major = Column(String)
    max_budget = Column(Float)
    preferred_country = Column(String)

    # Onboarding answers
    focus_area = Column(String)
    persona_role = Column(String)


class AcademicProfile(Base):
    __tablename__ = "academic_profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, ForeignKey("users.id"), unique=True, index=True)

    gpa = Column(Float)
    gpa_scale = Column(Float, default=4.0)
    sat_total = Column(Integer)
    act_composite = Column(Integer)
    primary_major = Column(String)
    secondary_major = Column(String)
    extracurriculars = Column(JSON)  # list of strings
    academic_honors = Column(JSON)   # [{name, year, level}]
    ap_exams = Column(JSON)          # [{subject, score, year}]


class FinancialProfile(Base):
    __tablename__ = "financial_profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, ForeignKey("users.id"), unique=True, index=True)

    max_budget = Column(Float)
    household_income = Column(Float)
    savings = Column(Float)

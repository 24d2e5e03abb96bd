from sqlalchemy import Column, Float, Integer, String, JSON

from .base import Base


class University(Base):
    __tablename__ = "universities"

    id = Column(String, primary_key=True)
    slug = Column(String, unique=True, index=True)
    name = Column(String, nullable=False, index=True)

    country = Column(String, index=True)
    state = Column(String)
    city = Column(String)
    setting = Column(String)       # URBAN / SUBURBAN / RURAL
    climate_zone = Column(String)

    avg_gpa = Column(Float)
    min_gpa = Column(Float)
    avg_sat_score = Column(Integer)
    avg_act_score = Column(Integer)
    popular_majors = Column(JSON)  # list of major names
    acceptance_rate = Column(Float)
    ranking = Column(Integer)

    tuition_out_state = Column(Float)
    tuition_international = Column(Float)
    average_grant_aid = Column(Float)

    student_life_score = Column(Float)
    diversity_score = Column(Float)
    party_scene_rating = Column(Float)
    safety_rating = Column(Float)

    employment_rate = Column(Float)
    alumni_network = Column(Float)
    internship_support = Column(Float)
    visa_duration_months = Column(Integer)

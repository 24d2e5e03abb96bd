"""
Three-university catalog shared by the tests.
"""


from matching.logic.constants import CampusSetting
from matching.logic.contracts import CandidateUniversity


ELITE = CandidateUniversity(
    id="uni-1",
    slug="elite-research-u",
    name="Elite Research U",
    country="USA",
    state="MA",
    city="Boston",
    setting=CampusSetting.URBAN,
    climate_zone="TEMPERATE",
    avg_gpa=4.0,
    min_gpa=3.5,
    avg_sat_score=1550,
    avg_act_score=35,
    popular_majors=["Physics", "Computer Science", "Engineering"],
    acceptance_rate=0.05,
    ranking=3,
    tuition_out_state=70000,
    tuition_international=75000,
    average_grant_aid=30000,
    student_life_score=4.8,
    diversity_score=0.75,
    party_scene_rating=1,
    safety_rating=5,
    employment_rate=0.98,
    alumni_network=5,
    internship_support=5,
    visa_duration_months=36,
)

LOCAL = CandidateUniversity(
    id="uni-2",
    slug="local-party-state",
    name="Local Party State",
    country="USA",
    state="FL",
    city="Gainesville",
    setting=CampusSetting.SUBURBAN,
    climate_zone="CONTINENTAL",
    avg_gpa=3.0,
    min_gpa=2.5,
    avg_sat_score=1100,
    avg_act_score=22,
    popular_majors=["History", "Business", "Communications"],
    acceptance_rate=0.7,
    ranking=180,
    tuition_out_state=15000,
    tuition_international=20000,
    average_grant_aid=5000,
    student_life_score=4.5,
    diversity_score=0.6,
    party_scene_rating=5,
    safety_rating=3,
    employment_rate=0.75,
    alumni_network=3,
    internship_support=2,
    visa_duration_months=12,
)

MID = CandidateUniversity(
    id="uni-3",
    slug="mid-tier-safety-school",
    name="Mid-Tier Safety School",
    country="USA",
    state="GA",
    city="Atlanta",
    setting=CampusSetting.URBAN,
    climate_zone="HUMID_SUBTROPICAL",
    avg_gpa=3.5,
    min_gpa=3.0,
    avg_sat_score=1300,
    avg_act_score=28,
    popular_majors=["Physics", "Biology", "Psychology"],
    acceptance_rate=0.35,
    ranking=75,
    tuition_out_state=40000,
    tuition_international=45000,
    average_grant_aid=15000,
    student_life_score=4.2,
    diversity_score=0.70,
    party_scene_rating=3,
    safety_rating=4,
    employment_rate=0.88,
    alumni_network=4,
    internship_support=4,
    visa_duration_months=24,
)

CATALOG = [ELITE, LOCAL, MID]


def clone_catalog(count: int, **overrides):
    """`count` renamed copies of the catalog, cycling through the three schools."""
    clones = []
    for i in range(count):
        base = CATALOG[i % len(CATALOG)]
        fields = {
            "id": f"uni-{i + 1}",
            "name": f"University {i + 1}",
            "slug": f"university-{i + 1}",
        }
        fields.update({k: v(i) if callable(v) else v for k, v in overrides.items()})
        clones.append(base.model_copy(update=fields))
    return clones



import os
import sys
import csv
import json
from typing import Any, Dict, List

from dotenv import load_dotenv

from db import Base, engine, get_db
from matching.models import University

load_dotenv()

CATALOG_PATH = os.environ.get(
    "CATALOG_PATH",
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "data/universities.json"),
)

FLOAT_FIELDS = {
    "avg_gpa", "min_gpa", "acceptance_rate",
    "tuition_out_state", "tuition_international", "average_grant_aid",
    "student_life_score", "diversity_score", "party_scene_rating", "safety_rating",
    "employment_rate", "alumni_network", "internship_support",
}
INT_FIELDS = {"avg_sat_score", "avg_act_score", "ranking", "visa_duration_months"}
TEXT_FIELDS = {"id", "slug", "name", "country", "state", "city", "setting", "climate_zone"}


def load_catalog(path: str) -> List[Dict[str, Any]]:
    """Read university records from a .json (list of objects) or .csv file."""
    if path.lower().endswith(".csv"):
        with open(path, newline="", encoding="utf-8") as f:
            return list(csv.DictReader(f))
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def to_row(entry: Dict[str, Any]) -> University:
    """Coerce one raw record into a University row. Blank cells become NULL."""
    values: Dict[str, Any] = {}
    for field in TEXT_FIELDS:
        raw = entry.get(field)
        values[field] = str(raw).strip() if raw not in (None, "") else None
    for field in FLOAT_FIELDS:
        raw = entry.get(field)
        values[field] = float(raw) if raw not in (None, "") else None
    for field in INT_FIELDS:
        raw = entry.get(field)
        values[field] = int(float(raw)) if raw not in (None, "") else None

    majors = entry.get("popular_majors") or []
    if isinstance(majors, str):
        majors = [m.strip() for m in majors.split(";") if m.strip()]
    values["popular_majors"] = majors

    if values["setting"]:
        values["setting"] = values["setting"].upper()
    if not values["id"]:
        raise ValueError(f"Record without id: {entry.get('name')}")
    if not values["name"]:
        raise ValueError(f"Record {values['id']} has no name")
    return University(**values)


def import_catalog(path: str = CATALOG_PATH) -> int:
    """Upsert every record in the catalog file. Returns the number of rows written."""
    entries = load_catalog(path)
    Base.metadata.create_all(bind=engine)
    count = 0
    with get_db() as db:
        for entry in entries:
            db.merge(to_row(entry))
            count += 1
    return count


if __name__ == "__main__":
    path = sys.argv[1] if len(sys.argv) > 1 else CATALOG_PATH
    print(f"Importing universities from {path}...")
    try:
        imported = import_catalog(path)
        print(f"Import complete. Upserted {imported} universities.")
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

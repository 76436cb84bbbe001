"""
Profile Service - one flat profile object over two tables.

Every user has a row in `profiles` (shared fields). Candidates, employers,
students and faculty also have a row in their role's extension table.
Reads merge both rows (extension wins on conflicts); writes route each key
to the table that owns it.
"""

import json
from datetime import datetime
from typing import Dict, Any, List, Optional

from loguru import logger
from sqlalchemy import text
from sqlalchemy.orm import Session

from jobportal.db.database import get_db_session, fetch_one

# Map roles to their specific profile tables
ROLE_TABLE_MAP = {
    "student": "student_profiles",
    "faculty": "faculty_profiles",
    "candidate": "candidate_profiles",
    "employer": "employer_profiles",
    "admin": "profiles",  # Admins use the base profile only
    "superadmin": "profiles"
}

BASE_FIELDS = [
    "full_name", "email", "phone", "avatar_url", "bio", "location",
    "linkedin_url", "website_url", "social_links", "updated_at"
]

# Columns a user may write in each extension table
SPECIFIC_FIELDS = {
    "candidate_profiles": [
        "headline", "summary", "skills", "experience_years", "current_company",
        "expected_salary", "resume_url"
    ],
    "employer_profiles": [
        "company_name", "industry", "company_size", "company_website", "description"
    ],
    "student_profiles": [
        "roll_number", "department", "year", "semester", "cgpa", "interests"
    ],
    "faculty_profiles": [
        "employee_id", "department", "designation", "specialization"
    ]
}

# Stored comma-separated, exposed as lists
LIST_FIELDS = {"skills", "interests"}

# Stored as JSON text, exposed as {platform: url}
JSON_FIELDS = {"social_links"}

SCALAR_TYPES = (str, int, float, bool)

# Fields that count towards profile completion, per role
COMPLETION_FIELDS = {
    "candidate": ["full_name", "phone", "location", "bio", "headline", "skills", "experience_years", "resume_url"],
    "employer": ["full_name", "phone", "location", "company_name", "industry", "company_website", "description"],
    "student": ["full_name", "phone", "roll_number", "department", "year", "cgpa"],
    "faculty": ["full_name", "phone", "employee_id", "department", "designation"]
}


def specific_table_for(role: Optional[str]) -> Optional[str]:
    """Extension table for a role, None for base-only or unknown roles."""
    table = ROLE_TABLE_MAP.get((role or "").lower())
    if not table or table == "profiles":
        return None
    return table


def split_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def join_list(value) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        value = value.split(",")
    return ",".join(str(item).strip() for item in value if str(item).strip())


def _decode_row(row: Dict[str, Any]) -> Dict[str, Any]:
    for field in LIST_FIELDS:
        if field in row:
            row[field] = split_list(row[field])
    for field in JSON_FIELDS:
        if field in row:
            row[field] = json.loads(row[field]) if row[field] else {}
    return row


def get_full_profile(user_id: int, role: str) -> Dict[str, Any]:
    """
    Fetch the complete profile for a user, including role-specific data.

    Raises:
        LookupError if the user has no base profile
    """
    base_profile = fetch_one("SELECT * FROM profiles WHERE user_id = :id", {"id": user_id})
    if base_profile is None:
        raise LookupError(f"Profile not found for user {user_id}")

    specific_table = specific_table_for(role)
    base_profile = _decode_row(base_profile)
    if specific_table is None:
        return base_profile

    # Missing extension row just means the user hasn't filled it in yet
    specific_profile = fetch_one(f"SELECT * FROM {specific_table} WHERE user_id = :id", {"id": user_id})
    if specific_profile is None:
        logger.debug(f"No {specific_table} row for user {user_id}, returning base profile")

    return {**base_profile, **_decode_row(specific_profile or {})}


def split_profile_data(role: str, profile_data: Dict[str, Any]) -> tuple:
    """
    Route keys of a flat profile dict to (base_data, specific_data).

    Raises:
        ValueError for keys neither table accepts for this role, or for
        values of the wrong shape
    """
    specific_table = specific_table_for(role)
    allowed_specific = SPECIFIC_FIELDS.get(specific_table, [])

    base_data = {}
    specific_data = {}
    unknown = []

    for key, value in profile_data.items():
        if key in BASE_FIELDS:
            base_data[key] = _encode_value(key, value)
        elif key in allowed_specific:
            specific_data[key] = _encode_value(key, value)
        else:
            unknown.append(key)

    if unknown:
        raise ValueError(f"Unknown profile field(s) for role '{role}': {', '.join(sorted(unknown))}")

    return base_data, specific_data


def _encode_value(key: str, value: Any) -> Any:
    """Column value for a profile field; lists become csv, links become JSON."""
    if value is None:
        return None
    if key in LIST_FIELDS:
        if isinstance(value, str):
            return join_list(value)
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            return join_list(value)
        raise ValueError(f"'{key}' must be a list of strings")
    if key in JSON_FIELDS:
        if isinstance(value, dict) and all(
            isinstance(k, str) and (v is None or isinstance(v, str)) for k, v in value.items()
        ):
            return json.dumps({k: v for k, v in value.items() if v})
        raise ValueError(f"'{key}' must be an object of platform -> URL strings")
    if not isinstance(value, SCALAR_TYPES):
        raise ValueError(f"'{key}' must be a plain value, not {type(value).__name__}")
    return value


def update_full_profile(user_id: int, role: str, profile_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Update the user's profile, splitting data between base and specific tables.

    Returns:
        The written fields merged into one dict (lists decoded).
    """
    base_data, specific_data = split_profile_data(role, profile_data)
    base_data.pop("updated_at", None)

    specific_table = specific_table_for(role)

    with get_db_session() as db:
        # 1. Update base profile (always touched so updated_at moves)
        assignments = [f"{field} = :{field}" for field in base_data]
        assignments.append("updated_at = CURRENT_TIMESTAMP")
        result = db.execute(
            text(f"UPDATE profiles SET {', '.join(assignments)} WHERE user_id = :id"),
            {**base_data, "id": user_id}
        )
        if result.rowcount == 0:
            raise LookupError(f"Profile not found for user {user_id}")

        # 2. Upsert the role-specific extension
        if specific_table:
            _upsert_specific(db, specific_table, user_id, specific_data)

    base_data["updated_at"] = datetime.utcnow()
    logger.info(f"Profile updated for user {user_id}")
    return {**_decode_row(base_data), **_decode_row(dict(specific_data))}


def _upsert_specific(db: Session, table: str, user_id: int, data: Dict[str, Any]) -> None:
    columns = ["user_id"] + list(data.keys())
    placeholders = [f":{column}" for column in columns]
    updates = [f"{column} = excluded.{column}" for column in data]
    updates.append("updated_at = CURRENT_TIMESTAMP")

    db.execute(
        text(f"""
            INSERT INTO {table} ({', '.join(columns)})
            VALUES ({', '.join(placeholders)})
            ON CONFLICT (user_id) DO UPDATE SET {', '.join(updates)}
        """),
        {**data, "user_id": user_id}
    )


def create_empty_profile(db: Session, user_id: int, role: str, email: str, full_name: str = None) -> None:
    """Create base + extension rows for a freshly registered user."""
    db.execute(
        text("INSERT INTO profiles (user_id, full_name, email) VALUES (:id, :full_name, :email)"),
        {"id": user_id, "full_name": full_name, "email": email}
    )
    specific_table = specific_table_for(role)
    if specific_table:
        db.execute(text(f"INSERT INTO {specific_table} (user_id) VALUES (:id)"), {"id": user_id})


def profile_completion(role: str, profile: Dict[str, Any]) -> int:
    """Percentage of the role's key profile fields that are filled in."""
    fields = COMPLETION_FIELDS.get((role or "").lower(), ["full_name", "phone", "location", "bio"])
    filled = 0
    for field in fields:
        value = profile.get(field)
        if value not in (None, "", []):
            filled += 1
    return round(filled / len(fields) * 100)

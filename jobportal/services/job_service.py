"""
Job & Application helpers shared by the candidate, employer and admin routes.

- SQL fragments for job / application listings
- Row -> response conversion (skills csv, notes, application timeline)
- Skill-match scoring for recommended jobs
"""

from datetime import datetime
from typing import List, Dict, Optional

from jobportal.db.database import execute_raw_sql
from jobportal.services.profile_service import split_list
from jobportal.schemas.schemas import JobResponse, ApplicationResponse, TimelineStage

JOB_SELECT = """
    SELECT j.job_id, j.employer_id, j.title, j.company, j.description, j.location, j.job_type,
           j.salary, j.min_salary, j.max_salary, j.skills, j.status, j.views, j.created_at,
           (SELECT COUNT(*) FROM applications a WHERE a.job_id = j.job_id) AS applicants
    FROM jobs j
"""

APPLICATION_SELECT = """
    SELECT a.application_id, a.job_id, a.candidate_id, p.full_name AS candidate_name,
           u.email AS candidate_email, j.title AS job_title, j.company, a.status,
           a.cover_letter, a.notes, a.created_at, a.updated_at
    FROM applications a
    JOIN jobs j ON a.job_id = j.job_id
    JOIN users u ON a.candidate_id = u.user_id
    LEFT JOIN profiles p ON p.user_id = a.candidate_id
"""

TIMELINE_STAGES = ["Applied", "Resume Review", "Interview", "Final Decision"]

NOTE_SEPARATOR = "\n"


def _date_str(value) -> Optional[str]:
    """YYYY-MM-DD from a datetime or a database timestamp string."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    return str(value)[:10]


def row_to_job(r: dict) -> JobResponse:
    return JobResponse(
        job_id=r["job_id"], employer_id=r["employer_id"], title=r["title"], company=r["company"],
        description=r["description"], location=r["location"], job_type=r["job_type"],
        salary=r["salary"],
        min_salary=float(r["min_salary"]) if r["min_salary"] is not None else None,
        max_salary=float(r["max_salary"]) if r["max_salary"] is not None else None,
        skills=split_list(r["skills"]), status=r["status"], views=r["views"] or 0,
        applicants=r.get("applicants") or 0, created_at=r["created_at"]
    )


def build_timeline(status: str, applied_at, updated_at) -> List[TimelineStage]:
    """
    Four-stage progress for an application.

    Review is done once the employer moved it past "applied"; the interview
    stage completes on interview_scheduled/accepted; a final decision is
    accepted or rejected.
    """
    reviewed = status != "applied"
    interviewed = status in ("interview_scheduled", "accepted")
    decided = status in ("accepted", "rejected")

    return [
        TimelineStage(stage="Applied", date=_date_str(applied_at), completed=True),
        TimelineStage(stage="Resume Review", date=_date_str(updated_at) if reviewed else None, completed=reviewed),
        TimelineStage(stage="Interview", date=_date_str(updated_at) if interviewed else None, completed=interviewed),
        TimelineStage(stage="Final Decision", date=_date_str(updated_at) if decided else None, completed=decided),
    ]


def row_to_application(r: dict) -> ApplicationResponse:
    timeline = build_timeline(r["status"], r["created_at"], r["updated_at"])
    notes = [n for n in (r["notes"] or "").split(NOTE_SEPARATOR) if n.strip()]
    return ApplicationResponse(
        application_id=r["application_id"], job_id=r["job_id"], candidate_id=r["candidate_id"],
        candidate_name=r["candidate_name"], candidate_email=r["candidate_email"],
        job_title=r["job_title"], company=r["company"], status=r["status"],
        cover_letter=r["cover_letter"], notes=notes,
        stage=sum(1 for s in timeline if s.completed), total_stages=len(TIMELINE_STAGES),
        timeline=timeline, applied_at=r["created_at"], updated_at=r["updated_at"]
    )


def get_job_row(job_id: int) -> Optional[dict]:
    rows = execute_raw_sql(JOB_SELECT + " WHERE j.job_id = :jid", {"jid": job_id})
    return rows[0] if rows else None


def compute_skill_match_percentage(candidate_skills: List[str], required_skills: List[str]) -> float:
    """
    Compute percentage of required skills that candidate has.

    Uses case-insensitive matching.

    Returns:
        Float between 0 and 100
    """
    if not required_skills:
        return 100.0  # No requirements = 100% match

    candidate_lower = {s.lower() for s in candidate_skills}
    required_lower = {s.lower() for s in required_skills}

    matches = candidate_lower.intersection(required_lower)

    return (len(matches) / len(required_lower)) * 100


def recommend_jobs(candidate_id: int, candidate_skills: List[str], limit: int = 5) -> List[Dict]:
    """
    Active jobs the candidate hasn't applied to, best skill match first.

    Returns:
        [{"job": JobResponse, "match_score": float, "matched_skills": [...]}]
    """
    rows = execute_raw_sql(
        JOB_SELECT + """
        WHERE j.status = 'active'
          AND j.job_id NOT IN (SELECT job_id FROM applications WHERE candidate_id = :cid)
        ORDER BY j.created_at DESC, j.job_id DESC
        """,
        {"cid": candidate_id}
    )

    candidate_lower = {s.lower() for s in candidate_skills}
    scored = []
    for r in rows:
        job = row_to_job(r)
        score = compute_skill_match_percentage(candidate_skills, job.skills)
        matched = [s for s in job.skills if s.lower() in candidate_lower]
        scored.append({"job": job, "match_score": round(score, 1), "matched_skills": matched})

    # Stable sort keeps newest first among equal scores
    scored.sort(key=lambda item: item["match_score"], reverse=True)
    return scored[:limit]

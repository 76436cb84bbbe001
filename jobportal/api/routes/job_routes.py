"""
Job Routes

POST   /jobs                     - Create job posting (employer only)
GET    /jobs                     - List active jobs with filters
GET    /jobs/saved               - Candidate's saved jobs
GET    /jobs/{job_id}            - Get job details (counts a view)
PUT    /jobs/{job_id}            - Update job (owning employer only)
DELETE /jobs/{job_id}            - Delete job (owning employer only)
POST   /jobs/{job_id}/apply      - Apply to job (candidate only)
POST   /jobs/{job_id}/save       - Toggle saved state (candidate only)
GET    /jobs/{job_id}/authenticity - Scam-risk score for a posting
"""

from fastapi import APIRouter, HTTPException, Depends, Query, Request
from loguru import logger
from sqlalchemy import text
from typing import List, Optional

from jobportal.db.database import get_db_session, execute_raw_sql, fetch_one, contains_pattern
from jobportal.core.auth import get_current_candidate, get_current_employer
from jobportal.services.audit_service import record_action
from jobportal.services.ai_mock_service import check_job_authenticity
from jobportal.services.job_service import (
    JOB_SELECT, APPLICATION_SELECT, row_to_job, row_to_application, get_job_row
)
from jobportal.services.profile_service import join_list
from jobportal.schemas.schemas import (
    JobCreate, JobUpdate, JobResponse, JobListResponse, SaveJobResponse,
    ApplicationCreate, ApplicationResponse, JobAuthenticityResponse, MessageResponse
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(job: JobCreate, employer: dict = Depends(get_current_employer)):
    """Create a new job posting. Company defaults to the employer profile's company name."""
    company = job.company
    if not company:
        row = fetch_one(
            "SELECT company_name FROM employer_profiles WHERE user_id = :id",
            {"id": employer["user_id"]}
        )
        company = row["company_name"] if row and row["company_name"] else None
    if not company:
        raise HTTPException(status_code=400, detail="Company name is required (set it on your profile or the job)")

    with get_db_session() as db:
        result = db.execute(
            text("""
                INSERT INTO jobs (employer_id, title, company, description, location, job_type,
                    salary, min_salary, max_salary, skills, status, views)
                VALUES (:employer_id, :title, :company, :description, :location, :job_type,
                    :salary, :min_salary, :max_salary, :skills, 'active', 0)
                RETURNING job_id
            """),
            {
                "employer_id": employer["user_id"], "title": job.title, "company": company,
                "description": job.description, "location": job.location,
                "job_type": job.job_type.value, "salary": job.salary,
                "min_salary": job.min_salary, "max_salary": job.max_salary,
                "skills": join_list(job.skills)
            }
        )
        job_id = result.fetchone()[0]

    logger.info(f"Employer {employer['user_id']} posted job {job_id}")
    return row_to_job(get_job_row(job_id))


@router.get("", response_model=JobListResponse)
async def list_jobs(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=50),
    search: Optional[str] = Query(None, description="Search in title, company and skills"),
    location: Optional[str] = Query(None),
    job_type: Optional[str] = Query(None),
    skills: Optional[List[str]] = Query(None, description="Keep jobs sharing any of these skills"),
    min_salary: Optional[float] = Query(None, ge=0)
):
    """List all active job postings with filters and pagination."""
    sql = JOB_SELECT + " WHERE j.status = 'active'"
    params = {}

    if search:
        sql += """ AND (LOWER(j.title) LIKE :search ESCAPE '\\' OR LOWER(j.company) LIKE :search ESCAPE '\\'
                        OR LOWER(COALESCE(j.skills, '')) LIKE :search ESCAPE '\\')"""
        params["search"] = contains_pattern(search)
    if location:
        sql += " AND LOWER(j.location) LIKE :location ESCAPE '\\'"
        params["location"] = contains_pattern(location)
    if job_type:
        sql += " AND j.job_type = :job_type"
        params["job_type"] = job_type
    if min_salary is not None:
        sql += " AND j.min_salary >= :min_salary"
        params["min_salary"] = min_salary

    sql += " ORDER BY j.created_at DESC, j.job_id DESC"
    jobs = [row_to_job(r) for r in execute_raw_sql(sql, params)]

    # Skill sets are stored csv; exact (case-insensitive) overlap is checked here
    if skills:
        wanted = {s.strip().lower() for s in skills if s.strip()}
        jobs = [j for j in jobs if wanted & {s.lower() for s in j.skills}]

    total = len(jobs)
    offset = (page - 1) * page_size
    return JobListResponse(jobs=jobs[offset:offset + page_size], total=total, page=page, page_size=page_size)


@router.get("/saved", response_model=List[JobResponse])
async def get_saved_jobs(candidate: dict = Depends(get_current_candidate)):
    """Jobs the candidate bookmarked, newest bookmark first."""
    rows = execute_raw_sql(
        JOB_SELECT + """
        JOIN saved_jobs s ON s.job_id = j.job_id
        WHERE s.candidate_id = :cid
        ORDER BY s.created_at DESC, j.job_id DESC
        """,
        {"cid": candidate["user_id"]}
    )
    return [row_to_job(r) for r in rows]


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: int):
    """Get details of a specific job."""
    with get_db_session() as db:
        result = db.execute(text("UPDATE jobs SET views = views + 1 WHERE job_id = :jid"), {"jid": job_id})
        if result.rowcount == 0:
            raise HTTPException(status_code=404, detail="Job not found")

    return row_to_job(get_job_row(job_id))


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(job_id: int, update: JobUpdate, employer: dict = Depends(get_current_employer)):
    """Update a job posting. Only the owning employer can update."""
    with get_db_session() as db:
        result = db.execute(
            text("SELECT job_id FROM jobs WHERE job_id = :jid AND employer_id = :eid"),
            {"jid": job_id, "eid": employer["user_id"]}
        )
        if not result.fetchone():
            raise HTTPException(status_code=404, detail="Job not found or access denied")

        updates = []
        params = {"jid": job_id}

        for field in ["title", "company", "description", "location", "salary", "min_salary", "max_salary"]:
            value = getattr(update, field, None)
            if value is not None:
                updates.append(f"{field} = :{field}")
                params[field] = value

        if update.job_type:
            updates.append("job_type = :job_type")
            params["job_type"] = update.job_type.value
        if update.status:
            updates.append("status = :status")
            params["status"] = update.status.value
        if update.skills is not None:
            updates.append("skills = :skills")
            params["skills"] = join_list(update.skills)

        if updates:
            db.execute(
                text(f"UPDATE jobs SET {', '.join(updates)}, updated_at = CURRENT_TIMESTAMP WHERE job_id = :jid"),
                params
            )

    return row_to_job(get_job_row(job_id))


@router.delete("/{job_id}", response_model=MessageResponse)
async def delete_job(job_id: int, request: Request, employer: dict = Depends(get_current_employer)):
    """Delete a job posting. Cascades to applications and saved entries."""
    with get_db_session() as db:
        result = db.execute(
            text("DELETE FROM jobs WHERE job_id = :jid AND employer_id = :eid"),
            {"jid": job_id, "eid": employer["user_id"]}
        )
        if result.rowcount == 0:
            raise HTTPException(status_code=404, detail="Job not found or access denied")

    record_action("Delete Job Post", actor_id=employer["user_id"], actor_email=employer["email"],
                  target=f"job:{job_id}", status="warning",
                  ip_address=request.client.host if request.client else None)
    return MessageResponse(message="Job deleted successfully")


@router.post("/{job_id}/apply", response_model=ApplicationResponse, status_code=201)
async def apply_to_job(job_id: int, application: ApplicationCreate, candidate: dict = Depends(get_current_candidate)):
    """Apply to a job. Candidates only. Cannot apply twice to same job."""
    with get_db_session() as db:
        # Check job exists and is accepting applications
        result = db.execute(text("SELECT status FROM jobs WHERE job_id = :jid"), {"jid": job_id})
        job = result.fetchone()
        if not job:
            raise HTTPException(status_code=404, detail="Job not found")
        if job[0] != "active":
            raise HTTPException(status_code=400, detail="Job is not accepting applications")

        # Check not already applied
        result = db.execute(
            text("SELECT application_id FROM applications WHERE candidate_id = :cid AND job_id = :jid"),
            {"cid": candidate["user_id"], "jid": job_id}
        )
        if result.fetchone():
            raise HTTPException(status_code=400, detail="Already applied to this job")

        result = db.execute(
            text("""
                INSERT INTO applications (job_id, candidate_id, cover_letter, status)
                VALUES (:jid, :cid, :cover, 'applied')
                RETURNING application_id
            """),
            {"cid": candidate["user_id"], "jid": job_id, "cover": application.cover_letter}
        )
        application_id = result.fetchone()[0]

    logger.info(f"Candidate {candidate['user_id']} applied to job {job_id}")
    row = fetch_one(APPLICATION_SELECT + " WHERE a.application_id = :aid", {"aid": application_id})
    return row_to_application(row)


@router.post("/{job_id}/save", response_model=SaveJobResponse)
async def toggle_save_job(job_id: int, candidate: dict = Depends(get_current_candidate)):
    """Bookmark the job, or remove the bookmark if it is already saved."""
    with get_db_session() as db:
        if not db.execute(text("SELECT job_id FROM jobs WHERE job_id = :jid"), {"jid": job_id}).fetchone():
            raise HTTPException(status_code=404, detail="Job not found")

        result = db.execute(
            text("DELETE FROM saved_jobs WHERE candidate_id = :cid AND job_id = :jid"),
            {"cid": candidate["user_id"], "jid": job_id}
        )
        saved = result.rowcount == 0
        if saved:
            db.execute(
                text("INSERT INTO saved_jobs (candidate_id, job_id) VALUES (:cid, :jid)"),
                {"cid": candidate["user_id"], "jid": job_id}
            )

    return SaveJobResponse(job_id=job_id, saved=saved)


@router.get("/{job_id}/authenticity", response_model=JobAuthenticityResponse)
async def job_authenticity(job_id: int):
    """Run the scam heuristics over a stored posting."""
    row = fetch_one("SELECT title, company, description, salary FROM jobs WHERE job_id = :jid", {"jid": job_id})
    if not row:
        raise HTTPException(status_code=404, detail="Job not found")
    return JobAuthenticityResponse(**check_job_authenticity(row))

"""
Employer Routes

GET  /employers/dashboard                        - Hiring stats, active jobs, recent applicants
GET  /employers/jobs                             - Employer's own jobs
GET  /employers/applicants                       - Applications across own jobs
PUT  /employers/applicants/{id}/status           - Update application status
POST /employers/applicants/bulk-status           - Same status for many applications
POST /employers/applicants/{id}/notes            - Append a private note
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from loguru import logger
from sqlalchemy import text
from typing import List, Optional

from jobportal.db.database import get_db_session, execute_raw_sql, fetch_one
from jobportal.core.auth import get_current_employer
from jobportal.services.job_service import (
    JOB_SELECT, APPLICATION_SELECT, NOTE_SEPARATOR, row_to_job, row_to_application
)
from jobportal.schemas.schemas import (
    EmployerDashboardResponse, JobResponse, ApplicationResponse, ApplicationStatusUpdate,
    BulkStatusUpdate, ApplicationNote, MessageResponse
)

router = APIRouter(prefix="/employers", tags=["Employers"])


def _owned_application(db, application_id: int, employer_id: int):
    result = db.execute(
        text("""
            SELECT a.application_id, a.notes FROM applications a
            JOIN jobs j ON a.job_id = j.job_id
            WHERE a.application_id = :aid AND j.employer_id = :eid
        """),
        {"aid": application_id, "eid": employer_id}
    )
    row = result.fetchone()
    if not row:
        raise HTTPException(status_code=404, detail="Application not found")
    return row


def _append_note(existing: Optional[str], note: str) -> str:
    note = note.replace(NOTE_SEPARATOR, " ").strip()
    return f"{existing}{NOTE_SEPARATOR}{note}" if existing else note


@router.get("/dashboard", response_model=EmployerDashboardResponse)
async def get_dashboard(employer: dict = Depends(get_current_employer)):
    jobs = [
        row_to_job(r) for r in execute_raw_sql(
            JOB_SELECT + " WHERE j.employer_id = :eid ORDER BY j.created_at DESC, j.job_id DESC",
            {"eid": employer["user_id"]}
        )
    ]
    applicants = [
        row_to_application(r) for r in execute_raw_sql(
            APPLICATION_SELECT + " WHERE j.employer_id = :eid ORDER BY a.created_at DESC, a.application_id DESC",
            {"eid": employer["user_id"]}
        )
    ]

    def count(*statuses):
        return sum(1 for a in applicants if a.status in statuses)

    active = [j for j in jobs if j.status == "active"]
    stats = {
        "total_jobs": len(jobs),
        "active_jobs": len(active),
        "total_applicants": len(applicants),
        "new_applicants": count("applied"),
        "shortlisted": count("shortlisted"),
        "interviews": count("interview_scheduled"),
        "hired": count("accepted"),
        "total_views": sum(j.views for j in jobs)
    }

    return EmployerDashboardResponse(
        stats=stats,
        active_jobs_list=active,
        recent_applicants=applicants[:5]
    )


@router.get("/jobs", response_model=List[JobResponse])
async def get_employer_jobs(
    status: Optional[str] = Query(None),
    employer: dict = Depends(get_current_employer)
):
    """Get all jobs posted by this employer."""
    sql = JOB_SELECT + " WHERE j.employer_id = :eid"
    params = {"eid": employer["user_id"]}

    if status:
        sql += " AND j.status = :status"
        params["status"] = status

    sql += " ORDER BY j.created_at DESC, j.job_id DESC"
    return [row_to_job(r) for r in execute_raw_sql(sql, params)]


@router.get("/applicants", response_model=List[ApplicationResponse])
async def get_applicants(
    job_id: Optional[int] = Query(None),
    status: Optional[str] = Query(None),
    employer: dict = Depends(get_current_employer)
):
    """Get all applications for the employer's job postings."""
    sql = APPLICATION_SELECT + " WHERE j.employer_id = :eid"
    params = {"eid": employer["user_id"]}

    if job_id:
        sql += " AND a.job_id = :jid"
        params["jid"] = job_id
    if status:
        sql += " AND a.status = :status"
        params["status"] = status

    sql += " ORDER BY a.created_at DESC, a.application_id DESC"
    return [row_to_application(r) for r in execute_raw_sql(sql, params)]


@router.put("/applicants/{application_id}/status", response_model=ApplicationResponse)
async def update_application_status(
    application_id: int,
    update: ApplicationStatusUpdate,
    employer: dict = Depends(get_current_employer)
):
    """Update status of a job application, optionally with a note."""
    with get_db_session() as db:
        row = _owned_application(db, application_id, employer["user_id"])
        notes = _append_note(row[1], update.note) if update.note else row[1]

        db.execute(
            text("""
                UPDATE applications SET status = :status, notes = :notes, updated_at = CURRENT_TIMESTAMP
                WHERE application_id = :aid
            """),
            {"aid": application_id, "status": update.status.value, "notes": notes}
        )

    logger.info(f"Application {application_id} moved to {update.status.value}")
    return row_to_application(fetch_one(APPLICATION_SELECT + " WHERE a.application_id = :aid", {"aid": application_id}))


@router.post("/applicants/bulk-status", response_model=MessageResponse)
async def bulk_update_status(update: BulkStatusUpdate, employer: dict = Depends(get_current_employer)):
    """All-or-nothing: every application must belong to this employer."""
    ids = sorted(set(update.application_ids))
    with get_db_session() as db:
        for application_id in ids:
            _owned_application(db, application_id, employer["user_id"])

        for application_id in ids:
            db.execute(
                text("""
                    UPDATE applications SET status = :status, updated_at = CURRENT_TIMESTAMP
                    WHERE application_id = :aid
                """),
                {"aid": application_id, "status": update.status.value}
            )

    return MessageResponse(message=f"{update.status.value} applied to {len(ids)} applicants")


@router.post("/applicants/{application_id}/notes", response_model=ApplicationResponse)
async def add_note(application_id: int, body: ApplicationNote, employer: dict = Depends(get_current_employer)):
    with get_db_session() as db:
        row = _owned_application(db, application_id, employer["user_id"])
        db.execute(
            text("UPDATE applications SET notes = :notes WHERE application_id = :aid"),
            {"aid": application_id, "notes": _append_note(row[1], body.note)}
        )

    return row_to_application(fetch_one(APPLICATION_SELECT + " WHERE a.application_id = :aid", {"aid": application_id}))

"""
Application Routes (candidate side)

GET    /applications                  - My applications, newest first
GET    /applications/{application_id} - One application (candidate or owning employer)
DELETE /applications/{application_id} - Withdraw an undecided application
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy import text
from typing import List, Optional

from jobportal.db.database import get_db_session, execute_raw_sql, fetch_one
from jobportal.core.auth import get_current_user, get_current_candidate
from jobportal.services.job_service import APPLICATION_SELECT, row_to_application
from jobportal.schemas.schemas import ApplicationResponse, MessageResponse

router = APIRouter(prefix="/applications", tags=["Applications"])

DECIDED_STATUSES = ("accepted", "rejected")


@router.get("", response_model=List[ApplicationResponse])
async def get_my_applications(
    status: Optional[str] = Query(None),
    candidate: dict = Depends(get_current_candidate)
):
    """Get all job applications for current candidate."""
    sql = APPLICATION_SELECT + " WHERE a.candidate_id = :cid"
    params = {"cid": candidate["user_id"]}
    if status:
        sql += " AND a.status = :status"
        params["status"] = status
    sql += " ORDER BY a.created_at DESC, a.application_id DESC"

    return [row_to_application(r) for r in execute_raw_sql(sql, params)]


@router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(application_id: int, user: dict = Depends(get_current_user)):
    row = fetch_one(APPLICATION_SELECT + " WHERE a.application_id = :aid", {"aid": application_id})
    if not row:
        raise HTTPException(status_code=404, detail="Application not found")

    owner = fetch_one("SELECT employer_id FROM jobs WHERE job_id = :jid", {"jid": row["job_id"]})
    if user["user_id"] not in (row["candidate_id"], owner["employer_id"]):
        raise HTTPException(status_code=404, detail="Application not found")
    return row_to_application(row)


@router.delete("/{application_id}", response_model=MessageResponse)
async def withdraw_application(application_id: int, candidate: dict = Depends(get_current_candidate)):
    """Withdraw an application. Not possible once the employer has decided."""
    with get_db_session() as db:
        result = db.execute(
            text("SELECT status FROM applications WHERE application_id = :aid AND candidate_id = :cid"),
            {"aid": application_id, "cid": candidate["user_id"]}
        )
        row = result.fetchone()
        if not row:
            raise HTTPException(status_code=404, detail="Application not found")
        if row[0] in DECIDED_STATUSES:
            raise HTTPException(status_code=400, detail=f"Application already {row[0]}")

        db.execute(text("DELETE FROM applications WHERE application_id = :aid"), {"aid": application_id})

    return MessageResponse(message="Application withdrawn")

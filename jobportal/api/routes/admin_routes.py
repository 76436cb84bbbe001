"""
Admin Routes

Admin and super-admin:
GET  /admin/users                      - List users (role / search filters)
PUT  /admin/users/{id}/status          - Activate or deactivate a user
PUT  /admin/employers/{id}/verify      - Mark an employer as verified
GET  /admin/jobs                       - Every job on the platform
PUT  /admin/jobs/{id}/close            - Close a posting (moderation)
GET  /admin/stats                      - Platform counters

Super-admin only:
PUT  /admin/users/{id}/role            - Change a user's role
GET  /admin/audit-logs                 - Compliance trail
"""

from fastapi import APIRouter, HTTPException, Depends, Query, Request
from loguru import logger
from sqlalchemy import text
from typing import List, Optional

from jobportal.db.database import get_db_session, execute_raw_sql, fetch_one, contains_pattern
from jobportal.core.auth import get_current_admin, get_current_superadmin
from jobportal.services.audit_service import record_action, list_actions
from jobportal.services.bgv_service import create_default_documents
from jobportal.services.job_service import JOB_SELECT, row_to_job, get_job_row
from jobportal.schemas.schemas import (
    AdminUserResponse, UserStatusUpdate, RoleUpdate, PlatformStatsResponse, AuditLogResponse,
    JobResponse, MessageResponse
)

router = APIRouter(prefix="/admin", tags=["Admin"])

USER_SELECT = """
    SELECT u.user_id, u.email, u.role, u.is_active, p.full_name, u.created_at
    FROM users u LEFT JOIN profiles p ON p.user_id = u.user_id
"""


def _client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


def _get_user_row(user_id: int) -> dict:
    row = fetch_one(USER_SELECT + " WHERE u.user_id = :uid", {"uid": user_id})
    if not row:
        raise HTTPException(status_code=404, detail="User not found")
    return row


@router.get("/users", response_model=List[AdminUserResponse])
async def list_users(
    role: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Matches email or name"),
    admin: dict = Depends(get_current_admin)
):
    sql = USER_SELECT + " WHERE 1 = 1"
    params = {}
    if role:
        sql += " AND u.role = :role"
        params["role"] = role
    if search:
        sql += """ AND (LOWER(u.email) LIKE :search ESCAPE '\\'
                        OR LOWER(COALESCE(p.full_name, '')) LIKE :search ESCAPE '\\')"""
        params["search"] = contains_pattern(search)
    sql += " ORDER BY u.created_at DESC, u.user_id DESC"
    return [AdminUserResponse(**r) for r in execute_raw_sql(sql, params)]


@router.put("/users/{user_id}/status", response_model=AdminUserResponse)
async def set_user_status(
    user_id: int,
    update: UserStatusUpdate,
    request: Request,
    admin: dict = Depends(get_current_admin)
):
    """Admins cannot lock themselves out or touch super-admin accounts."""
    target = _get_user_row(user_id)
    if user_id == admin["user_id"]:
        raise HTTPException(status_code=400, detail="You cannot change your own account status")
    if target["role"] == "superadmin" and admin["role"] != "superadmin":
        raise HTTPException(status_code=403, detail="Only a super-admin can change a super-admin account")

    with get_db_session() as db:
        db.execute(
            text("UPDATE users SET is_active = :active WHERE user_id = :uid"),
            {"uid": user_id, "active": update.is_active}
        )

    action = "Activate User" if update.is_active else "Deactivate User"
    record_action(action, actor_id=admin["user_id"], actor_email=admin["email"],
                  target=target["email"], status="success" if update.is_active else "warning",
                  ip_address=_client_ip(request))
    logger.info(f"{admin['email']}: {action} {target['email']}")
    return AdminUserResponse(**_get_user_row(user_id))


@router.put("/employers/{user_id}/verify", response_model=MessageResponse)
async def verify_employer(user_id: int, request: Request, admin: dict = Depends(get_current_admin)):
    target = _get_user_row(user_id)
    if target["role"] != "employer":
        raise HTTPException(status_code=404, detail="Employer not found")

    with get_db_session() as db:
        db.execute(
            text("""
                INSERT INTO employer_profiles (user_id, is_verified) VALUES (:uid, :verified)
                ON CONFLICT (user_id) DO UPDATE SET is_verified = excluded.is_verified, updated_at = CURRENT_TIMESTAMP
            """),
            {"uid": user_id, "verified": True}
        )

    record_action("Verify Employer", actor_id=admin["user_id"], actor_email=admin["email"],
                  target=target["email"], ip_address=_client_ip(request))
    return MessageResponse(message=f"{target['email']} verified")


@router.get("/jobs", response_model=List[JobResponse])
async def list_all_jobs(status: Optional[str] = Query(None), admin: dict = Depends(get_current_admin)):
    sql = JOB_SELECT
    params = {}
    if status:
        sql += " WHERE j.status = :status"
        params["status"] = status
    sql += " ORDER BY j.created_at DESC, j.job_id DESC"
    return [row_to_job(r) for r in execute_raw_sql(sql, params)]


@router.put("/jobs/{job_id}/close", response_model=JobResponse)
async def close_job(job_id: int, request: Request, admin: dict = Depends(get_current_admin)):
    with get_db_session() as db:
        result = db.execute(
            text("UPDATE jobs SET status = 'closed', updated_at = CURRENT_TIMESTAMP WHERE job_id = :jid"),
            {"jid": job_id}
        )
        if result.rowcount == 0:
            raise HTTPException(status_code=404, detail="Job not found")

    record_action("Moderate Job Post", actor_id=admin["user_id"], actor_email=admin["email"],
                  target=f"job:{job_id}", status="warning", ip_address=_client_ip(request))
    return row_to_job(get_job_row(job_id))


@router.get("/stats", response_model=PlatformStatsResponse)
async def platform_stats(admin: dict = Depends(get_current_admin)):
    by_role = {
        r["role"]: r["total"] for r in execute_raw_sql("SELECT role, COUNT(*) AS total FROM users GROUP BY role")
    }

    def count(sql: str) -> int:
        return fetch_one(sql)["total"]

    return PlatformStatsResponse(
        total_users=sum(by_role.values()),
        users_by_role=by_role,
        total_jobs=count("SELECT COUNT(*) AS total FROM jobs"),
        active_jobs=count("SELECT COUNT(*) AS total FROM jobs WHERE status = 'active'"),
        total_applications=count("SELECT COUNT(*) AS total FROM applications"),
        pending_bgv_documents=count("SELECT COUNT(*) AS total FROM bgv_documents WHERE status = 'pending'"),
        pending_achievements=count("SELECT COUNT(*) AS total FROM achievements WHERE status = 'pending'"),
        pending_leaves=count("SELECT COUNT(*) AS total FROM leave_applications WHERE status = 'pending'")
    )


# ============================================================
# SUPER-ADMIN
# ============================================================

@router.put("/users/{user_id}/role", response_model=AdminUserResponse)
async def change_role(
    user_id: int,
    update: RoleUpdate,
    request: Request,
    superadmin: dict = Depends(get_current_superadmin)
):
    """
    Change a user's role. Existing role-specific profile data stays in
    place; candidates get their BGV checklist if they don't have one.
    """
    target = _get_user_row(user_id)
    if user_id == superadmin["user_id"]:
        raise HTTPException(status_code=400, detail="You cannot change your own role")

    with get_db_session() as db:
        db.execute(
            text("UPDATE users SET role = :role WHERE user_id = :uid"),
            {"uid": user_id, "role": update.role.value}
        )
        if update.role.value == "candidate":
            create_default_documents(db, user_id)

    record_action("Change Role", actor_id=superadmin["user_id"], actor_email=superadmin["email"],
                  target=f"{target['email']}:{target['role']}->{update.role.value}", status="warning",
                  ip_address=_client_ip(request))
    return AdminUserResponse(**_get_user_row(user_id))


@router.get("/audit-logs", response_model=List[AuditLogResponse])
async def audit_logs(
    limit: int = Query(100, ge=1, le=1000),
    action: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    superadmin: dict = Depends(get_current_superadmin)
):
    return [AuditLogResponse(**r) for r in list_actions(limit=limit, action=action, status=status)]

"""
Audit Service - compliance trail for sensitive actions.

Recorded actions: logins (success/failure), password resets, user
activation changes, role changes, employer verification, job deletion
and moderation.
"""

from typing import Optional, List

from loguru import logger
from sqlalchemy import text

from jobportal.db.database import get_db_session, execute_raw_sql


def record_action(action: str, actor_id: Optional[int] = None, actor_email: Optional[str] = None,
                  target: Optional[str] = None, status: str = "success",
                  ip_address: Optional[str] = None) -> None:
    """
    Write one audit row. Failures are logged, never raised, so auditing
    can't break the request that triggered it.
    """
    try:
        with get_db_session() as db:
            db.execute(
                text("""
                    INSERT INTO audit_logs (actor_id, actor_email, action, target, status, ip_address)
                    VALUES (:actor_id, :actor_email, :action, :target, :status, :ip)
                """),
                {
                    "actor_id": actor_id, "actor_email": actor_email, "action": action,
                    "target": target, "status": status, "ip": ip_address
                }
            )
    except Exception as e:
        logger.error(f"Failed to write audit log for '{action}': {e}")


def list_actions(limit: int = 100, action: Optional[str] = None, status: Optional[str] = None) -> List[dict]:
    sql = "SELECT * FROM audit_logs WHERE 1 = 1"
    params = {"limit": limit}
    if action:
        sql += " AND action = :action"
        params["action"] = action
    if status:
        sql += " AND status = :status"
        params["status"] = status
    sql += " ORDER BY log_id DESC LIMIT :limit"
    return execute_raw_sql(sql, params)

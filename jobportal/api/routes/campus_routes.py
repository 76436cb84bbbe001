"""
Campus Routes

Announcements
POST /campus/announcements                      - Post (faculty/admin)
GET  /campus/announcements                      - List, optional department filter
POST /campus/announcements/{id}/react           - Toggle a reaction
POST /campus/announcements/{id}/read            - Mark as read

Groups
POST /campus/groups                             - Create (student/faculty)
GET  /campus/groups                             - List with member counts
POST /campus/groups/{id}/join                   - Students request, faculty join as mentor
GET  /campus/groups/{id}/members                - Member list
PUT  /campus/groups/{id}/members/{user_id}      - Approve/reject a join request
POST /campus/groups/{id}/posts                  - Post to the group (approved members)
GET  /campus/groups/{id}/posts                  - Group posts

Leaves
POST /campus/leaves                             - Apply (student)
GET  /campus/leaves                             - Own leaves (student) or all (faculty/admin)
PUT  /campus/leaves/{id}/review                 - Approve/reject (faculty/admin)

Feedback
POST /campus/feedback                           - Rate a faculty member (student)
GET  /campus/feedback/summary                   - Own feedback and average (faculty)

Achievements
POST /campus/achievements                       - Submit (student), toxicity gated
GET  /campus/achievements                       - Approved achievements
GET  /campus/achievements/mine                  - Own achievements, any status
GET  /campus/achievements/pending               - Waiting for review (admin)
PUT  /campus/achievements/{id}/review           - Approve/reject (admin)
POST /campus/achievements/{id}/like             - Like an approved achievement
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from loguru import logger
from sqlalchemy import text
from typing import List, Optional

from jobportal.db.database import get_db_session, execute_raw_sql, fetch_one
from jobportal.core.auth import (
    get_current_user, get_current_student, get_current_faculty, get_current_admin, require_roles
)
from jobportal.services.ai_mock_service import (
    calculate_toxicity_score, improve_achievement_text, ACHIEVEMENT_TOXICITY_THRESHOLD
)
from jobportal.schemas.schemas import (
    AnnouncementCreate, AnnouncementResponse, ReactionRequest,
    GroupCreate, GroupResponse, GroupMemberResponse, MembershipDecision, GroupPostCreate, GroupPostResponse,
    LeaveCreate, LeaveReview, LeaveResponse,
    FeedbackCreate, FeedbackResponse, FeedbackSummary,
    AchievementCreate, AchievementReview, AchievementResponse
)

router = APIRouter(prefix="/campus", tags=["Campus"])

get_current_announcer = require_roles("faculty", "admin", "superadmin")
get_current_group_creator = require_roles("student", "faculty")
get_current_leave_reviewer = require_roles("faculty", "admin", "superadmin")

ALL_DEPARTMENTS = "All"
ANONYMOUS_NAME = "Anonymous"


# ============================================================
# ANNOUNCEMENTS
# ============================================================

ANNOUNCEMENT_SELECT = """
    SELECT a.announcement_id, a.title, a.content, a.author_id, p.full_name AS author_name,
           u.role AS author_role, a.department, a.priority, a.created_at
    FROM announcements a
    JOIN users u ON u.user_id = a.author_id
    LEFT JOIN profiles p ON p.user_id = a.author_id
"""


def _build_announcements(rows: List[dict], user_id: int) -> List[AnnouncementResponse]:
    """Attach reaction counts, read counts and the caller's read flag."""
    if not rows:
        return []

    reactions = {}
    for r in execute_raw_sql("""
        SELECT announcement_id, reaction, COUNT(*) AS total
        FROM announcement_reactions GROUP BY announcement_id, reaction
    """):
        reactions.setdefault(r["announcement_id"], {})[r["reaction"]] = r["total"]

    read_counts = {
        r["announcement_id"]: r["total"] for r in execute_raw_sql(
            "SELECT announcement_id, COUNT(*) AS total FROM announcement_reads GROUP BY announcement_id"
        )
    }
    my_reads = {
        r["announcement_id"] for r in execute_raw_sql(
            "SELECT announcement_id FROM announcement_reads WHERE user_id = :uid", {"uid": user_id}
        )
    }

    return [
        AnnouncementResponse(
            **r,
            reactions=reactions.get(r["announcement_id"], {}),
            read_count=read_counts.get(r["announcement_id"], 0),
            is_read=r["announcement_id"] in my_reads
        )
        for r in rows
    ]


def _get_announcement(announcement_id: int, user_id: int) -> AnnouncementResponse:
    row = fetch_one(ANNOUNCEMENT_SELECT + " WHERE a.announcement_id = :aid", {"aid": announcement_id})
    if not row:
        raise HTTPException(status_code=404, detail="Announcement not found")
    return _build_announcements([row], user_id)[0]


@router.post("/announcements", response_model=AnnouncementResponse, status_code=201)
async def create_announcement(body: AnnouncementCreate, user: dict = Depends(get_current_announcer)):
    with get_db_session() as db:
        result = db.execute(
            text("""
                INSERT INTO announcements (author_id, title, content, department, priority)
                VALUES (:author, :title, :content, :department, :priority)
                RETURNING announcement_id
            """),
            {
                "author": user["user_id"], "title": body.title, "content": body.content,
                "department": body.department or ALL_DEPARTMENTS, "priority": body.priority.value
            }
        )
        announcement_id = result.fetchone()[0]

    logger.info(f"Announcement {announcement_id} posted by {user['email']}")
    return _get_announcement(announcement_id, user["user_id"])


@router.get("/announcements", response_model=List[AnnouncementResponse])
async def list_announcements(
    department: Optional[str] = Query(None, description="Announcements for 'All' are always included"),
    user: dict = Depends(get_current_user)
):
    sql = ANNOUNCEMENT_SELECT
    params = {}
    if department and department != ALL_DEPARTMENTS:
        sql += " WHERE a.department IN (:department, :all)"
        params = {"department": department, "all": ALL_DEPARTMENTS}
    sql += " ORDER BY a.created_at DESC, a.announcement_id DESC"

    return _build_announcements(execute_raw_sql(sql, params), user["user_id"])


@router.post("/announcements/{announcement_id}/react", response_model=AnnouncementResponse)
async def react_to_announcement(
    announcement_id: int,
    body: ReactionRequest,
    user: dict = Depends(get_current_user)
):
    """Reacting twice with the same kind takes the reaction back."""
    with get_db_session() as db:
        exists = db.execute(
            text("SELECT announcement_id FROM announcements WHERE announcement_id = :aid"),
            {"aid": announcement_id}
        ).fetchone()
        if not exists:
            raise HTTPException(status_code=404, detail="Announcement not found")

        params = {"aid": announcement_id, "uid": user["user_id"], "reaction": body.reaction.value}
        result = db.execute(
            text("""
                DELETE FROM announcement_reactions
                WHERE announcement_id = :aid AND user_id = :uid AND reaction = :reaction
            """),
            params
        )
        if result.rowcount == 0:
            db.execute(
                text("""
                    INSERT INTO announcement_reactions (announcement_id, user_id, reaction)
                    VALUES (:aid, :uid, :reaction)
                """),
                params
            )

    return _get_announcement(announcement_id, user["user_id"])


@router.post("/announcements/{announcement_id}/read", response_model=AnnouncementResponse)
async def mark_announcement_read(announcement_id: int, user: dict = Depends(get_current_user)):
    with get_db_session() as db:
        exists = db.execute(
            text("SELECT announcement_id FROM announcements WHERE announcement_id = :aid"),
            {"aid": announcement_id}
        ).fetchone()
        if not exists:
            raise HTTPException(status_code=404, detail="Announcement not found")

        db.execute(
            text("""
                INSERT INTO announcement_reads (announcement_id, user_id) VALUES (:aid, :uid)
                ON CONFLICT (announcement_id, user_id) DO NOTHING
            """),
            {"aid": announcement_id, "uid": user["user_id"]}
        )

    return _get_announcement(announcement_id, user["user_id"])


# ============================================================
# GROUPS
# ============================================================

GROUP_SELECT = """
    SELECT g.group_id, g.name, g.description, g.category, g.status, g.created_by, g.created_at,
        (SELECT COUNT(*) FROM group_members m
            WHERE m.group_id = g.group_id AND m.status = 'approved') AS member_count,
        (SELECT COUNT(*) FROM group_members m
            WHERE m.group_id = g.group_id AND m.status = 'approved' AND m.member_role = 'mentor') AS mentor_count,
        (SELECT COUNT(*) FROM group_members m
            WHERE m.group_id = g.group_id AND m.status = 'pending') AS pending_requests,
        (SELECT m.status FROM group_members m
            WHERE m.group_id = g.group_id AND m.user_id = :uid) AS my_status
    FROM student_groups g
"""


def _get_group(group_id: int, user_id: int) -> GroupResponse:
    row = fetch_one(GROUP_SELECT + " WHERE g.group_id = :gid", {"gid": group_id, "uid": user_id})
    if not row:
        raise HTTPException(status_code=404, detail="Group not found")
    return GroupResponse(**row)


def _membership(db, group_id: int, user_id: int):
    """(member_role, status) of a user in a group, or None."""
    return db.execute(
        text("SELECT member_role, status FROM group_members WHERE group_id = :gid AND user_id = :uid"),
        {"gid": group_id, "uid": user_id}
    ).fetchone()


def _require_approved_member(group_id: int, user_id: int) -> None:
    _get_group(group_id, user_id)
    with get_db_session() as db:
        member = _membership(db, group_id, user_id)
    if not member or member[1] != "approved":
        raise HTTPException(status_code=403, detail="Only group members can do this")


@router.post("/groups", response_model=GroupResponse, status_code=201)
async def create_group(body: GroupCreate, user: dict = Depends(get_current_group_creator)):
    """The creator joins right away (faculty creators join as mentor)."""
    with get_db_session() as db:
        taken = db.execute(
            text("SELECT group_id FROM student_groups WHERE LOWER(name) = :name"),
            {"name": body.name.lower()}
        ).fetchone()
        if taken:
            raise HTTPException(status_code=400, detail="A group with this name already exists")

        result = db.execute(
            text("""
                INSERT INTO student_groups (name, description, category, created_by, status)
                VALUES (:name, :description, :category, :creator, 'active')
                RETURNING group_id
            """),
            {"name": body.name, "description": body.description, "category": body.category, "creator": user["user_id"]}
        )
        group_id = result.fetchone()[0]

        db.execute(
            text("""
                INSERT INTO group_members (group_id, user_id, member_role, status)
                VALUES (:gid, :uid, :role, 'approved')
            """),
            {"gid": group_id, "uid": user["user_id"], "role": "mentor" if user["role"] == "faculty" else "owner"}
        )

    return _get_group(group_id, user["user_id"])


@router.get("/groups", response_model=List[GroupResponse])
async def list_groups(category: Optional[str] = Query(None), user: dict = Depends(get_current_user)):
    sql = GROUP_SELECT + " WHERE g.status = 'active'"
    params = {"uid": user["user_id"]}
    if category:
        sql += " AND g.category = :category"
        params["category"] = category
    sql += " ORDER BY g.name"
    return [GroupResponse(**r) for r in execute_raw_sql(sql, params)]


@router.post("/groups/{group_id}/join", response_model=GroupResponse)
async def join_group(group_id: int, user: dict = Depends(get_current_group_creator)):
    """Students wait for approval, faculty join immediately as mentors."""
    _get_group(group_id, user["user_id"])

    with get_db_session() as db:
        existing = _membership(db, group_id, user["user_id"])
        if existing and existing[1] != "rejected":
            raise HTTPException(status_code=400, detail=f"Membership already {existing[1]}")

        is_faculty = user["role"] == "faculty"
        params = {
            "gid": group_id, "uid": user["user_id"],
            "role": "mentor" if is_faculty else "member",
            "status": "approved" if is_faculty else "pending"
        }
        if existing:
            db.execute(
                text("""
                    UPDATE group_members SET member_role = :role, status = :status
                    WHERE group_id = :gid AND user_id = :uid
                """),
                params
            )
        else:
            db.execute(
                text("""
                    INSERT INTO group_members (group_id, user_id, member_role, status)
                    VALUES (:gid, :uid, :role, :status)
                """),
                params
            )

    return _get_group(group_id, user["user_id"])


@router.get("/groups/{group_id}/members", response_model=List[GroupMemberResponse])
async def list_group_members(group_id: int, user: dict = Depends(get_current_user)):
    _get_group(group_id, user["user_id"])
    rows = execute_raw_sql(
        """
        SELECT m.user_id, p.full_name, m.member_role, m.status
        FROM group_members m LEFT JOIN profiles p ON p.user_id = m.user_id
        WHERE m.group_id = :gid
        ORDER BY m.status, m.user_id
        """,
        {"gid": group_id}
    )
    return [GroupMemberResponse(**r) for r in rows]


@router.put("/groups/{group_id}/members/{member_id}", response_model=GroupMemberResponse)
async def decide_membership(
    group_id: int,
    member_id: int,
    decision: MembershipDecision,
    user: dict = Depends(get_current_user)
):
    """The group creator or an approved mentor settles pending requests."""
    group = _get_group(group_id, user["user_id"])

    with get_db_session() as db:
        me = _membership(db, group_id, user["user_id"])
        is_mentor = me is not None and me[0] == "mentor" and me[1] == "approved"
        if group.created_by != user["user_id"] and not is_mentor:
            raise HTTPException(status_code=403, detail="Only the group creator or a mentor can decide")

        request = _membership(db, group_id, member_id)
        if not request:
            raise HTTPException(status_code=404, detail="Join request not found")
        if request[1] != "pending":
            raise HTTPException(status_code=400, detail=f"Request already {request[1]}")

        db.execute(
            text("UPDATE group_members SET status = :status WHERE group_id = :gid AND user_id = :uid"),
            {"gid": group_id, "uid": member_id, "status": "approved" if decision.approve else "rejected"}
        )

    row = fetch_one(
        """
        SELECT m.user_id, p.full_name, m.member_role, m.status
        FROM group_members m LEFT JOIN profiles p ON p.user_id = m.user_id
        WHERE m.group_id = :gid AND m.user_id = :uid
        """,
        {"gid": group_id, "uid": member_id}
    )
    return GroupMemberResponse(**row)


@router.post("/groups/{group_id}/posts", response_model=GroupPostResponse, status_code=201)
async def create_group_post(group_id: int, body: GroupPostCreate, user: dict = Depends(get_current_user)):
    _require_approved_member(group_id, user["user_id"])

    with get_db_session() as db:
        result = db.execute(
            text("""
                INSERT INTO group_posts (group_id, author_id, content, link)
                VALUES (:gid, :uid, :content, :link)
                RETURNING post_id
            """),
            {"gid": group_id, "uid": user["user_id"], "content": body.content, "link": body.link}
        )
        post_id = result.fetchone()[0]

    row = fetch_one(
        """
        SELECT g.post_id, g.group_id, g.author_id, p.full_name AS author_name, g.content, g.link, g.created_at
        FROM group_posts g LEFT JOIN profiles p ON p.user_id = g.author_id
        WHERE g.post_id = :pid
        """,
        {"pid": post_id}
    )
    return GroupPostResponse(**row)


@router.get("/groups/{group_id}/posts", response_model=List[GroupPostResponse])
async def list_group_posts(group_id: int, user: dict = Depends(get_current_user)):
    _require_approved_member(group_id, user["user_id"])
    rows = execute_raw_sql(
        """
        SELECT g.post_id, g.group_id, g.author_id, p.full_name AS author_name, g.content, g.link, g.created_at
        FROM group_posts g LEFT JOIN profiles p ON p.user_id = g.author_id
        WHERE g.group_id = :gid
        ORDER BY g.created_at DESC, g.post_id DESC
        """,
        {"gid": group_id}
    )
    return [GroupPostResponse(**r) for r in rows]


# ============================================================
# LEAVES
# ============================================================

LEAVE_SELECT = """
    SELECT l.leave_id, l.student_id, p.full_name AS student_name, s.roll_number,
           l.leave_type, l.start_date, l.end_date, l.days, l.reason, l.status,
           l.reviewed_by, l.review_date, l.comments, l.applied_at
    FROM leave_applications l
    LEFT JOIN profiles p ON p.user_id = l.student_id
    LEFT JOIN student_profiles s ON s.user_id = l.student_id
"""


@router.post("/leaves", response_model=LeaveResponse, status_code=201)
async def apply_leave(body: LeaveCreate, student: dict = Depends(get_current_student)):
    days = (body.end_date - body.start_date).days + 1

    with get_db_session() as db:
        result = db.execute(
            text("""
                INSERT INTO leave_applications (student_id, leave_type, start_date, end_date, days, reason, status)
                VALUES (:sid, :leave_type, :start_date, :end_date, :days, :reason, 'pending')
                RETURNING leave_id
            """),
            {
                "sid": student["user_id"], "leave_type": body.leave_type.value,
                "start_date": body.start_date.isoformat(), "end_date": body.end_date.isoformat(),
                "days": days, "reason": body.reason
            }
        )
        leave_id = result.fetchone()[0]

    return LeaveResponse(**fetch_one(LEAVE_SELECT + " WHERE l.leave_id = :lid", {"lid": leave_id}))


@router.get("/leaves", response_model=List[LeaveResponse])
async def list_leaves(status: Optional[str] = Query(None), user: dict = Depends(get_current_user)):
    """Students see their own leaves, reviewers see everyone's."""
    if user["role"] == "student":
        sql = LEAVE_SELECT + " WHERE l.student_id = :sid"
        params = {"sid": user["user_id"]}
    elif user["role"] in ("faculty", "admin", "superadmin"):
        sql = LEAVE_SELECT + " WHERE 1 = 1"
        params = {}
    else:
        raise HTTPException(status_code=403, detail="Leave applications are for campus accounts")

    if status:
        sql += " AND l.status = :status"
        params["status"] = status
    sql += " ORDER BY l.applied_at DESC, l.leave_id DESC"
    return [LeaveResponse(**r) for r in execute_raw_sql(sql, params)]


@router.put("/leaves/{leave_id}/review", response_model=LeaveResponse)
async def review_leave(leave_id: int, review: LeaveReview, reviewer: dict = Depends(get_current_leave_reviewer)):
    with get_db_session() as db:
        row = db.execute(
            text("SELECT status FROM leave_applications WHERE leave_id = :lid"), {"lid": leave_id}
        ).fetchone()
        if not row:
            raise HTTPException(status_code=404, detail="Leave application not found")
        if row[0] != "pending":
            raise HTTPException(status_code=400, detail=f"Leave already {row[0]}")

        db.execute(
            text("""
                UPDATE leave_applications
                SET status = :status, reviewed_by = :reviewer, review_date = CURRENT_TIMESTAMP, comments = :comments
                WHERE leave_id = :lid
            """),
            {"lid": leave_id, "status": review.status.value, "reviewer": reviewer["user_id"], "comments": review.comments}
        )

    return LeaveResponse(**fetch_one(LEAVE_SELECT + " WHERE l.leave_id = :lid", {"lid": leave_id}))


# ============================================================
# FEEDBACK
# ============================================================

FEEDBACK_SELECT = """
    SELECT f.feedback_id, f.student_id, sp.full_name AS student_name, f.faculty_id,
           fp.full_name AS faculty_name, f.course_code, f.course_name, f.rating, f.feedback,
           f.is_anonymous, f.category, f.created_at
    FROM feedbacks f
    LEFT JOIN profiles sp ON sp.user_id = f.student_id
    LEFT JOIN profiles fp ON fp.user_id = f.faculty_id
"""


def _row_to_feedback(r: dict) -> FeedbackResponse:
    data = dict(r)
    data.pop("student_id")
    if data["is_anonymous"] or not data["student_name"]:
        data["student_name"] = ANONYMOUS_NAME
    return FeedbackResponse(**data)


@router.post("/feedback", response_model=FeedbackResponse, status_code=201)
async def submit_feedback(body: FeedbackCreate, student: dict = Depends(get_current_student)):
    faculty = fetch_one("SELECT role FROM users WHERE user_id = :fid", {"fid": body.faculty_id})
    if not faculty or faculty["role"] != "faculty":
        raise HTTPException(status_code=404, detail="Faculty member not found")

    with get_db_session() as db:
        result = db.execute(
            text("""
                INSERT INTO feedbacks (student_id, faculty_id, course_code, course_name, rating,
                    feedback, is_anonymous, category)
                VALUES (:sid, :fid, :code, :course, :rating, :feedback, :anon, :category)
                RETURNING feedback_id
            """),
            {
                "sid": student["user_id"], "fid": body.faculty_id, "code": body.course_code,
                "course": body.course_name, "rating": body.rating, "feedback": body.feedback,
                "anon": body.is_anonymous, "category": body.category
            }
        )
        feedback_id = result.fetchone()[0]

    return _row_to_feedback(fetch_one(FEEDBACK_SELECT + " WHERE f.feedback_id = :id", {"id": feedback_id}))


@router.get("/feedback/summary", response_model=FeedbackSummary)
async def feedback_summary(faculty: dict = Depends(get_current_faculty)):
    rows = execute_raw_sql(
        FEEDBACK_SELECT + " WHERE f.faculty_id = :fid ORDER BY f.created_at DESC, f.feedback_id DESC",
        {"fid": faculty["user_id"]}
    )
    average = round(sum(r["rating"] for r in rows) / len(rows), 2) if rows else None
    return FeedbackSummary(
        faculty_id=faculty["user_id"],
        total=len(rows),
        average_rating=average,
        feedbacks=[_row_to_feedback(r) for r in rows]
    )


# ============================================================
# ACHIEVEMENTS
# ============================================================

ACHIEVEMENT_SELECT = """
    SELECT a.achievement_id, a.student_id, p.full_name AS student_name, a.title, a.description,
           a.category, a.toxicity_score, a.status, a.likes, a.created_at
    FROM achievements a LEFT JOIN profiles p ON p.user_id = a.student_id
"""


def _get_achievement(achievement_id: int) -> AchievementResponse:
    row = fetch_one(ACHIEVEMENT_SELECT + " WHERE a.achievement_id = :aid", {"aid": achievement_id})
    if not row:
        raise HTTPException(status_code=404, detail="Achievement not found")
    return AchievementResponse(**row)


@router.post("/achievements", response_model=AchievementResponse, status_code=201)
async def submit_achievement(body: AchievementCreate, student: dict = Depends(get_current_student)):
    """
    Submit an achievement for review. With improve=true the wording is
    softened first; a description that is still too toxic is refused.
    """
    title, description = body.title, body.description
    if body.improve:
        title = improve_achievement_text(title)
        description = improve_achievement_text(description)

    score = calculate_toxicity_score(description)
    if score > ACHIEVEMENT_TOXICITY_THRESHOLD:
        logger.warning(f"Achievement from student {student['user_id']} refused (toxicity {score:.2f})")
        raise HTTPException(
            status_code=422,
            detail=f"Content flagged as inappropriate (toxicity {score:.2f}). Try the improve option."
        )

    with get_db_session() as db:
        result = db.execute(
            text("""
                INSERT INTO achievements (student_id, title, description, category, toxicity_score, status, likes)
                VALUES (:sid, :title, :description, :category, :score, 'pending', 0)
                RETURNING achievement_id
            """),
            {
                "sid": student["user_id"], "title": title, "description": description,
                "category": body.category, "score": score
            }
        )
        achievement_id = result.fetchone()[0]

    return _get_achievement(achievement_id)


@router.get("/achievements", response_model=List[AchievementResponse])
async def list_achievements(category: Optional[str] = Query(None), user: dict = Depends(get_current_user)):
    sql = ACHIEVEMENT_SELECT + " WHERE a.status = 'approved'"
    params = {}
    if category:
        sql += " AND a.category = :category"
        params["category"] = category
    sql += " ORDER BY a.likes DESC, a.created_at DESC, a.achievement_id DESC"
    return [AchievementResponse(**r) for r in execute_raw_sql(sql, params)]


@router.get("/achievements/mine", response_model=List[AchievementResponse])
async def my_achievements(student: dict = Depends(get_current_student)):
    rows = execute_raw_sql(
        ACHIEVEMENT_SELECT + " WHERE a.student_id = :sid ORDER BY a.created_at DESC, a.achievement_id DESC",
        {"sid": student["user_id"]}
    )
    return [AchievementResponse(**r) for r in rows]


@router.get("/achievements/pending", response_model=List[AchievementResponse])
async def pending_achievements(admin: dict = Depends(get_current_admin)):
    rows = execute_raw_sql(ACHIEVEMENT_SELECT + " WHERE a.status = 'pending' ORDER BY a.created_at, a.achievement_id")
    return [AchievementResponse(**r) for r in rows]


@router.put("/achievements/{achievement_id}/review", response_model=AchievementResponse)
async def review_achievement(achievement_id: int, review: AchievementReview, admin: dict = Depends(get_current_admin)):
    with get_db_session() as db:
        result = db.execute(
            text("UPDATE achievements SET status = :status WHERE achievement_id = :aid"),
            {"aid": achievement_id, "status": review.status.value}
        )
        if result.rowcount == 0:
            raise HTTPException(status_code=404, detail="Achievement not found")

    return _get_achievement(achievement_id)


@router.post("/achievements/{achievement_id}/like", response_model=AchievementResponse)
async def like_achievement(achievement_id: int, user: dict = Depends(get_current_user)):
    with get_db_session() as db:
        result = db.execute(
            text("UPDATE achievements SET likes = likes + 1 WHERE achievement_id = :aid AND status = 'approved'"),
            {"aid": achievement_id}
        )
        if result.rowcount == 0:
            raise HTTPException(status_code=404, detail="Achievement not found")

    return _get_achievement(achievement_id)

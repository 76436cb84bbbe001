"""
Relational schema - SQLAlchemy Core table definitions.

Queries elsewhere are raw SQL (text()), these tables exist so the schema can
be created on startup (and on SQLite for local runs / tests).

Owner keys:
- profiles.user_id and every *_profiles.user_id -> users.user_id
- jobs.employer_id -> users.user_id
- applications.candidate_id -> users.user_id, applications.job_id -> jobs.job_id
"""

from sqlalchemy import (
    MetaData, Table, Column, Integer, String, Text, Boolean, Float, Date, DateTime,
    ForeignKey, UniqueConstraint, func
)

metadata = MetaData()


def _created_at() -> Column:
    return Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp())


def _updated_at() -> Column:
    return Column("updated_at", DateTime, nullable=False, server_default=func.current_timestamp())


def _user_fk(name: str = "user_id", **kwargs) -> Column:
    return Column(name, Integer, ForeignKey("users.user_id", ondelete="CASCADE"), **kwargs)


# ============================================================
# USERS & PROFILES
# ============================================================

users = Table(
    "users", metadata,
    Column("user_id", Integer, primary_key=True, autoincrement=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=False),
    Column("role", String(20), nullable=False),
    Column("is_active", Boolean, nullable=False, server_default="1"),
    _created_at(),
)

profiles = Table(
    "profiles", metadata,
    _user_fk(primary_key=True),
    Column("full_name", String(150)),
    Column("email", String(255)),
    Column("phone", String(30)),
    Column("avatar_url", Text),
    Column("bio", Text),
    Column("location", String(150)),
    Column("linkedin_url", Text),
    Column("website_url", Text),
    Column("social_links", Text),
    _updated_at(),
)

candidate_profiles = Table(
    "candidate_profiles", metadata,
    _user_fk(primary_key=True),
    Column("headline", String(200)),
    Column("summary", Text),
    Column("skills", Text),
    Column("experience_years", Integer),
    Column("current_company", String(200)),
    Column("expected_salary", String(50)),
    Column("resume_url", Text),
    _updated_at(),
)

employer_profiles = Table(
    "employer_profiles", metadata,
    _user_fk(primary_key=True),
    Column("company_name", String(200)),
    Column("industry", String(100)),
    Column("company_size", String(30)),
    Column("company_website", Text),
    Column("description", Text),
    Column("is_verified", Boolean, nullable=False, server_default="0"),
    _updated_at(),
)

student_profiles = Table(
    "student_profiles", metadata,
    _user_fk(primary_key=True),
    Column("roll_number", String(30)),
    Column("department", String(100)),
    Column("year", String(20)),
    Column("semester", String(20)),
    Column("cgpa", Float),
    Column("interests", Text),
    _updated_at(),
)

faculty_profiles = Table(
    "faculty_profiles", metadata,
    _user_fk(primary_key=True),
    Column("employee_id", String(30)),
    Column("department", String(100)),
    Column("designation", String(100)),
    Column("specialization", String(150)),
    _updated_at(),
)


# ============================================================
# JOBS, APPLICATIONS, SAVED JOBS, BGV
# ============================================================

jobs = Table(
    "jobs", metadata,
    Column("job_id", Integer, primary_key=True, autoincrement=True),
    _user_fk("employer_id", nullable=False),
    Column("title", String(200), nullable=False),
    Column("company", String(200), nullable=False),
    Column("description", Text),
    Column("location", String(150)),
    Column("job_type", String(30), nullable=False),
    Column("salary", String(100)),
    Column("min_salary", Float),
    Column("max_salary", Float),
    Column("skills", Text),
    Column("status", String(20), nullable=False, server_default="active"),
    Column("views", Integer, nullable=False, server_default="0"),
    _created_at(),
    _updated_at(),
)

applications = Table(
    "applications", metadata,
    Column("application_id", Integer, primary_key=True, autoincrement=True),
    Column("job_id", Integer, ForeignKey("jobs.job_id", ondelete="CASCADE"), nullable=False),
    _user_fk("candidate_id", nullable=False),
    Column("cover_letter", Text),
    Column("status", String(30), nullable=False, server_default="applied"),
    Column("notes", Text),
    _created_at(),
    _updated_at(),
    UniqueConstraint("job_id", "candidate_id", name="uq_application_job_candidate"),
)

saved_jobs = Table(
    "saved_jobs", metadata,
    _user_fk("candidate_id", nullable=False),
    Column("job_id", Integer, ForeignKey("jobs.job_id", ondelete="CASCADE"), nullable=False),
    _created_at(),
    UniqueConstraint("candidate_id", "job_id", name="uq_saved_job"),
)

bgv_documents = Table(
    "bgv_documents", metadata,
    Column("document_id", Integer, primary_key=True, autoincrement=True),
    _user_fk("candidate_id", nullable=False),
    Column("document_type", String(100), nullable=False),
    Column("status", String(20), nullable=False, server_default="not_uploaded"),
    Column("file_url", Text),
    Column("uploaded_at", DateTime),
    Column("reviewed_by", Integer),
    Column("review_comment", Text),
    UniqueConstraint("candidate_id", "document_type", name="uq_bgv_candidate_type"),
)


# ============================================================
# CAMPUS
# ============================================================

announcements = Table(
    "announcements", metadata,
    Column("announcement_id", Integer, primary_key=True, autoincrement=True),
    _user_fk("author_id", nullable=False),
    Column("title", String(200), nullable=False),
    Column("content", Text, nullable=False),
    Column("department", String(100), nullable=False, server_default="All"),
    Column("priority", String(10), nullable=False, server_default="medium"),
    _created_at(),
)

announcement_reads = Table(
    "announcement_reads", metadata,
    Column("announcement_id", Integer, ForeignKey("announcements.announcement_id", ondelete="CASCADE"), nullable=False),
    _user_fk(nullable=False),
    UniqueConstraint("announcement_id", "user_id", name="uq_announcement_read"),
)

announcement_reactions = Table(
    "announcement_reactions", metadata,
    Column("announcement_id", Integer, ForeignKey("announcements.announcement_id", ondelete="CASCADE"), nullable=False),
    _user_fk(nullable=False),
    Column("reaction", String(20), nullable=False),
    UniqueConstraint("announcement_id", "user_id", "reaction", name="uq_announcement_reaction"),
)

student_groups = Table(
    "student_groups", metadata,
    Column("group_id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(150), nullable=False, unique=True),
    Column("description", Text),
    Column("category", String(50), nullable=False, server_default="Technical"),
    _user_fk("created_by", nullable=False),
    Column("status", String(20), nullable=False, server_default="active"),
    _created_at(),
)

group_members = Table(
    "group_members", metadata,
    Column("group_id", Integer, ForeignKey("student_groups.group_id", ondelete="CASCADE"), nullable=False),
    _user_fk(nullable=False),
    Column("member_role", String(20), nullable=False, server_default="member"),
    Column("status", String(20), nullable=False, server_default="pending"),
    UniqueConstraint("group_id", "user_id", name="uq_group_member"),
)

group_posts = Table(
    "group_posts", metadata,
    Column("post_id", Integer, primary_key=True, autoincrement=True),
    Column("group_id", Integer, ForeignKey("student_groups.group_id", ondelete="CASCADE"), nullable=False),
    _user_fk("author_id", nullable=False),
    Column("content", Text, nullable=False),
    Column("link", Text),
    _created_at(),
)

leave_applications = Table(
    "leave_applications", metadata,
    Column("leave_id", Integer, primary_key=True, autoincrement=True),
    _user_fk("student_id", nullable=False),
    Column("leave_type", String(30), nullable=False),
    Column("start_date", Date, nullable=False),
    Column("end_date", Date, nullable=False),
    Column("days", Integer, nullable=False),
    Column("reason", Text, nullable=False),
    Column("status", String(20), nullable=False, server_default="pending"),
    Column("reviewed_by", Integer),
    Column("review_date", DateTime),
    Column("comments", Text),
    Column("applied_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)

feedbacks = Table(
    "feedbacks", metadata,
    Column("feedback_id", Integer, primary_key=True, autoincrement=True),
    _user_fk("student_id", nullable=False),
    _user_fk("faculty_id", nullable=False),
    Column("course_code", String(20), nullable=False),
    Column("course_name", String(150)),
    Column("rating", Integer, nullable=False),
    Column("feedback", Text),
    Column("is_anonymous", Boolean, nullable=False, server_default="0"),
    Column("category", String(50), nullable=False, server_default="Course Feedback"),
    _created_at(),
)

achievements = Table(
    "achievements", metadata,
    Column("achievement_id", Integer, primary_key=True, autoincrement=True),
    _user_fk("student_id", nullable=False),
    Column("title", String(200), nullable=False),
    Column("description", Text, nullable=False),
    Column("category", String(50), nullable=False),
    Column("toxicity_score", Float, nullable=False, server_default="0"),
    Column("status", String(20), nullable=False, server_default="pending"),
    Column("likes", Integer, nullable=False, server_default="0"),
    _created_at(),
)


# ============================================================
# COMPLIANCE
# ============================================================

audit_logs = Table(
    "audit_logs", metadata,
    Column("log_id", Integer, primary_key=True, autoincrement=True),
    Column("actor_id", Integer),
    Column("actor_email", String(255)),
    Column("action", String(100), nullable=False),
    Column("target", String(255)),
    Column("status", String(20), nullable=False, server_default="success"),
    Column("ip_address", String(64)),
    _created_at(),
)

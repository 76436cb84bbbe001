#!/usr/bin/env python3
"""
Demo Data Seeder

Creates one account per role plus a few jobs and campus records so the
API can be explored right away. Safe to re-run: existing accounts are kept.

All demo accounts use the password "password123".
Run: python scripts/seed_demo_data.py
"""
from sqlalchemy import text

from jobportal.core.auth import hash_password
from jobportal.db.database import get_db_session, init_db, fetch_one
from jobportal.services.bgv_service import create_default_documents
from jobportal.services.profile_service import create_empty_profile, update_full_profile, join_list

DEMO_PASSWORD = "password123"

DEMO_USERS = [
    ("candidate@demo.io", "candidate", "Rahul Sharma",
     {"headline": "Frontend Developer", "skills": ["React", "JavaScript", "Node.js"], "experience_years": 2}),
    ("employer@demo.io", "employer", "Meera Iyer",
     {"company_name": "TechCorp", "industry": "Software", "company_size": "201-500"}),
    ("student@demo.io", "student", "Arjun Patel",
     {"roll_number": "CS2021001", "department": "Computer Science", "year": "3rd Year", "cgpa": 8.7}),
    ("faculty@demo.io", "faculty", "Dr. Kavita Rao",
     {"employee_id": "FAC-101", "department": "Computer Science", "designation": "Professor"}),
    ("admin@demo.io", "admin", "Platform Admin", {}),
    ("superadmin@demo.io", "superadmin", "Super Admin", {}),
]

DEMO_JOBS = [
    ("Senior Frontend Developer", "Bangalore", "full-time", "₹18L - ₹25L", 1800000, 2500000,
     ["React", "TypeScript", "CSS"],
     "Build and maintain the customer dashboard used by thousands of recruiters every day."),
    ("Backend Engineer Intern", "Remote", "internship", "₹40K / month", 40000, 40000,
     ["Python", "SQL", "Docker"],
     "Work with the platform team on APIs, data pipelines and deployment tooling."),
]


def ensure_user(email: str, role: str, full_name: str, details: dict) -> int:
    existing = fetch_one("SELECT user_id FROM users WHERE email = :email", {"email": email})
    if existing:
        print(f"    = {email} already exists")
        return existing["user_id"]

    with get_db_session() as db:
        result = db.execute(
            text("""
                INSERT INTO users (email, password_hash, role, is_active)
                VALUES (:email, :password_hash, :role, :is_active)
                RETURNING user_id
            """),
            {"email": email, "password_hash": hash_password(DEMO_PASSWORD), "role": role, "is_active": True}
        )
        user_id = result.fetchone()[0]
        create_empty_profile(db, user_id, role, email, full_name)
        if role == "candidate":
            create_default_documents(db, user_id)

    if details:
        update_full_profile(user_id, role, details)
    print(f"    + {email} ({role}) -> user_id {user_id}")
    return user_id


def seed_jobs(employer_id: int) -> None:
    with get_db_session() as db:
        for title, location, job_type, salary, min_salary, max_salary, skills, description in DEMO_JOBS:
            exists = db.execute(
                text("SELECT job_id FROM jobs WHERE employer_id = :eid AND title = :title"),
                {"eid": employer_id, "title": title}
            ).fetchone()
            if exists:
                continue
            db.execute(
                text("""
                    INSERT INTO jobs (employer_id, title, company, description, location, job_type,
                        salary, min_salary, max_salary, skills, status, views)
                    VALUES (:eid, :title, 'TechCorp', :description, :location, :job_type,
                        :salary, :min_salary, :max_salary, :skills, 'active', 0)
                """),
                {
                    "eid": employer_id, "title": title, "description": description, "location": location,
                    "job_type": job_type, "salary": salary, "min_salary": min_salary,
                    "max_salary": max_salary, "skills": join_list(skills)
                }
            )
            print(f"    + job '{title}'")


def seed_campus(faculty_id: int, student_id: int) -> None:
    with get_db_session() as db:
        if not db.execute(text("SELECT announcement_id FROM announcements")).fetchone():
            db.execute(
                text("""
                    INSERT INTO announcements (author_id, title, content, department, priority)
                    VALUES (:fid, 'Placement Drive - TechCorp',
                        'TechCorp is visiting campus next week. Register on the portal by Friday.',
                        'All', 'high')
                """),
                {"fid": faculty_id}
            )
            print("    + announcement")

        group = db.execute(
            text("SELECT group_id FROM student_groups WHERE name = 'AI/ML Study Circle'")
        ).fetchone()
        if not group:
            result = db.execute(
                text("""
                    INSERT INTO student_groups (name, description, category, created_by, status)
                    VALUES ('AI/ML Study Circle', 'Weekly paper reading and project demos', 'Technical', :sid, 'active')
                    RETURNING group_id
                """),
                {"sid": student_id}
            )
            group_id = result.fetchone()[0]
            db.execute(
                text("""
                    INSERT INTO group_members (group_id, user_id, member_role, status)
                    VALUES (:gid, :sid, 'owner', 'approved'), (:gid, :fid, 'mentor', 'approved')
                """),
                {"gid": group_id, "sid": student_id, "fid": faculty_id}
            )
            print("    + group 'AI/ML Study Circle'")


def main():
    print("=" * 50)
    print("CAMPUS JOB PORTAL - DEMO DATA")
    print("=" * 50)

    print("\n[1] Creating tables...")
    init_db()

    print("\n[2] Accounts...")
    ids = {role: ensure_user(email, role, name, details) for email, role, name, details in DEMO_USERS}

    print("\n[3] Jobs...")
    seed_jobs(ids["employer"])

    print("\n[4] Campus...")
    seed_campus(ids["faculty"], ids["student"])

    print("\n" + "=" * 50)
    print(f"Done. Log in with any demo account, password: {DEMO_PASSWORD}")
    print("=" * 50)


if __name__ == "__main__":
    main()

"""Shared fixtures: in-memory SQLite, mongomock and an API client"""
import os

# Must be set before jobportal reads its settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AI_MODE"] = "mock"
os.environ["AI_SIMULATED_DELAY_MS"] = "0"
os.environ["JWT_SECRET_KEY"] = "test-secret"

import mongomock
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text

from jobportal.core.auth import hash_password
from jobportal.db.database import engine, get_db_session
from jobportal.db.mongodb import set_mongo_client
from jobportal.db.schema import metadata
from jobportal.main import app
from jobportal.services.profile_service import create_empty_profile

PASSWORD = "password123"


@pytest.fixture(autouse=True)
def fresh_stores():
    """Every test gets empty tables and an empty MongoDB"""
    metadata.create_all(bind=engine)
    set_mongo_client(mongomock.MongoClient())
    yield
    metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    return TestClient(app)


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    """Register a self-service account, returns (user_id, headers)"""
    def _register(email, role="candidate", full_name="Test User", password=PASSWORD):
        response = client.post("/api/auth/register", json={
            "email": email, "password": password, "role": role, "full_name": full_name
        })
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user_id"], auth_headers(body["access_token"])
    return _register


@pytest.fixture
def create_staff(client):
    """Admin accounts can't self-register; insert one and log in"""
    def _create(email, role="admin", full_name="Staff User"):
        with get_db_session() as db:
            result = db.execute(
                text("""
                    INSERT INTO users (email, password_hash, role, is_active)
                    VALUES (:email, :hash, :role, :active)
                    RETURNING user_id
                """),
                {"email": email, "hash": hash_password(PASSWORD), "role": role, "active": True}
            )
            user_id = result.fetchone()[0]
            create_empty_profile(db, user_id, role, email, full_name)

        response = client.post("/api/auth/login", json={"email": email, "password": PASSWORD})
        assert response.status_code == 200, response.text
        return user_id, auth_headers(response.json()["access_token"])
    return _create


@pytest.fixture
def employer(register, client):
    """Employer with a company name on the profile"""
    user_id, headers = register("hr@acme.io", role="employer", full_name="Hiring Manager")
    response = client.put("/api/profiles/me", json={"company_name": "Acme Corp"}, headers=headers)
    assert response.status_code == 200, response.text
    return user_id, headers


@pytest.fixture
def candidate(register):
    return register("rahul@college.edu", role="candidate", full_name="Rahul Sharma")


@pytest.fixture
def post_job(client):
    def _post(headers, **overrides):
        payload = {
            "title": "Frontend Developer",
            "description": "Build user interfaces for our hiring products with React and TypeScript.",
            "location": "Bangalore",
            "job_type": "full-time",
            "salary": "₹10L - ₹15L",
            "min_salary": 1000000,
            "max_salary": 1500000,
            "skills": ["React", "TypeScript", "CSS"],
        }
        payload.update(overrides)
        response = client.post("/api/jobs", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()
    return _post

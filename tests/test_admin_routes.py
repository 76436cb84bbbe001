"""Tests for admin moderation and super-admin controls"""
import pytest

from conftest import PASSWORD


@pytest.fixture
def admin(create_staff):
    return create_staff("admin@college.edu", role="admin", full_name="Platform Admin")


@pytest.fixture
def superadmin(create_staff):
    return create_staff("root@college.edu", role="superadmin", full_name="Super Admin")


class TestUserModeration:

    def test_list_users_with_filters(self, client, admin, candidate, employer):
        _, headers = admin
        assert len(client.get("/api/admin/users", headers=headers).json()) == 3

        employers = client.get("/api/admin/users", params={"role": "employer"}, headers=headers).json()
        assert [u["email"] for u in employers] == ["hr@acme.io"]

        found = client.get("/api/admin/users", params={"search": "rahul"}, headers=headers).json()
        assert [u["full_name"] for u in found] == ["Rahul Sharma"]

    def test_search_wildcards_are_literal(self, client, admin, candidate, register):
        register("dev_ops@college.edu", full_name="Dev Ops")
        found = client.get("/api/admin/users", params={"search": "_"}, headers=admin[1]).json()
        assert [u["email"] for u in found] == ["dev_ops@college.edu"]
        assert client.get("/api/admin/users", params={"search": "%"}, headers=admin[1]).json() == []

    def test_non_admins_blocked(self, client, candidate):
        assert client.get("/api/admin/users", headers=candidate[1]).status_code == 403

    def test_deactivate_blocks_login_and_tokens(self, client, admin, candidate):
        candidate_id, candidate_headers = candidate
        response = client.put(f"/api/admin/users/{candidate_id}/status", json={"is_active": False}, headers=admin[1])
        assert response.status_code == 200
        assert response.json()["is_active"] is False

        assert client.get("/api/auth/me", headers=candidate_headers).status_code == 403
        login = client.post("/api/auth/login", json={"email": "rahul@college.edu", "password": PASSWORD})
        assert login.status_code == 403

    def test_admin_cannot_touch_self_or_superadmin(self, client, admin, superadmin):
        admin_id, headers = admin
        superadmin_id, _ = superadmin
        assert client.put(f"/api/admin/users/{admin_id}/status", json={"is_active": False},
                          headers=headers).status_code == 400
        assert client.put(f"/api/admin/users/{superadmin_id}/status", json={"is_active": False},
                          headers=headers).status_code == 403

    def test_verify_employer(self, client, admin, employer, candidate):
        employer_id, employer_headers = employer
        response = client.put(f"/api/admin/employers/{employer_id}/verify", headers=admin[1])
        assert response.status_code == 200
        assert client.get("/api/profiles/me", headers=employer_headers).json()["is_verified"] in (True, 1)

        assert client.put(f"/api/admin/employers/{candidate[0]}/verify", headers=admin[1]).status_code == 404


class TestJobModeration:

    def test_close_any_job(self, client, admin, employer, post_job):
        job = post_job(employer[1])
        response = client.put(f"/api/admin/jobs/{job['job_id']}/close", headers=admin[1])
        assert response.status_code == 200
        assert response.json()["status"] == "closed"

        closed = client.get("/api/admin/jobs", params={"status": "closed"}, headers=admin[1]).json()
        assert [j["job_id"] for j in closed] == [job["job_id"]]
        assert client.put("/api/admin/jobs/999/close", headers=admin[1]).status_code == 404

    def test_platform_stats(self, client, admin, employer, candidate, post_job):
        job = post_job(employer[1])
        client.post(f"/api/jobs/{job['job_id']}/apply", json={}, headers=candidate[1])

        stats = client.get("/api/admin/stats", headers=admin[1]).json()
        assert stats["total_users"] == 3
        assert stats["users_by_role"] == {"admin": 1, "employer": 1, "candidate": 1}
        assert stats["total_jobs"] == 1
        assert stats["active_jobs"] == 1
        assert stats["total_applications"] == 1
        assert stats["pending_bgv_documents"] == 0


class TestSuperAdmin:

    def test_change_role_is_audited(self, client, superadmin, register):
        user_id, headers = register("switch@college.edu", role="student")
        response = client.put(f"/api/admin/users/{user_id}/role", json={"role": "candidate"}, headers=superadmin[1])
        assert response.status_code == 200
        assert response.json()["role"] == "candidate"

        # New candidates get their BGV checklist
        assert len(client.get("/api/bgv/documents", headers=headers).json()) == 5

        logs = client.get("/api/admin/audit-logs", params={"action": "Change Role"}, headers=superadmin[1]).json()
        assert logs[0]["target"] == "switch@college.edu:student->candidate"

    def test_admin_cannot_change_roles_or_read_audit(self, client, admin, candidate):
        assert client.put(f"/api/admin/users/{candidate[0]}/role", json={"role": "admin"},
                          headers=admin[1]).status_code == 403
        assert client.get("/api/admin/audit-logs", headers=admin[1]).status_code == 403

    def test_cannot_change_own_role(self, client, superadmin):
        user_id, headers = superadmin
        assert client.put(f"/api/admin/users/{user_id}/role", json={"role": "admin"},
                          headers=headers).status_code == 400

    def test_audit_log_lists_logins(self, client, superadmin):
        logs = client.get("/api/admin/audit-logs", headers=superadmin[1]).json()
        assert logs[0]["action"] == "User Login"
        assert logs[0]["actor_email"] == "root@college.edu"

"""Tests for the merged base + role profile"""
import pytest
from sqlalchemy import text

from jobportal.db.database import get_db_session
from jobportal.services.profile_service import (
    get_full_profile, update_full_profile, split_profile_data, specific_table_for,
    profile_completion, split_list, join_list, ROLE_TABLE_MAP
)


class TestRoleRouting:

    def test_every_role_has_a_table(self):
        assert set(ROLE_TABLE_MAP) == {"student", "faculty", "candidate", "employer", "admin", "superadmin"}

    def test_admin_roles_are_base_only(self):
        assert specific_table_for("admin") is None
        assert specific_table_for("superadmin") is None
        assert specific_table_for("Candidate") == "candidate_profiles"
        assert specific_table_for(None) is None

    def test_split_routes_keys(self):
        base, specific = split_profile_data("student", {
            "full_name": "Arjun", "department": "CSE", "interests": ["AI", "Robotics"]
        })
        assert base == {"full_name": "Arjun"}
        assert specific == {"department": "CSE", "interests": "AI,Robotics"}

    def test_split_rejects_unknown_keys(self):
        with pytest.raises(ValueError, match="company_name"):
            split_profile_data("student", {"company_name": "Acme"})

    def test_admin_cannot_write_role_fields(self):
        with pytest.raises(ValueError):
            split_profile_data("admin", {"skills": ["Python"]})

    def test_split_rejects_wrong_shapes(self):
        with pytest.raises(ValueError, match="skills"):
            split_profile_data("candidate", {"skills": 5})
        with pytest.raises(ValueError, match="full_name"):
            split_profile_data("candidate", {"full_name": {"first": "Rahul"}})
        with pytest.raises(ValueError, match="headline"):
            split_profile_data("candidate", {"headline": ["Frontend", "Developer"]})
        with pytest.raises(ValueError, match="social_links"):
            split_profile_data("candidate", {"social_links": ["https://github.com/rahul"]})

    def test_social_links_stored_as_json(self):
        base, _ = split_profile_data("employer", {
            "social_links": {"github": "https://github.com/acme", "twitter": ""}
        })
        assert base == {"social_links": '{"github": "https://github.com/acme"}'}

    def test_list_helpers(self):
        assert split_list(" React, ,Node.js ") == ["React", "Node.js"]
        assert split_list(None) == []
        assert join_list(["React", " CSS "]) == "React,CSS"
        assert join_list(None) is None


class TestProfilePersistence:

    def test_merge_after_update(self, register):
        user_id, _ = register("arjun@college.edu", role="student", full_name="Arjun Patel")

        update_full_profile(user_id, "student", {
            "phone": "9876543210", "department": "Computer Science", "cgpa": 8.7,
            "interests": ["AI", "Web"]
        })
        profile = get_full_profile(user_id, "student")

        assert profile["full_name"] == "Arjun Patel"
        assert profile["email"] == "arjun@college.edu"
        assert profile["phone"] == "9876543210"
        assert profile["department"] == "Computer Science"
        assert profile["cgpa"] == 8.7
        assert profile["interests"] == ["AI", "Web"]

    def test_update_returns_written_fields(self, register):
        user_id, _ = register("dev@college.edu", role="candidate")
        result = update_full_profile(user_id, "candidate", {"bio": "Builder", "skills": "Python, SQL"})

        assert result["bio"] == "Builder"
        assert result["skills"] == ["Python", "SQL"]
        assert "updated_at" in result

    def test_missing_extension_row_is_recreated(self, register):
        user_id, _ = register("late@college.edu", role="faculty")
        with get_db_session() as db:
            db.execute(text("DELETE FROM faculty_profiles WHERE user_id = :id"), {"id": user_id})

        assert "designation" not in get_full_profile(user_id, "faculty")
        update_full_profile(user_id, "faculty", {"designation": "Professor"})
        assert get_full_profile(user_id, "faculty")["designation"] == "Professor"

    def test_unknown_user(self):
        with pytest.raises(LookupError):
            get_full_profile(999, "candidate")
        with pytest.raises(LookupError):
            update_full_profile(999, "candidate", {"bio": "x"})


class TestProfileCompletion:

    def test_counts_filled_fields(self):
        profile = {"full_name": "A", "phone": "1", "roll_number": "", "department": "CSE", "year": None, "cgpa": 9.1}
        assert profile_completion("student", profile) == 67

    def test_empty_list_is_not_filled(self):
        assert profile_completion("candidate", {"skills": []}) == 0


class TestSocialLinks:

    def test_round_trip_and_base_only_roles(self, create_staff):
        user_id, _ = create_staff("admin@college.edu")
        assert get_full_profile(user_id, "admin")["social_links"] == {}

        result = update_full_profile(user_id, "admin", {"social_links": {"linkedin": "https://linkedin.com/in/admin"}})
        assert result["social_links"] == {"linkedin": "https://linkedin.com/in/admin"}
        assert get_full_profile(user_id, "admin")["social_links"] == {"linkedin": "https://linkedin.com/in/admin"}

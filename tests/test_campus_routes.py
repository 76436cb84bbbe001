"""Tests for announcements, groups, leaves, feedback and achievements"""
import pytest


@pytest.fixture
def student(register):
    return register("arjun@college.edu", role="student", full_name="Arjun Patel")


@pytest.fixture
def faculty(register):
    return register("kavita@college.edu", role="faculty", full_name="Dr. Kavita Rao")


class TestAnnouncements:

    def _post(self, client, headers, **overrides):
        payload = {"title": "Placement Drive", "content": "TechCorp visits next week", "priority": "high"}
        payload.update(overrides)
        response = client.post("/api/campus/announcements", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    def test_only_staff_can_post(self, client, student, faculty):
        response = client.post("/api/campus/announcements", json={"title": "Hello all", "content": "x"},
                               headers=student[1])
        assert response.status_code == 403

        body = self._post(client, faculty[1])
        assert body["author_name"] == "Dr. Kavita Rao"
        assert body["author_role"] == "faculty"
        assert body["department"] == "All"

    def test_department_filter_includes_all(self, client, student, faculty):
        self._post(client, faculty[1], title="Campus wide notice")
        self._post(client, faculty[1], title="CSE lab closed", department="Computer Science")
        self._post(client, faculty[1], title="Mech workshop", department="Mechanical")

        titles = [a["title"] for a in client.get(
            "/api/campus/announcements", params={"department": "Computer Science"}, headers=student[1]
        ).json()]
        assert sorted(titles) == ["CSE lab closed", "Campus wide notice"]
        assert len(client.get("/api/campus/announcements", headers=student[1]).json()) == 3

    def test_reactions_toggle(self, client, student, faculty):
        announcement = self._post(client, faculty[1])
        url = f"/api/campus/announcements/{announcement['announcement_id']}/react"

        body = client.post(url, json={"reaction": "celebrate"}, headers=student[1]).json()
        assert body["reactions"] == {"celebrate": 1}
        body = client.post(url, json={"reaction": "like"}, headers=faculty[1]).json()
        assert body["reactions"] == {"celebrate": 1, "like": 1}
        body = client.post(url, json={"reaction": "celebrate"}, headers=student[1]).json()
        assert body["reactions"] == {"like": 1}

    def test_mark_read_is_idempotent(self, client, student, faculty):
        announcement = self._post(client, faculty[1])
        url = f"/api/campus/announcements/{announcement['announcement_id']}/read"

        client.post(url, headers=student[1])
        body = client.post(url, headers=student[1]).json()
        assert body["is_read"] is True
        assert body["read_count"] == 1

        listed = client.get("/api/campus/announcements", headers=faculty[1]).json()[0]
        assert listed["is_read"] is False

    def test_missing_announcement(self, client, student):
        assert client.post("/api/campus/announcements/99/read", headers=student[1]).status_code == 404


class TestGroups:

    def _create(self, client, headers, name="AI/ML Study Circle"):
        response = client.post("/api/campus/groups", json={"name": name, "description": "Papers"}, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    def test_join_request_and_approval(self, client, register, student):
        group = self._create(client, student[1])
        assert group["member_count"] == 1
        assert group["my_status"] == "approved"

        joiner_id, joiner = register("priya@college.edu", role="student", full_name="Priya Singh")
        body = client.post(f"/api/campus/groups/{group['group_id']}/join", headers=joiner).json()
        assert body["my_status"] == "pending"
        assert body["pending_requests"] == 1

        # Pending members can't post yet
        response = client.post(f"/api/campus/groups/{group['group_id']}/posts", json={"content": "Hi"}, headers=joiner)
        assert response.status_code == 403

        decision = client.put(f"/api/campus/groups/{group['group_id']}/members/{joiner_id}",
                              json={"approve": True}, headers=student[1])
        assert decision.json()["status"] == "approved"

        response = client.post(f"/api/campus/groups/{group['group_id']}/posts", json={"content": "Hi all"}, headers=joiner)
        assert response.status_code == 201
        assert response.json()["author_name"] == "Priya Singh"
        posts = client.get(f"/api/campus/groups/{group['group_id']}/posts", headers=student[1]).json()
        assert [p["content"] for p in posts] == ["Hi all"]

    def test_faculty_join_as_mentor_and_can_decide(self, client, register, student, faculty):
        group = self._create(client, student[1])
        body = client.post(f"/api/campus/groups/{group['group_id']}/join", headers=faculty[1]).json()
        assert body["my_status"] == "approved"
        assert body["mentor_count"] == 1

        joiner_id, joiner = register("priya@college.edu", role="student")
        client.post(f"/api/campus/groups/{group['group_id']}/join", headers=joiner)
        decision = client.put(f"/api/campus/groups/{group['group_id']}/members/{joiner_id}",
                              json={"approve": False}, headers=faculty[1])
        assert decision.json()["status"] == "rejected"

        members = client.get(f"/api/campus/groups/{group['group_id']}/members", headers=student[1]).json()
        assert sorted((m["member_role"], m["status"]) for m in members) == [
            ("member", "rejected"), ("mentor", "approved"), ("owner", "approved")
        ]

        # Rejected students may ask again
        again = client.post(f"/api/campus/groups/{group['group_id']}/join", headers=joiner)
        assert again.json()["my_status"] == "pending"

    def test_regular_member_cannot_decide(self, client, register, student):
        group = self._create(client, student[1])
        member_id, member = register("m1@college.edu", role="student")
        client.post(f"/api/campus/groups/{group['group_id']}/join", headers=member)
        client.put(f"/api/campus/groups/{group['group_id']}/members/{member_id}", json={"approve": True},
                   headers=student[1])

        joiner_id, joiner = register("m2@college.edu", role="student")
        client.post(f"/api/campus/groups/{group['group_id']}/join", headers=joiner)
        response = client.put(f"/api/campus/groups/{group['group_id']}/members/{joiner_id}",
                              json={"approve": True}, headers=member)
        assert response.status_code == 403

    def test_duplicate_name_and_join(self, client, student):
        group = self._create(client, student[1])
        response = client.post("/api/campus/groups", json={"name": "ai/ml study circle"}, headers=student[1])
        assert response.status_code == 400
        response = client.post(f"/api/campus/groups/{group['group_id']}/join", headers=student[1])
        assert response.status_code == 400

    def test_candidates_cannot_create_groups(self, client, candidate):
        response = client.post("/api/campus/groups", json={"name": "Job seekers"}, headers=candidate[1])
        assert response.status_code == 403


class TestLeaves:

    def _apply(self, client, headers, **overrides):
        payload = {"leave_type": "Medical", "start_date": "2026-03-10", "end_date": "2026-03-12",
                   "reason": "Fever and rest"}
        payload.update(overrides)
        return client.post("/api/campus/leaves", json=payload, headers=headers)

    def test_days_are_inclusive(self, client, student):
        response = self._apply(client, student[1])
        assert response.status_code == 201
        body = response.json()
        assert body["days"] == 3
        assert body["status"] == "pending"
        assert body["start_date"] == "2026-03-10"

    def test_single_day_leave(self, client, student):
        assert self._apply(client, student[1], end_date="2026-03-10").json()["days"] == 1

    def test_end_before_start_rejected(self, client, student):
        assert self._apply(client, student[1], end_date="2026-03-01").status_code == 422

    def test_review_only_pending(self, client, student, faculty):
        leave = self._apply(client, student[1]).json()
        url = f"/api/campus/leaves/{leave['leave_id']}/review"

        response = client.put(url, json={"status": "approved", "comments": "Get well soon"}, headers=faculty[1])
        assert response.status_code == 200
        assert response.json()["status"] == "approved"
        assert response.json()["comments"] == "Get well soon"
        assert response.json()["review_date"] is not None

        response = client.put(url, json={"status": "rejected"}, headers=faculty[1])
        assert response.status_code == 400

    def test_students_cannot_review(self, client, student):
        leave = self._apply(client, student[1]).json()
        response = client.put(f"/api/campus/leaves/{leave['leave_id']}/review", json={"status": "approved"},
                              headers=student[1])
        assert response.status_code == 403

    def test_listing_scope(self, client, register, student, faculty):
        self._apply(client, student[1])
        _, other = register("other@college.edu", role="student")
        self._apply(client, other)

        assert len(client.get("/api/campus/leaves", headers=student[1]).json()) == 1
        assert len(client.get("/api/campus/leaves", headers=faculty[1]).json()) == 2


class TestFeedback:

    def test_anonymous_name_hidden_and_average(self, client, student, faculty, register):
        faculty_id, _ = faculty
        _, other = register("open@college.edu", role="student", full_name="Open Student")

        client.post("/api/campus/feedback", json={
            "faculty_id": faculty_id, "course_code": "CS301", "rating": 5, "is_anonymous": True
        }, headers=student[1])
        client.post("/api/campus/feedback", json={
            "faculty_id": faculty_id, "course_code": "CS301", "rating": 4, "is_anonymous": False
        }, headers=other)

        summary = client.get("/api/campus/feedback/summary", headers=faculty[1]).json()
        assert summary["total"] == 2
        assert summary["average_rating"] == 4.5
        assert sorted(f["student_name"] for f in summary["feedbacks"]) == ["Anonymous", "Open Student"]

    def test_rating_range(self, client, student, faculty):
        response = client.post("/api/campus/feedback", json={
            "faculty_id": faculty[0], "course_code": "CS301", "rating": 6
        }, headers=student[1])
        assert response.status_code == 422

    def test_target_must_be_faculty(self, client, student, candidate):
        response = client.post("/api/campus/feedback", json={
            "faculty_id": candidate[0], "course_code": "CS301", "rating": 3
        }, headers=student[1])
        assert response.status_code == 404

    def test_empty_summary(self, client, faculty):
        summary = client.get("/api/campus/feedback/summary", headers=faculty[1]).json()
        assert summary["total"] == 0
        assert summary["average_rating"] is None


class TestAchievements:

    def test_toxic_submission_rejected(self, client, student):
        response = client.post("/api/campus/achievements", json={
            "title": "Hackathon final",
            "description": "Their terrible, awful and pathetic code lost"
        }, headers=student[1])
        assert response.status_code == 422

    def test_only_description_is_scored(self, client, student):
        response = client.post("/api/campus/achievements", json={
            "title": "Worst awful bug hunt",
            "description": "Fixed the terrible crash in the app"
        }, headers=student[1])
        assert response.status_code == 201
        assert response.json()["toxicity_score"] == pytest.approx(0.15)

    def test_improve_and_review_flow(self, client, student, create_staff):
        response = client.post("/api/campus/achievements", json={
            "title": "Hackathon",
            "description": "We won the national hackathon",
            "improve": True
        }, headers=student[1])
        assert response.status_code == 201
        achievement = response.json()
        assert achievement["description"] == "We achieved the national hackathon"
        assert achievement["status"] == "pending"

        # Not public until approved
        assert client.get("/api/campus/achievements", headers=student[1]).json() == []
        like_url = f"/api/campus/achievements/{achievement['achievement_id']}/like"
        assert client.post(like_url, headers=student[1]).status_code == 404

        _, admin = create_staff("admin@college.edu")
        pending = client.get("/api/campus/achievements/pending", headers=admin).json()
        assert [a["achievement_id"] for a in pending] == [achievement["achievement_id"]]

        client.put(f"/api/campus/achievements/{achievement['achievement_id']}/review",
                   json={"status": "approved"}, headers=admin)
        assert client.post(like_url, headers=student[1]).json()["likes"] == 1

        public = client.get("/api/campus/achievements", headers=student[1]).json()
        assert [a["title"] for a in public] == ["Hackathon"]
        assert len(client.get("/api/campus/achievements/mine", headers=student[1]).json()) == 1

    def test_students_cannot_review(self, client, student):
        response = client.post("/api/campus/achievements", json={
            "title": "Paper accepted", "description": "Published at a workshop"
        }, headers=student[1])
        review = client.put(f"/api/campus/achievements/{response.json()['achievement_id']}/review",
                            json={"status": "approved"}, headers=student[1])
        assert review.status_code == 403

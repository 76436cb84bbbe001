"""Tests for the AI endpoints"""
from unittest.mock import MagicMock

import pytest

from jobportal.core.config import get_settings
from jobportal.services import ai_client


class TestChat:

    def test_mock_chat(self, client, candidate):
        response = client.post("/api/ai/chat", json={"message": "Any interview tips?"}, headers=candidate[1])
        assert response.status_code == 200
        assert response.json()["source"] == "mock"
        assert "DSA" in response.json()["reply"]

    def test_requires_login(self, client):
        assert client.post("/api/ai/chat", json={"message": "hello"}).status_code in (401, 403)

    def test_llm_mode_uses_client(self, client, candidate, monkeypatch):
        settings = get_settings()
        monkeypatch.setattr(settings, "ai_mode", "llm")
        monkeypatch.setattr(settings, "ai_api_key", "sk-test")

        fake_openai = MagicMock()
        fake_openai.chat.completions.create.return_value.choices = [
            MagicMock(message=MagicMock(content=" Practise system design. "))
        ]
        monkeypatch.setattr(ai_client, "_chat_client", ai_client.CareerChatClient(client=fake_openai))

        body = client.post("/api/ai/chat", json={"message": "How to prepare?"}, headers=candidate[1]).json()
        assert body == {"reply": "Practise system design.", "source": "llm"}

    def test_llm_failure_falls_back_to_mock(self, client, candidate, monkeypatch):
        settings = get_settings()
        monkeypatch.setattr(settings, "ai_mode", "llm")
        monkeypatch.setattr(settings, "ai_api_key", "sk-test")

        fake_openai = MagicMock()
        fake_openai.chat.completions.create.side_effect = RuntimeError("endpoint down")
        monkeypatch.setattr(ai_client, "_chat_client", ai_client.CareerChatClient(client=fake_openai))

        body = client.post("/api/ai/chat", json={"message": "salary?"}, headers=candidate[1]).json()
        assert body["source"] == "mock"
        assert "₹10L" in body["reply"]


class TestTextTools:

    def test_moderate(self, client, candidate):
        body = client.post("/api/ai/moderate", json={"text": "I hate this"}, headers=candidate[1]).json()
        assert body["flagged_words"] == ["hate"]
        assert body["is_safe"] is False
        assert body["improved_text"] == "[Suggested Revision]: I disagree with this"

    def test_enhance(self, client, candidate):
        body = client.post("/api/ai/enhance", json={"text": "hi"}, headers=candidate[1]).json()
        assert body == {"original": "hi", "suggestion": None}

    def test_toxicity_and_improve(self, client, candidate):
        body = client.post("/api/ai/toxicity", json={"text": "worst, terrible, awful"}, headers=candidate[1]).json()
        assert body["is_acceptable"] is False
        assert body["toxicity_score"] == pytest.approx(0.45)

        body = client.post("/api/ai/improve-achievement", json={"text": "I made a nice app"},
                           headers=candidate[1]).json()
        assert body["improved_text"] == "I developed a outstanding app"

    def test_job_authenticity(self, client, candidate):
        body = client.post("/api/ai/job-authenticity", json={
            "title": "Data entry", "company": "Acme", "salary": "₹20K",
            "description": "WhatsApp only. Easy money from home, start today with us."
        }, headers=candidate[1]).json()
        assert body["score"] == 40
        assert body["risk_level"] == "High"

    def test_feed_count(self, client, candidate):
        items = client.get("/api/ai/feed", params={"count": 3}, headers=candidate[1]).json()
        assert [i["id"] for i in items] == [1, 2, 3]
        assert client.get("/api/ai/feed", params={"count": 0}, headers=candidate[1]).status_code == 422


class TestResumeScore:

    def test_score_against_job_skills(self, client, employer, candidate, post_job):
        job = post_job(employer[1], skills=["React", "GraphQL"])
        body = client.post("/api/ai/resume-score", json={
            "resume_text": "React developer", "job_id": job["job_id"]
        }, headers=candidate[1]).json()
        assert body["keyword_match"] == 50
        assert body["missing_keywords"] == ["GraphQL"]

    def test_uses_uploaded_resume(self, client, candidate):
        files = {"file": ("resume.txt", b"Python and SQL developer", "text/plain")}
        assert client.post("/api/candidates/resume/upload", files=files, headers=candidate[1]).status_code == 200

        body = client.post("/api/ai/resume-score", json={"skills": ["Python", "Go"]}, headers=candidate[1]).json()
        assert body["matched_keywords"] == ["Python"]

    def test_no_resume_available(self, client, candidate):
        response = client.post("/api/ai/resume-score", json={"skills": ["Python"]}, headers=candidate[1])
        assert response.status_code == 404

    def test_unknown_job(self, client, candidate):
        response = client.post("/api/ai/resume-score", json={"resume_text": "x", "job_id": 42}, headers=candidate[1])
        assert response.status_code == 404

"""
AI Routes

POST /ai/chat                  - Career assistant (LLM when enabled, else canned answers)
POST /ai/moderate              - Toxicity check with suggested revision
POST /ai/enhance               - "Improve with AI" for free-text fields
POST /ai/job-authenticity      - Scam-risk score for a draft posting
POST /ai/toxicity              - Achievement toxicity score
POST /ai/improve-achievement   - Soften achievement wording
GET  /ai/feed                  - Mentorship / tech-news feed items
POST /ai/resume-score          - Keyword score of a resume against a job
"""

import asyncio
import random

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List

from jobportal.core.auth import get_current_user
from jobportal.core.config import get_settings
from jobportal.db.database import fetch_one
from jobportal.services.ai_client import answer_chat
from jobportal.services.ai_mock_service import (
    analyze_content, enhance_text, check_job_authenticity, calculate_toxicity_score,
    is_achievement_acceptable, improve_achievement_text, generate_feed_item, score_resume
)
from jobportal.services.mongo_service import RawResumeService
from jobportal.services.profile_service import split_list
from jobportal.schemas.schemas import (
    ChatRequest, ChatResponse, TextRequest, ContentAnalysisResponse, EnhanceResponse,
    JobAuthenticityRequest, JobAuthenticityResponse, ToxicityResponse, ImprovedTextResponse,
    ResumeScoreRequest, ResumeScoreResponse
)

router = APIRouter(prefix="/ai", tags=["AI"])
settings = get_settings()


async def _simulate_latency() -> None:
    """Demo deployments can make the mock answers feel like a real model."""
    if settings.ai_simulated_delay_ms > 0:
        await asyncio.sleep(settings.ai_simulated_delay_ms / 1000)


@router.post("/chat", response_model=ChatResponse)
async def chat(body: ChatRequest, user: dict = Depends(get_current_user)):
    await _simulate_latency()
    reply, source = answer_chat(body.message)
    return ChatResponse(reply=reply, source=source)


@router.post("/moderate", response_model=ContentAnalysisResponse)
async def moderate(body: TextRequest, user: dict = Depends(get_current_user)):
    await _simulate_latency()
    return ContentAnalysisResponse(**analyze_content(body.text))


@router.post("/enhance", response_model=EnhanceResponse)
async def enhance(body: TextRequest, user: dict = Depends(get_current_user)):
    await _simulate_latency()
    return EnhanceResponse(original=body.text, suggestion=enhance_text(body.text))


@router.post("/job-authenticity", response_model=JobAuthenticityResponse)
async def job_authenticity(body: JobAuthenticityRequest, user: dict = Depends(get_current_user)):
    await _simulate_latency()
    return JobAuthenticityResponse(**check_job_authenticity(body.model_dump()))


@router.post("/toxicity", response_model=ToxicityResponse)
async def toxicity(body: TextRequest, user: dict = Depends(get_current_user)):
    return ToxicityResponse(
        toxicity_score=calculate_toxicity_score(body.text),
        is_acceptable=is_achievement_acceptable(body.text)
    )


@router.post("/improve-achievement", response_model=ImprovedTextResponse)
async def improve_achievement(body: TextRequest, user: dict = Depends(get_current_user)):
    await _simulate_latency()
    return ImprovedTextResponse(improved_text=improve_achievement_text(body.text))


@router.get("/feed", response_model=List[dict])
async def feed(count: int = Query(5, ge=1, le=50), user: dict = Depends(get_current_user)):
    rng = random.Random()
    return [generate_feed_item(i + 1, rng) for i in range(count)]


@router.post("/resume-score", response_model=ResumeScoreResponse)
async def resume_score(body: ResumeScoreRequest, user: dict = Depends(get_current_user)):
    """
    Score a resume against a job.

    - resume_text omitted: the caller's latest uploaded resume is used
    - job_id given: that job's skills are the keywords, else body.skills
    """
    resume_text = body.resume_text
    if not resume_text:
        doc = RawResumeService().get_by_candidate(user["user_id"])
        if not doc:
            raise HTTPException(status_code=404, detail="No resume text given and no resume uploaded")
        resume_text = doc["resume_text"]

    skills = body.skills
    if body.job_id is not None:
        job = fetch_one("SELECT skills FROM jobs WHERE job_id = :jid", {"jid": body.job_id})
        if not job:
            raise HTTPException(status_code=404, detail="Job not found")
        skills = split_list(job["skills"])

    await _simulate_latency()
    return ResumeScoreResponse(**score_resume(resume_text, skills))

"""
Candidate Routes

GET  /candidates/dashboard      - Stats, recommended jobs, recent applications
POST /candidates/resume/upload  - Upload resume (PDF/DOCX/TXT), skills synced to profile
GET  /candidates/resume         - Latest uploaded resume info
GET  /candidates/resume/formats - Supported formats
"""

from fastapi import APIRouter, HTTPException, Depends, UploadFile, File

from jobportal.db.database import execute_raw_sql
from jobportal.core.auth import get_current_candidate
from jobportal.services.ai_mock_service import extract_skills
from jobportal.services.job_service import APPLICATION_SELECT, row_to_application, recommend_jobs
from jobportal.services.mongo_service import RawResumeService
from jobportal.services.profile_service import get_full_profile, update_full_profile, profile_completion
from jobportal.services.storage_service import get_storage_service
from jobportal.utils.file_upload import read_upload, extract_text, get_supported_formats, RESUME_EXTENSIONS
from jobportal.schemas.schemas import CandidateDashboardResponse, RecommendedJob, ResumeUploadResponse

router = APIRouter(prefix="/candidates", tags=["Candidates"])


@router.get("/dashboard", response_model=CandidateDashboardResponse)
async def get_dashboard(candidate: dict = Depends(get_current_candidate)):
    """Everything the candidate home page shows in one call."""
    profile = get_full_profile(candidate["user_id"], "candidate")

    applications = [
        row_to_application(r) for r in execute_raw_sql(
            APPLICATION_SELECT + " WHERE a.candidate_id = :cid ORDER BY a.created_at DESC, a.application_id DESC",
            {"cid": candidate["user_id"]}
        )
    ]
    saved = execute_raw_sql(
        "SELECT job_id FROM saved_jobs WHERE candidate_id = :cid ORDER BY created_at DESC, job_id DESC",
        {"cid": candidate["user_id"]}
    )

    def count(*statuses):
        return sum(1 for a in applications if a.status in statuses)

    stats = {
        "total_applications": len(applications),
        "under_review": count("under_review", "shortlisted"),
        "interviews": count("interview_scheduled"),
        "offers": count("accepted"),
        "rejected": count("rejected"),
        "saved_jobs": len(saved),
        "profile_completion": profile_completion("candidate", profile)
    }

    recommended = recommend_jobs(candidate["user_id"], profile.get("skills") or [])

    return CandidateDashboardResponse(
        stats=stats,
        recommended_jobs=[RecommendedJob(**r) for r in recommended],
        recent_applications=applications[:3],
        saved_jobs=[r["job_id"] for r in saved]
    )


@router.post("/resume/upload", response_model=ResumeUploadResponse)
async def upload_resume(
    file: UploadFile = File(..., description="Resume file (PDF, DOCX, or TXT)"),
    candidate: dict = Depends(get_current_candidate)
):
    """
    Upload a resume.

    Process:
    1. Extract text from file
    2. Store the file in the resumes bucket
    3. Spot known skills in the text
    4. Merge new skills into the profile and link the resume
    5. Keep the text in MongoDB for resume scoring
    """
    content, ext, content_type = await read_upload(file, RESUME_EXTENSIONS)
    resume_text = extract_text(content, ext)

    url = get_storage_service().upload_file(
        "resumes", f"{candidate['user_id']}/resume{ext}", content, content_type
    )

    extracted = extract_skills(resume_text)
    profile = get_full_profile(candidate["user_id"], "candidate")
    current = profile.get("skills") or []
    current_lower = {s.lower() for s in current}
    new_skills = [s for s in extracted if s.lower() not in current_lower]

    update_full_profile(candidate["user_id"], "candidate", {
        "resume_url": url,
        "skills": current + new_skills
    })

    RawResumeService().insert(
        candidate_id=candidate["user_id"], resume_text=resume_text,
        filename=file.filename, file_url=url, extracted_skills=extracted
    )

    return ResumeUploadResponse(
        success=True,
        message=f"Resume uploaded. {len(new_skills)} new skills added to profile.",
        filename=file.filename,
        resume_url=url,
        extracted_skills=extracted,
        skills_synced=len(new_skills)
    )


@router.get("/resume")
async def get_resume(candidate: dict = Depends(get_current_candidate)):
    """Latest resume metadata (text preview, not the file)."""
    doc = RawResumeService().get_by_candidate(candidate["user_id"])
    if not doc:
        raise HTTPException(status_code=404, detail="No resume uploaded yet")
    return {
        "filename": doc.get("filename"),
        "resume_url": doc.get("file_url"),
        "extracted_skills": doc.get("extracted_skills", []),
        "uploaded_at": doc.get("uploaded_at"),
        "preview": doc["resume_text"][:500]
    }


@router.get("/resume/formats")
async def resume_formats():
    """Get supported resume file formats."""
    return get_supported_formats()

"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

from pydantic import BaseModel, EmailStr, Field, model_validator
from typing import Optional, List, Dict
from datetime import datetime, date
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    candidate = "candidate"
    employer = "employer"
    student = "student"
    faculty = "faculty"
    admin = "admin"
    superadmin = "superadmin"


# Roles anyone can sign up for; admin accounts are promoted by a super-admin
SELF_SERVICE_ROLES = {UserRole.candidate, UserRole.employer, UserRole.student, UserRole.faculty}


class JobType(str, Enum):
    full_time = "full-time"
    part_time = "part-time"
    internship = "internship"
    contract = "contract"
    remote = "remote"


class JobStatus(str, Enum):
    active = "active"
    paused = "paused"
    closed = "closed"


class ApplicationStatus(str, Enum):
    applied = "applied"
    under_review = "under_review"
    shortlisted = "shortlisted"
    interview_scheduled = "interview_scheduled"
    rejected = "rejected"
    accepted = "accepted"


class BGVStatus(str, Enum):
    not_uploaded = "not_uploaded"
    pending = "pending"
    verified = "verified"
    rejected = "rejected"


class ReviewDecision(str, Enum):
    approved = "approved"
    rejected = "rejected"


class BGVDecision(str, Enum):
    verified = "verified"
    rejected = "rejected"


class Priority(str, Enum):
    high = "high"
    medium = "medium"
    low = "low"


class Reaction(str, Enum):
    like = "like"
    love = "love"
    celebrate = "celebrate"


class LeaveType(str, Enum):
    medical = "Medical"
    personal = "Personal"
    academic = "Academic"
    other = "Other"


class ConversationType(str, Enum):
    one_to_one = "one-to-one"
    group = "group"


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    role: UserRole = UserRole.candidate
    full_name: Optional[str] = Field(None, max_length=150)

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: int
    role: str

class UserResponse(BaseModel):
    user_id: int
    email: str
    role: str
    is_active: bool
    full_name: Optional[str] = None
    created_at: datetime

class ForgotPasswordRequest(BaseModel):
    email: EmailStr

class ForgotPasswordResponse(BaseModel):
    message: str
    success: bool = True
    reset_token: Optional[str] = None  # only exposed in debug mode

class ResetPasswordRequest(BaseModel):
    token: str
    new_password: str = Field(..., min_length=8)


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    company: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    location: Optional[str] = None
    job_type: JobType = JobType.full_time
    salary: Optional[str] = Field(None, max_length=100, description="Display range, e.g. '₹10L - ₹15L'")
    min_salary: Optional[float] = Field(None, ge=0)
    max_salary: Optional[float] = Field(None, ge=0)
    skills: List[str] = []

    @model_validator(mode="after")
    def check_salary_range(self):
        if self.min_salary is not None and self.max_salary is not None and self.min_salary > self.max_salary:
            raise ValueError("min_salary cannot exceed max_salary")
        return self

class JobUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=3, max_length=200)
    company: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[JobType] = None
    salary: Optional[str] = None
    min_salary: Optional[float] = Field(None, ge=0)
    max_salary: Optional[float] = Field(None, ge=0)
    skills: Optional[List[str]] = None
    status: Optional[JobStatus] = None

class JobResponse(BaseModel):
    job_id: int
    employer_id: int
    title: str
    company: str
    description: Optional[str] = None
    location: Optional[str] = None
    job_type: str
    salary: Optional[str] = None
    min_salary: Optional[float] = None
    max_salary: Optional[float] = None
    skills: List[str] = []
    status: str
    views: int = 0
    applicants: int = 0
    created_at: datetime

class JobListResponse(BaseModel):
    jobs: List[JobResponse]
    total: int
    page: int
    page_size: int

class SaveJobResponse(BaseModel):
    job_id: int
    saved: bool
    success: bool = True


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationCreate(BaseModel):
    cover_letter: Optional[str] = None

class TimelineStage(BaseModel):
    stage: str
    date: Optional[str] = None
    completed: bool

class ApplicationResponse(BaseModel):
    application_id: int
    job_id: int
    candidate_id: int
    candidate_name: Optional[str] = None
    candidate_email: Optional[str] = None
    job_title: str
    company: str
    status: str
    cover_letter: Optional[str] = None
    notes: List[str] = []
    stage: int
    total_stages: int
    timeline: List[TimelineStage]
    applied_at: datetime
    updated_at: datetime

class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus
    note: Optional[str] = None

class BulkStatusUpdate(BaseModel):
    application_ids: List[int] = Field(..., min_length=1)
    status: ApplicationStatus

class ApplicationNote(BaseModel):
    note: str = Field(..., min_length=1, max_length=2000)


# ============================================================
# DASHBOARD SCHEMAS
# ============================================================

class RecommendedJob(BaseModel):
    job: JobResponse
    match_score: float
    matched_skills: List[str] = []

class CandidateDashboardResponse(BaseModel):
    stats: Dict[str, int]
    recommended_jobs: List[RecommendedJob]
    recent_applications: List[ApplicationResponse]
    saved_jobs: List[int]

class EmployerDashboardResponse(BaseModel):
    stats: Dict[str, int]
    active_jobs_list: List[JobResponse]
    recent_applicants: List[ApplicationResponse]


# ============================================================
# RESUME / BGV SCHEMAS
# ============================================================

class ResumeUploadResponse(BaseModel):
    success: bool
    message: str
    filename: Optional[str] = None
    resume_url: str
    extracted_skills: List[str] = []
    skills_synced: int = 0

class BGVDocumentResponse(BaseModel):
    document_id: int
    candidate_id: int
    document_type: str
    status: str
    file_url: Optional[str] = None
    uploaded_at: Optional[datetime] = None
    review_comment: Optional[str] = None

class BGVReview(BaseModel):
    status: BGVDecision
    comment: Optional[str] = None


# ============================================================
# CAMPUS SCHEMAS
# ============================================================

class AnnouncementCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    content: str = Field(..., min_length=1)
    department: str = "All"
    priority: Priority = Priority.medium

class AnnouncementResponse(BaseModel):
    announcement_id: int
    title: str
    content: str
    author_id: int
    author_name: Optional[str] = None
    author_role: str
    department: str
    priority: str
    reactions: Dict[str, int] = {}
    read_count: int = 0
    is_read: bool = False
    created_at: datetime

class ReactionRequest(BaseModel):
    reaction: Reaction = Reaction.like

class GroupCreate(BaseModel):
    name: str = Field(..., min_length=3, max_length=150)
    description: Optional[str] = None
    category: str = "Technical"

class GroupResponse(BaseModel):
    group_id: int
    name: str
    description: Optional[str] = None
    category: str
    status: str
    created_by: int
    member_count: int = 0
    mentor_count: int = 0
    pending_requests: int = 0
    my_status: Optional[str] = None
    created_at: datetime

class GroupMemberResponse(BaseModel):
    user_id: int
    full_name: Optional[str] = None
    member_role: str
    status: str

class MembershipDecision(BaseModel):
    approve: bool

class GroupPostCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)
    link: Optional[str] = None

class GroupPostResponse(BaseModel):
    post_id: int
    group_id: int
    author_id: int
    author_name: Optional[str] = None
    content: str
    link: Optional[str] = None
    created_at: datetime

class LeaveCreate(BaseModel):
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str = Field(..., min_length=3)

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self

class LeaveReview(BaseModel):
    status: ReviewDecision
    comments: Optional[str] = None

class LeaveResponse(BaseModel):
    leave_id: int
    student_id: int
    student_name: Optional[str] = None
    roll_number: Optional[str] = None
    leave_type: str
    start_date: date
    end_date: date
    days: int
    reason: str
    status: str
    reviewed_by: Optional[int] = None
    review_date: Optional[datetime] = None
    comments: Optional[str] = None
    applied_at: datetime

class FeedbackCreate(BaseModel):
    faculty_id: int
    course_code: str = Field(..., min_length=2, max_length=20)
    course_name: Optional[str] = None
    rating: int = Field(..., ge=1, le=5)
    feedback: Optional[str] = None
    is_anonymous: bool = True
    category: str = "Course Feedback"

class FeedbackResponse(BaseModel):
    feedback_id: int
    student_name: str
    faculty_id: int
    faculty_name: Optional[str] = None
    course_code: str
    course_name: Optional[str] = None
    rating: int
    feedback: Optional[str] = None
    is_anonymous: bool
    category: str
    created_at: datetime

class FeedbackSummary(BaseModel):
    faculty_id: int
    total: int
    average_rating: Optional[float] = None
    feedbacks: List[FeedbackResponse]

class AchievementCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    description: str = Field(..., min_length=5)
    category: str = "Competition"
    improve: bool = False

class AchievementReview(BaseModel):
    status: ReviewDecision

class AchievementResponse(BaseModel):
    achievement_id: int
    student_id: int
    student_name: Optional[str] = None
    title: str
    description: str
    category: str
    toxicity_score: float
    status: str
    likes: int
    created_at: datetime


# ============================================================
# MESSAGING SCHEMAS
# ============================================================

class ConversationCreate(BaseModel):
    type: ConversationType = ConversationType.one_to_one
    participant_ids: List[int] = Field(..., min_length=1)
    group_id: Optional[int] = None

class ConversationResponse(BaseModel):
    conversation_id: str
    type: str
    participants: List[int]
    participant_names: Dict[str, Optional[str]] = {}
    group_id: Optional[int] = None
    group_name: Optional[str] = None
    last_message: Optional[str] = None
    last_message_time: Optional[datetime] = None
    unread_count: int = 0

class ChatMessageCreate(BaseModel):
    text: str = Field(..., min_length=1, max_length=5000)

class ChatMessageResponse(BaseModel):
    message_id: str
    conversation_id: str
    sender_id: int
    sender_name: Optional[str] = None
    text: str
    timestamp: datetime


# ============================================================
# AI SCHEMAS
# ============================================================

class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=2000)

class ChatResponse(BaseModel):
    reply: str
    source: str

class TextRequest(BaseModel):
    text: str = Field(..., max_length=10000)

class ContentAnalysisResponse(BaseModel):
    toxicity_score: float
    flagged_words: List[str]
    improved_text: Optional[str] = None
    is_safe: bool

class EnhanceResponse(BaseModel):
    original: str
    suggestion: Optional[str] = None

class ToxicityResponse(BaseModel):
    toxicity_score: float
    is_acceptable: bool

class ImprovedTextResponse(BaseModel):
    improved_text: str

class JobAuthenticityRequest(BaseModel):
    title: Optional[str] = None
    company: Optional[str] = None
    description: Optional[str] = None
    salary: Optional[str] = None

class JobAuthenticityResponse(BaseModel):
    score: int
    risk_level: str
    flags: List[str]

class ResumeScoreRequest(BaseModel):
    resume_text: Optional[str] = None
    job_id: Optional[int] = None
    skills: List[str] = []

class ResumeFeedbackItem(BaseModel):
    type: str
    text: str

class ResumeScoreResponse(BaseModel):
    score: int
    keyword_match: int
    matched_keywords: List[str]
    missing_keywords: List[str]
    feedback: List[ResumeFeedbackItem]


# ============================================================
# ADMIN SCHEMAS
# ============================================================

class AdminUserResponse(BaseModel):
    user_id: int
    email: str
    role: str
    is_active: bool
    full_name: Optional[str] = None
    created_at: datetime

class UserStatusUpdate(BaseModel):
    is_active: bool

class RoleUpdate(BaseModel):
    role: UserRole

class PlatformStatsResponse(BaseModel):
    total_users: int
    users_by_role: Dict[str, int]
    total_jobs: int
    active_jobs: int
    total_applications: int
    pending_bgv_documents: int
    pending_achievements: int
    pending_leaves: int

class AuditLogResponse(BaseModel):
    log_id: int
    actor_id: Optional[int] = None
    actor_email: Optional[str] = None
    action: str
    target: Optional[str] = None
    status: str
    ip_address: Optional[str] = None
    created_at: datetime


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True

class ErrorResponse(BaseModel):
    detail: str

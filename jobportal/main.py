"""
Campus Job Portal - Main Application

FastAPI backend with:
- PostgreSQL (SQLite for local runs) for users, profiles, jobs and campus data
- MongoDB for resume text, conversations and stored files
- Mock AI helpers, with an optional LLM for the chat assistant
- JWT authentication with per-role access

Run: uvicorn jobportal.main:app --reload
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from jobportal import __version__
from jobportal.api.routes import api_router, storage_router
from jobportal.core.config import get_settings
from jobportal.core.logging_config import setup_logging
from jobportal.db.database import init_db, test_db_connection
from jobportal.db.mongodb import init_mongo_indexes, test_mongo_connection

settings = get_settings()

# Create FastAPI app
app = FastAPI(
    title="Campus Job Portal",
    description="""
    Job portal and campus hub for candidates, employers, students and faculty.

    ## Features
    - **Authentication**: JWT auth, password reset, six roles
    - **Jobs**: Posting, search and filters, applications with timelines, saved jobs
    - **Candidates**: Dashboard, resume upload with skill sync, background verification
    - **Employers**: Dashboard, applicant pipeline, bulk status updates, notes
    - **Campus**: Announcements, student groups, leave applications, feedback, achievements
    - **Messaging**: One-to-one and group conversations
    - **AI**: Career chat, moderation, job authenticity, resume scoring
    - **Admin**: User moderation, job moderation, platform stats, audit log
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")
# Public file URLs live outside /api
app.include_router(storage_router)


@app.on_event("startup")
async def startup_event():
    """Configure logging, create tables and MongoDB indexes."""
    setup_logging()

    try:
        init_db()
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")

    try:
        init_mongo_indexes()
        logger.info("MongoDB indexes initialized")
    except Exception as e:
        logger.warning(f"MongoDB index initialization failed: {e}")


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "Campus Job Portal", "docs": "/docs"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    database_ok = test_db_connection()
    mongo_ok = test_mongo_connection()

    return {
        "status": "healthy" if database_ok and mongo_ok else "degraded",
        "database": "connected" if database_ok else "disconnected",
        "mongodb": "connected" if mongo_ok else "disconnected"
    }

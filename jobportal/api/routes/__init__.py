"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from jobportal.api.routes.auth_routes import router as auth_router
from jobportal.api.routes.profile_routes import router as profile_router
from jobportal.api.routes.candidate_routes import router as candidate_router
from jobportal.api.routes.employer_routes import router as employer_router
from jobportal.api.routes.job_routes import router as job_router
from jobportal.api.routes.application_routes import router as application_router
from jobportal.api.routes.bgv_routes import router as bgv_router
from jobportal.api.routes.campus_routes import router as campus_router
from jobportal.api.routes.message_routes import router as message_router
from jobportal.api.routes.ai_routes import router as ai_router
from jobportal.api.routes.admin_routes import router as admin_router
from jobportal.api.routes.storage_routes import router as storage_router

# Main API router (mounted under /api)
api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(profile_router)
api_router.include_router(candidate_router)
api_router.include_router(employer_router)
api_router.include_router(job_router)
api_router.include_router(application_router)
api_router.include_router(bgv_router)
api_router.include_router(campus_router)
api_router.include_router(message_router)
api_router.include_router(ai_router)
api_router.include_router(admin_router)

__all__ = ["api_router", "storage_router"]

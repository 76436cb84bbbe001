"""
Schemas module - Request/Response schemas for API endpoints.

Everything lives in jobportal.schemas.schemas; import from there.
"""

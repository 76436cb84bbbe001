"""
Campus Job Portal - FastAPI backend.
"""

__version__ = "1.0.0"

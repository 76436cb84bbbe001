"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT access / password-reset token creation and verification
- FastAPI dependencies for protected routes, one per role family
"""

from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import text

from jobportal.core.config import get_settings
from jobportal.db.database import get_db_session

settings = get_settings()

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractor
bearer_scheme = HTTPBearer()

ACCESS_TOKEN = "access"
RESET_TOKEN = "password_reset"


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None,
                        token_type: str = ACCESS_TOKEN) -> str:
    """Create JWT token (access token unless token_type says otherwise)."""
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire, "type": token_type})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_reset_token(user_id: int, password_hash: str) -> str:
    """
    Short-lived password reset token.

    Carries a fragment of the current hash so the token stops working once
    the password has changed.
    """
    return create_access_token(
        {"sub": str(user_id), "pwd": password_hash[-12:]},
        expires_delta=timedelta(minutes=settings.reset_token_expire_minutes),
        token_type=RESET_TOKEN
    )


def decode_token(token: str, token_type: str = ACCESS_TOKEN) -> Optional[dict]:
    """Decode and verify JWT token of the expected type."""
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    if payload.get("type") != token_type:
        return None
    return payload


async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)) -> dict:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @app.get("/protected")
        async def route(user: dict = Depends(get_current_user)):
            return user
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_token(credentials.credentials)
    if not payload:
        raise credentials_exception

    user_id = payload.get("sub")
    if not user_id:
        raise credentials_exception

    # Verify user exists
    with get_db_session() as db:
        result = db.execute(
            text("""
                SELECT u.user_id, u.email, u.role, u.is_active, p.full_name
                FROM users u LEFT JOIN profiles p ON p.user_id = u.user_id
                WHERE u.user_id = :id
            """),
            {"id": int(user_id)}
        )
        user = result.fetchone()

    if not user:
        raise credentials_exception

    if not user[3]:  # is_active
        raise HTTPException(status_code=403, detail="Account deactivated")

    return {"user_id": user[0], "email": user[1], "role": user[2], "full_name": user[4]}


def require_roles(*roles: str):
    """
    Build a dependency that only lets the given roles through.

    Usage:
        @router.post("/jobs")
        async def create(user: dict = Depends(require_roles("employer"))):
            ...
    """
    allowed = set(roles)

    async def dependency(user: dict = Depends(get_current_user)) -> dict:
        if user["role"] not in allowed:
            raise HTTPException(
                status_code=403,
                detail=f"Only {', '.join(sorted(allowed))} accounts can do this"
            )
        return user

    return dependency


get_current_candidate = require_roles("candidate")
get_current_employer = require_roles("employer")
get_current_student = require_roles("student")
get_current_faculty = require_roles("faculty")
get_current_admin = require_roles("admin", "superadmin")
get_current_superadmin = require_roles("superadmin")

"""
Authentication Routes

POST /auth/register        - Register new user (profile rows created too)
POST /auth/login           - Login and get JWT token
POST /auth/logout          - Logout (client drops the token)
GET  /auth/me              - Get current user info
POST /auth/forgot-password - Issue a password reset token
POST /auth/reset-password  - Set a new password with a reset token
"""

from fastapi import APIRouter, HTTPException, Depends, Request
from loguru import logger
from sqlalchemy import text

from jobportal.core.config import get_settings
from jobportal.db.database import get_db_session, fetch_one
from jobportal.core.auth import (
    hash_password, verify_password, create_access_token, create_reset_token,
    decode_token, get_current_user, RESET_TOKEN
)
from jobportal.services.audit_service import record_action
from jobportal.services.profile_service import create_empty_profile
from jobportal.services.bgv_service import create_default_documents
from jobportal.schemas.schemas import (
    RegisterRequest, LoginRequest, TokenResponse, UserResponse, MessageResponse,
    ForgotPasswordRequest, ForgotPasswordResponse, ResetPasswordRequest, SELF_SERVICE_ROLES
)

router = APIRouter(prefix="/auth", tags=["Authentication"])

settings = get_settings()


def client_ip(request: Request) -> str:
    return request.client.host if request.client else None


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(request: RegisterRequest):
    """
    Register a new account and log it in.

    Base and role-specific profile rows are created empty; candidates also
    get their background-verification document checklist.
    """
    if request.role not in SELF_SERVICE_ROLES:
        raise HTTPException(status_code=403, detail="Admin accounts cannot be self-registered")

    email = request.email.lower()
    with get_db_session() as db:
        # Check email exists
        result = db.execute(
            text("SELECT user_id FROM users WHERE email = :email"),
            {"email": email}
        )
        if result.fetchone():
            raise HTTPException(status_code=400, detail="Email already registered")

        # Create user
        result = db.execute(
            text("""
                INSERT INTO users (email, password_hash, role, is_active)
                VALUES (:email, :password_hash, :role, :is_active)
                RETURNING user_id
            """),
            {
                "email": email,
                "password_hash": hash_password(request.password),
                "role": request.role.value,
                "is_active": True
            }
        )
        user_id = result.fetchone()[0]

        create_empty_profile(db, user_id, request.role.value, email, request.full_name)
        if request.role.value == "candidate":
            create_default_documents(db, user_id)

    logger.info(f"Registered user {user_id} as {request.role.value}")
    token = create_access_token(data={"sub": str(user_id), "role": request.role.value})
    return TokenResponse(access_token=token, user_id=user_id, role=request.role.value)


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, request: Request):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    email = body.email.lower()
    user = fetch_one(
        "SELECT user_id, password_hash, role, is_active FROM users WHERE email = :email",
        {"email": email}
    )

    if not user or not verify_password(body.password, user["password_hash"]):
        record_action("User Login", actor_id=user["user_id"] if user else None, actor_email=email,
                      status="danger", ip_address=client_ip(request))
        raise HTTPException(status_code=401, detail="Invalid email or password")

    if not user["is_active"]:
        raise HTTPException(status_code=403, detail="Account deactivated")

    record_action("User Login", actor_id=user["user_id"], actor_email=email, ip_address=client_ip(request))
    token = create_access_token(data={"sub": str(user["user_id"]), "role": user["role"]})

    return TokenResponse(access_token=token, user_id=user["user_id"], role=user["role"])


@router.post("/logout", response_model=MessageResponse)
async def logout(user: dict = Depends(get_current_user)):
    """Tokens are stateless; the client discards it."""
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=UserResponse)
async def get_me(user: dict = Depends(get_current_user)):
    """Get current authenticated user's info."""
    row = fetch_one(
        """
        SELECT u.user_id, u.email, u.role, u.is_active, u.created_at, p.full_name
        FROM users u LEFT JOIN profiles p ON p.user_id = u.user_id
        WHERE u.user_id = :id
        """,
        {"id": user["user_id"]}
    )
    return UserResponse(**row)


@router.post("/forgot-password", response_model=ForgotPasswordResponse)
async def forgot_password(body: ForgotPasswordRequest):
    """
    Start a password reset.

    The response is identical whether or not the email exists. The token
    would be emailed; in debug mode it is also returned for local testing.
    """
    user = fetch_one(
        "SELECT user_id, password_hash FROM users WHERE email = :email AND is_active = :active",
        {"email": body.email.lower(), "active": True}
    )

    reset_token = None
    if user:
        reset_token = create_reset_token(user["user_id"], user["password_hash"])
        logger.info(f"Password reset requested for user {user['user_id']}")

    return ForgotPasswordResponse(
        message="If that email is registered, a password reset link has been sent",
        reset_token=reset_token if settings.debug else None
    )


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(body: ResetPasswordRequest):
    """Set a new password using a reset token (single use)."""
    payload = decode_token(body.token, token_type=RESET_TOKEN)
    if not payload or not payload.get("sub"):
        raise HTTPException(status_code=400, detail="Invalid or expired reset token")

    user_id = int(payload["sub"])
    with get_db_session() as db:
        result = db.execute(
            text("SELECT email, password_hash FROM users WHERE user_id = :id"),
            {"id": user_id}
        )
        row = result.fetchone()
        # Token is bound to the hash it was issued for
        if not row or row[1][-12:] != payload.get("pwd"):
            raise HTTPException(status_code=400, detail="Invalid or expired reset token")

        db.execute(
            text("UPDATE users SET password_hash = :hash WHERE user_id = :id"),
            {"hash": hash_password(body.new_password), "id": user_id}
        )

    record_action("Password Reset", actor_id=user_id, actor_email=row[0])
    return MessageResponse(message="Password reset successful")

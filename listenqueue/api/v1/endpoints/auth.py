# ============================================================================
# FILE: listenqueue/api/v1/endpoints/auth.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from datetime import timedelta
from listenqueue.db.session import get_db
from listenqueue.api.dependencies import require_current_user
from listenqueue.schemas.user import UserCreate, UserLogin, UserResponse, Token
from listenqueue.services.user_service import user_service
from listenqueue.core.security import create_access_token
from listenqueue.config import settings
from listenqueue.db.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/register", response_model=UserResponse)
async def register(
    user_data: UserCreate,
    db: Session = Depends(get_db)
):
    """
    Register a new user account
    """
    # Check if username already exists
    existing_user = user_service.get_user_by_username(db, user_data.username)
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already registered"
        )

    # Check if email already exists
    existing_email = user_service.get_user_by_email(db, user_data.email)
    if existing_email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    try:
        user = user_service.create_user(db, user_data)
        return user
    except Exception as e:
        logger.error(f"Signup error: {e}")
        raise HTTPException(status_code=500, detail="Failed to create user")

@router.post("/login", response_model=Token)
async def login(
    credentials: UserLogin,
    response: Response,
    db: Session = Depends(get_db)
):
    """
    Login with username and password
    Returns a JWT session token and also sets it as the session cookie
    """
    user = user_service.authenticate_user(db, credentials.username, credentials.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "JWT"},
        )
    if user.is_banned():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You have been banned")

    # Create access token
    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = create_access_token(
        data={"sub": str(user.id)}, expires_delta=access_token_expires
    )
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        access_token,
        max_age=int(access_token_expires.total_seconds()),
        httponly=True,
        samesite="lax",
    )
    logger.info(f"User logged in: {user.username}")

    return {"access_token": access_token, "token_type": "JWT"}

@router.get("", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(require_current_user)
):
    """
    Get current user information
    Requires authentication
    """
    return current_user

@router.delete("/session")
async def logout(response: Response):
    """Clear the session cookie"""
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"message": "Logged out"}

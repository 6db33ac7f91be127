# ============================================================================
# FILE: social_api/api/endpoints/auth.py
# ============================================================================
from fastapi import APIRouter, Depends, status
from social_api.api.dependencies import get_auth_service, require_current_user
from social_api.schemas.user import (
    AuthResponse,
    CurrentUser,
    ProfileResponse,
    UserCreate,
    UserLogin,
)
from social_api.services.auth_service import AuthService
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

# Handlers are plain functions: FastAPI runs them in its threadpool,
# so bcrypt and database calls stay off the event loop.

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserCreate,
    auth: AuthService = Depends(get_auth_service)
):
    """
    Register a new user account
    Returns a bearer token together with the public user view
    """
    return auth.register(user_data.username, user_data.email, user_data.password)

@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    auth: AuthService = Depends(get_auth_service)
):
    """
    Login with username (or email) and password
    """
    return auth.login(credentials.username, credentials.password)

@router.get("/profile", response_model=ProfileResponse)
def profile(
    current_user: CurrentUser = Depends(require_current_user),
    auth: AuthService = Depends(get_auth_service)
):
    """
    Get current user information
    Requires authentication
    """
    return auth.profile(current_user.id)

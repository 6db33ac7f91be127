# ============================================================================
# FILE: social_api/api/dependencies.py
# ============================================================================
from fastapi import Depends, Header, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from social_api.config import Settings
from social_api.core.exceptions import InternalError, UnauthorizedError
from social_api.core.security import InvalidTokenError, PasswordHasher, TokenService
from social_api.db.session import get_db
from social_api.schemas.user import CurrentUser
from social_api.services.auth_service import AuthService
from social_api.services.post_service import PostService
from social_api.services.user_service import UserService
from typing import Optional
import logging

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

TOKEN_MISSING = "Токен отсутствует"
TOKEN_INVALID = "Неверный токен"
USER_NOT_FOUND = "Пользователь не найден"


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher

def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service

def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)

def get_post_service(db: Session = Depends(get_db)) -> PostService:
    return PostService(db)

def get_auth_service(
    users: UserService = Depends(get_user_service),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(users, hasher, tokens)


def require_current_user(
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
    users: UserService = Depends(get_user_service),
) -> CurrentUser:
    """
    Resolve the `Authorization: Bearer <token>` header to a live user.
    Raises UnauthorizedError (401) when the token is missing, invalid,
    expired, or belongs to a user that no longer exists.
    """
    if not authorization or authorization.strip() == BEARER_PREFIX.strip():
        raise UnauthorizedError(TOKEN_MISSING)
    if not authorization.startswith(BEARER_PREFIX):
        raise UnauthorizedError(TOKEN_INVALID)

    token = authorization[len(BEARER_PREFIX):]
    try:
        user_id = tokens.verify(token)
    except InvalidTokenError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise UnauthorizedError(TOKEN_INVALID)

    try:
        user = users.find_by_id(user_id)
    except SQLAlchemyError as e:
        logger.exception(f"User lookup failed during authorization: {e}")
        raise InternalError()

    if user is None:
        raise UnauthorizedError(USER_NOT_FOUND)
    return CurrentUser.model_validate(user)

# ============================================================================
# FILE: social_api/services/auth_service.py
# ============================================================================
from social_api.core.exceptions import (
    AppError,
    BadRequestError,
    ConflictError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
)
from social_api.core.security import PasswordHasher, TokenService
from social_api.schemas.user import AuthResponse, ProfileResponse
from social_api.services.user_service import UserService
import logging

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
MAX_USERNAME_LENGTH = 50
MAX_EMAIL_LENGTH = 100

SERVER_ERROR = "Ошибка сервера"
INVALID_CREDENTIALS = "Неверные данные"
USER_NOT_FOUND = "Пользователь не найден"


class AuthService:
    """Registration, login and profile lookup"""

    def __init__(self, users: UserService, hasher: PasswordHasher, tokens: TokenService):
        self.users = users
        self.hasher = hasher
        self.tokens = tokens

    def register(self, username: str, email: str, password: str) -> AuthResponse:
        """
        Register a new account and log it in right away.
        Raises BadRequestError on invalid input and ConflictError when
        the username or email is already taken.
        """
        if not username or not email or not password:
            raise BadRequestError("Заполните все поля")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise BadRequestError(f"Пароль должен быть минимум {MIN_PASSWORD_LENGTH} символов")
        if len(username) > MAX_USERNAME_LENGTH:
            raise BadRequestError(f"Имя пользователя должно быть не длиннее {MAX_USERNAME_LENGTH} символов")
        if len(email) > MAX_EMAIL_LENGTH:
            raise BadRequestError(f"Email должен быть не длиннее {MAX_EMAIL_LENGTH} символов")

        try:
            if self.users.find_by_username_or_email(username, email):
                raise ConflictError()

            password_hash = self.hasher.hash(password)
            user = self.users.create(username, email, password_hash)
            token = self.tokens.issue(user.id)
        except AppError:
            raise
        except Exception as e:
            logger.exception(f"Signup error: {e}")
            raise InternalError(SERVER_ERROR)

        return AuthResponse(
            message="Регистрация успешна",
            token=token,
            user=self.users.to_public(user),
        )

    def login(self, identifier: str, password: str) -> AuthResponse:
        """Log in by username or email; unknown user and wrong password look the same"""
        if not identifier or not password:
            raise BadRequestError("Введите логин и пароль")

        try:
            user = self.users.find_by_credential_lookup(identifier)
            valid = user is not None and self.hasher.verify(password, user.password_hash)
            if not valid:
                logger.warning(f"Failed login attempt for identifier: {identifier}")
                raise UnauthorizedError(INVALID_CREDENTIALS)
            token = self.tokens.issue(user.id)
        except AppError:
            raise
        except Exception as e:
            logger.exception(f"Login error: {e}")
            raise InternalError(SERVER_ERROR)

        logger.info(f"User logged in: {user.username}")
        return AuthResponse(
            message="Вход успешен",
            token=token,
            user=self.users.to_public(user),
        )

    def profile(self, caller_id: str) -> ProfileResponse:
        try:
            user = self.users.find_by_id(caller_id)
        except Exception as e:
            logger.exception(f"Profile lookup error: {e}")
            raise InternalError(SERVER_ERROR)

        if not user:
            raise NotFoundError(USER_NOT_FOUND)
        return ProfileResponse(message="Профиль пользователя", user=self.users.to_public(user))

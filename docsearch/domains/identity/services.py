import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from docsearch.db.repositories.user_repository import UserRepository
from docsearch.domains.identity.entities import Identity, User
from docsearch.domains.identity.schemas import UserCreate, UserLogin
from docsearch.core.security import create_access_token, verify_token

logger = logging.getLogger(__name__)


class IdentityService:
    """Сервис для работы с идентификацией и аутентификацией пользователей"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)

    async def register_user(self, user_data: UserCreate) -> User:
        """Регистрация нового пользователя"""
        if await self.user_repository.email_exists(user_data.email):
            raise ValueError("Email already registered")

        user = User.create_user(email=user_data.email, password=user_data.password)
        created_user = await self.user_repository.create(user)

        logger.info(f"User {created_user.uuid} registered")
        return created_user

    async def authenticate_user(self, login_data: UserLogin) -> Optional[User]:
        """Аутентификация пользователя"""
        user = await self.user_repository.get_by_email(login_data.email)

        if not user or not user.is_active:
            return None

        if not user.authenticate(login_data.password):
            return None

        return user

    async def login_user(self, login_data: UserLogin) -> Optional[str]:
        """Вход пользователя и создание JWT токена"""
        user = await self.authenticate_user(login_data)

        if not user:
            logger.info(f"Failed login attempt for {login_data.email}")
            return None

        return create_access_token(data={"sub": str(user.uuid), "email": user.email})

    async def get_user_by_uuid(self, user_uuid: uuid.UUID) -> Optional[User]:
        """Получение пользователя по UUID"""
        return await self.user_repository.get_by_uuid(user_uuid)

    async def get_current_user_from_token(self, token: str) -> Optional[User]:
        """Получение текущего пользователя из JWT токена"""
        payload = verify_token(token)
        if not payload:
            return None

        try:
            user_uuid = uuid.UUID(str(payload.get("sub")))
        except ValueError:
            return None

        user = await self.user_repository.get_by_uuid(user_uuid)

        if user is None or not user.is_active:
            return None

        return user

    async def get_identity_from_token(self, token: str) -> Optional[Identity]:
        """Identity активного пользователя или None"""
        user = await self.get_current_user_from_token(token)
        return user.identity if user else None

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from docsearch.core.clock import utcnow
from docsearch.core.security import get_password_hash, verify_password


@dataclass(frozen=True)
class Identity:
    """Аутентифицированный пользователь, от имени которого выполняется операция"""
    user_id: uuid.UUID


class User:
    """Сущность пользователя домена Identity"""

    def __init__(
        self,
        uuid: uuid.UUID,
        email: str,
        password_hash: str,
        is_active: bool = True,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.email = email
        self.password_hash = password_hash
        self.is_active = is_active
        self.created_at = created_at or utcnow()
        self.updated_at = updated_at or self.created_at

    def authenticate(self, password: str) -> bool:
        """Проверка пароля пользователя"""
        return verify_password(password, self.password_hash)

    @property
    def identity(self) -> Identity:
        return Identity(user_id=self.uuid)

    @classmethod
    def create_user(cls, email: str, password: str) -> "User":
        """Создание нового пользователя с хешированием пароля"""
        return cls(
            uuid=uuid.uuid4(),
            email=email,
            password_hash=get_password_hash(password)
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.uuid == other.uuid

    def __hash__(self) -> int:
        return hash(self.uuid)

    def __repr__(self) -> str:
        return f"User(uuid={self.uuid}, email={self.email})"

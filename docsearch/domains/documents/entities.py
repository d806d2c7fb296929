import uuid
from datetime import datetime
from typing import Optional, List, Iterable

from docsearch.core.clock import utcnow

DEFAULT_CATEGORY = "General"
ALL_CATEGORIES = "All"
SNIPPET_LENGTH = 150


class Document:
    """Сущность документа домена Documents"""

    def __init__(
        self,
        uuid: uuid.UUID,
        owner_id: uuid.UUID,
        title: str,
        content: str,
        category: str = DEFAULT_CATEGORY,
        tags: Optional[Iterable[str]] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.owner_id = owner_id
        self.title = title
        self.content = content
        self.category = category
        self.tags: List[str] = list(tags or [])
        self.created_at = created_at or utcnow()
        self.updated_at = updated_at or self.created_at

    def apply_changes(
        self,
        title: Optional[str] = None,
        content: Optional[str] = None,
        category: Optional[str] = None,
        tags: Optional[Iterable[str]] = None
    ) -> None:
        """Слияние переданных полей и обновление updated_at"""
        if title is not None:
            self.title = title
        if content is not None:
            self.content = content
        if category is not None:
            self.category = category
        if tags is not None:
            self.tags = list(tags)

        # Время в БД может отставать от локальных часов, updated_at не должен быть меньше created_at
        self.updated_at = max(utcnow(), self.created_at)

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        return self.owner_id == user_id

    def get_snippet(self, length: int = SNIPPET_LENGTH) -> str:
        """Начало содержимого для карточки документа"""
        if len(self.content) <= length:
            return self.content
        return self.content[:length] + "..."

    @property
    def tag_count(self) -> int:
        return len(self.tags)

    @classmethod
    def create_document(
        cls,
        owner_id: uuid.UUID,
        title: str,
        content: str,
        category: str = DEFAULT_CATEGORY,
        tags: Optional[Iterable[str]] = None
    ) -> "Document":
        """Создание нового документа"""
        return cls(
            uuid=uuid.uuid4(),
            owner_id=owner_id,
            title=title,
            content=content,
            category=category,
            tags=tags
        )

    def copy(self) -> "Document":
        return Document(
            uuid=self.uuid,
            owner_id=self.owner_id,
            title=self.title,
            content=self.content,
            category=self.category,
            tags=self.tags,
            created_at=self.created_at,
            updated_at=self.updated_at
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Document):
            return False
        return self.uuid == other.uuid

    def __hash__(self) -> int:
        return hash(self.uuid)

    def __repr__(self) -> str:
        return f"Document(uuid={self.uuid}, title={self.title}, category={self.category})"

import logging
from typing import Any, Awaitable, Callable, Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from docsearch.core.cache import CacheKey, QueryCache
from docsearch.core.errors import NotFound, Unauthenticated
from docsearch.db.repositories.document_repository import DocumentRepository
from docsearch.domains.documents.entities import Document, ALL_CATEGORIES, DEFAULT_CATEGORY
from docsearch.domains.documents.schemas import DocumentCreate, DocumentUpdate
from docsearch.domains.identity.entities import Identity

logger = logging.getLogger(__name__)

_MISSING = object()


def _detach(value: Any) -> Any:
    """Копия результата, чтобы изменения у вызывающего не попадали в кэш"""
    if isinstance(value, Document):
        return value.copy()
    if isinstance(value, list):
        return [_detach(item) for item in value]
    return value


class DocumentService:
    """Сервис для работы с документами.

    Каждая операция выполняется от имени явно переданного ``identity``.
    Без него чтение возвращает пустой результат, а изменение отклоняется
    с ошибкой Unauthenticated.
    """

    def __init__(self, session: AsyncSession, cache: Optional[QueryCache] = None):
        self.session = session
        self.cache = cache if cache is not None else QueryCache(ttl_seconds=0)
        self.document_repository = DocumentRepository(session)

    @staticmethod
    def _require_identity(identity: Optional[Identity]) -> Identity:
        if identity is None:
            raise Unauthenticated()
        return identity

    async def _cached(self, key: CacheKey, loader: Callable[[], Awaitable[Any]]) -> Any:
        cached = self.cache.get(key, _MISSING)
        if cached is not _MISSING:
            return _detach(cached)

        generation = self.cache.generation(key[1])
        value = await loader()
        self.cache.set(key, _detach(value), generation)
        return value

    async def list_documents(
        self,
        identity: Optional[Identity],
        search: Optional[str] = None,
        category: Optional[str] = None
    ) -> List[Document]:
        """Документы пользователя, сначала недавно изменённые.

        ``search`` ищется в заголовке и содержимом без учёта регистра,
        ``category`` сравнивается точно; "All" означает любую категорию.
        """
        if identity is None:
            return []

        search = search or None
        if not category or category == ALL_CATEGORIES:
            category = None

        return await self._cached(
            ("documents", identity.user_id, search, category),
            lambda: self.document_repository.list_for_owner(
                identity.user_id, search=search, category=category
            )
        )

    async def get_document(
        self,
        identity: Optional[Identity],
        document_uuid: uuid.UUID
    ) -> Optional[Document]:
        """Получение документа пользователя по UUID"""
        if identity is None:
            return None

        return await self._cached(
            ("document", identity.user_id, document_uuid),
            lambda: self.document_repository.get_for_owner(document_uuid, identity.user_id)
        )

    async def list_categories(self, identity: Optional[Identity]) -> List[str]:
        """Категории документов пользователя, первой всегда идёт "All" """
        if identity is None:
            return [ALL_CATEGORIES, DEFAULT_CATEGORY]

        categories = await self._cached(
            ("categories", identity.user_id),
            lambda: self.document_repository.list_categories(identity.user_id)
        )
        if not categories:
            return [ALL_CATEGORIES, DEFAULT_CATEGORY]

        return [ALL_CATEGORIES] + [c for c in categories if c != ALL_CATEGORIES]

    async def create_document(self, identity: Optional[Identity], document_data: DocumentCreate) -> Document:
        """Создание нового документа"""
        identity = self._require_identity(identity)

        document = Document.create_document(
            owner_id=identity.user_id,
            title=document_data.title,
            content=document_data.content,
            category=document_data.category,
            tags=document_data.tags
        )
        try:
            created_document = await self.document_repository.create(document)
        finally:
            # Кэш владельца сбрасывается и при сбое записи
            self.cache.invalidate(identity.user_id)

        logger.info(f"Document {created_document.uuid} created by {identity.user_id}")
        return created_document

    async def update_document(
        self,
        identity: Optional[Identity],
        document_uuid: uuid.UUID,
        update_data: DocumentUpdate
    ) -> Document:
        """Обновление документа, меняются только переданные поля"""
        identity = self._require_identity(identity)

        # Читаем мимо кэша: сущность будет изменена до записи
        document = await self.document_repository.get_for_owner(document_uuid, identity.user_id)
        if not document:
            raise NotFound()

        document.apply_changes(**update_data.changes())

        try:
            updated_document = await self.document_repository.update(document)
        finally:
            self.cache.invalidate(identity.user_id)

        if not updated_document:
            # Документ удалили между чтением и записью
            raise NotFound()

        logger.info(f"Document {document_uuid} updated by {identity.user_id}")
        return updated_document

    async def delete_document(self, identity: Optional[Identity], document_uuid: uuid.UUID) -> None:
        """Удаление документа; отсутствующий или чужой документ не считается ошибкой"""
        identity = self._require_identity(identity)

        try:
            deleted = await self.document_repository.delete_for_owner(document_uuid, identity.user_id)
        finally:
            self.cache.invalidate(identity.user_id)

        if deleted:
            logger.info(f"Document {document_uuid} deleted by {identity.user_id}")
        else:
            logger.debug(f"Delete of missing document {document_uuid} by {identity.user_id} ignored")

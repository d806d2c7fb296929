from typing import Optional, List, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, and_, or_
import uuid

from docsearch.db.models.document import Document as DocumentModel
from docsearch.db.repositories.base import storage_errors

if TYPE_CHECKING:
    from docsearch.domains.documents.entities import Document

LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Экранирование символов шаблона LIKE, чтобы искать подстроку буквально"""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class DocumentRepository:
    """Репозиторий для работы с документами.

    Все выборки и изменения ограничены владельцем документа.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    @storage_errors
    async def create(self, document: "Document") -> "Document":
        """Создание нового документа"""
        db_document = DocumentModel(
            uuid=document.uuid,
            owner_id=document.owner_id,
            title=document.title,
            content=document.content,
            category=document.category,
            tags=list(document.tags),
            created_at=document.created_at,
            updated_at=document.updated_at
        )

        self.session.add(db_document)
        # Результат собирается до фиксации: после commit обращений к БД нет
        created_document = self._to_domain(db_document)
        await self.session.commit()
        return created_document

    @storage_errors
    async def get_for_owner(self, document_uuid: uuid.UUID, owner_id: uuid.UUID) -> Optional["Document"]:
        """Получение документа владельца по UUID"""
        return await self._select_for_owner(document_uuid, owner_id)

    async def _select_for_owner(self, document_uuid: uuid.UUID, owner_id: uuid.UUID) -> Optional["Document"]:
        result = await self.session.execute(
            select(DocumentModel).where(
                and_(
                    DocumentModel.uuid == document_uuid,
                    DocumentModel.owner_id == owner_id
                )
            ).execution_options(populate_existing=True)
        )
        db_document = result.scalar_one_or_none()
        return self._to_domain(db_document) if db_document else None

    @storage_errors
    async def list_for_owner(
        self,
        owner_id: uuid.UUID,
        search: Optional[str] = None,
        category: Optional[str] = None
    ) -> List["Document"]:
        """Документы владельца, сначала недавно изменённые"""
        query = select(DocumentModel).where(DocumentModel.owner_id == owner_id)

        if category is not None:
            query = query.where(DocumentModel.category == category)

        if search:
            pattern = f"%{escape_like(search)}%"
            query = query.where(
                or_(
                    DocumentModel.title.ilike(pattern, escape=LIKE_ESCAPE),
                    DocumentModel.content.ilike(pattern, escape=LIKE_ESCAPE)
                )
            )

        result = await self.session.execute(
            query.order_by(DocumentModel.updated_at.desc(), DocumentModel.uuid)
            .execution_options(populate_existing=True)
        )
        return [self._to_domain(doc) for doc in result.scalars().all()]

    @storage_errors
    async def list_categories(self, owner_id: uuid.UUID) -> List[str]:
        """Различные категории документов владельца в порядке появления"""
        result = await self.session.execute(
            select(DocumentModel.category)
            .where(DocumentModel.owner_id == owner_id)
            .order_by(DocumentModel.created_at, DocumentModel.uuid)
        )
        return list(dict.fromkeys(result.scalars().all()))

    @storage_errors
    async def update(self, document: "Document") -> Optional["Document"]:
        """Обновление документа, None если у владельца его нет"""
        stmt = (
            update(DocumentModel)
            .where(
                and_(
                    DocumentModel.uuid == document.uuid,
                    DocumentModel.owner_id == document.owner_id
                )
            )
            .values(
                title=document.title,
                content=document.content,
                category=document.category,
                tags=list(document.tags),
                updated_at=document.updated_at
            )
        )

        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            await self.session.rollback()
            return None

        # Перечитываем в той же транзакции, фиксируем последним шагом
        updated_document = await self._select_for_owner(document.uuid, document.owner_id)
        await self.session.commit()
        return updated_document

    @storage_errors
    async def delete_for_owner(self, document_uuid: uuid.UUID, owner_id: uuid.UUID) -> bool:
        """Удаление документа владельца"""
        stmt = delete(DocumentModel).where(
            and_(
                DocumentModel.uuid == document_uuid,
                DocumentModel.owner_id == owner_id
            )
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    def _to_domain(self, db_document: DocumentModel) -> "Document":
        """Преобразование модели БД в доменную сущность"""
        from docsearch.domains.documents.entities import Document

        return Document(
            uuid=db_document.uuid,
            owner_id=db_document.owner_id,
            title=db_document.title,
            content=db_document.content,
            category=db_document.category,
            tags=db_document.tags or [],
            created_at=db_document.created_at,
            updated_at=db_document.updated_at
        )

"""Состояние форм создания и редактирования документа.

Формы не зависят от способа отображения: они хранят введённые значения,
проверяют их перед отправкой и возвращают сообщение для пользователя.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from docsearch.core.errors import DocumentError, ValidationFailed
from docsearch.domains.documents.entities import Document, DEFAULT_CATEGORY
from docsearch.domains.documents.schemas import (
    DocumentCreate, DocumentUpdate, validate_document_input
)
from docsearch.domains.documents.services import DocumentService
from docsearch.domains.documents.tags import TagList
from docsearch.domains.identity.entities import Identity

logger = logging.getLogger(__name__)

CREATED_MESSAGE = "Document created successfully!"
CREATE_FAILED_MESSAGE = "Failed to create document"
UPDATED_MESSAGE = "Document updated!"
UPDATE_FAILED_MESSAGE = "Failed to update document"
DELETED_MESSAGE = "Document deleted"
DELETE_FAILED_MESSAGE = "Failed to delete document"
PENDING_MESSAGE = "Saving..."
CONFIRM_DELETE_MESSAGE = "Delete this document?"


@dataclass
class FormResult:
    ok: bool
    message: str
    document: Optional[Document] = None


class DocumentForm:
    """Форма нового документа"""

    def __init__(self):
        self.title = ""
        self.content = ""
        self.category = DEFAULT_CATEGORY
        self.tag_input = ""
        self.tags = TagList()
        self.is_pending = False

    def add_tag(self) -> bool:
        """Добавление тега из поля ввода; поле очищается только если тег добавлен"""
        added = self.tags.add(self.tag_input)
        if added:
            self.tag_input = ""
        return added

    def remove_tag(self, tag: str) -> bool:
        return self.tags.remove(tag)

    def validate(self) -> DocumentCreate:
        return validate_document_input(DocumentCreate, {
            "title": self.title,
            "content": self.content,
            "category": self.category,
            "tags": self.tags.to_list(),
        })

    async def submit(self, service: DocumentService, identity: Optional[Identity]) -> FormResult:
        if self.is_pending:
            return FormResult(ok=False, message=PENDING_MESSAGE)

        try:
            document_data = self.validate()
        except ValidationFailed as e:
            return FormResult(ok=False, message=e.message)

        self.is_pending = True
        try:
            document = await service.create_document(identity, document_data)
        except DocumentError as e:
            logger.warning(f"Document creation failed: {e!r}")
            return FormResult(ok=False, message=CREATE_FAILED_MESSAGE)
        finally:
            self.is_pending = False

        return FormResult(ok=True, message=CREATED_MESSAGE, document=document)


class DocumentEditor:
    """Просмотр документа с режимом редактирования и удалением"""

    def __init__(self, document: Optional[Document] = None):
        self.document = document
        self.is_editing = False
        self.is_pending = False
        self.is_confirming_delete = False
        self.title = ""
        self.content = ""
        self.category = ""
        self.tag_input = ""
        self.tags = TagList()

    def begin(self, document: Optional[Document] = None) -> bool:
        """Переход в режим редактирования с текущими значениями документа"""
        if document is not None:
            self.document = document
        if self.document is None:
            return False

        self.title = self.document.title
        self.content = self.document.content
        self.category = self.document.category
        self.tag_input = ""
        self.tags = TagList(self.document.tags)
        self.is_editing = True
        return True

    def cancel(self) -> None:
        self.is_editing = False

    def add_tag(self) -> bool:
        added = self.tags.add(self.tag_input)
        if added:
            self.tag_input = ""
        return added

    def remove_tag(self, tag: str) -> bool:
        return self.tags.remove(tag)

    async def save(self, service: DocumentService, identity: Optional[Identity]) -> FormResult:
        if self.document is None or not self.is_editing:
            return FormResult(ok=False, message=UPDATE_FAILED_MESSAGE)
        if self.is_pending:
            return FormResult(ok=False, message=PENDING_MESSAGE)

        try:
            update_data = validate_document_input(DocumentUpdate, {
                "title": self.title,
                "content": self.content,
                "category": self.category,
                "tags": self.tags.to_list(),
            })
        except ValidationFailed as e:
            return FormResult(ok=False, message=e.message)

        self.is_pending = True
        try:
            document = await service.update_document(identity, self.document.uuid, update_data)
        except DocumentError as e:
            logger.warning(f"Document update failed: {e!r}")
            return FormResult(ok=False, message=UPDATE_FAILED_MESSAGE)
        finally:
            self.is_pending = False

        self.document = document
        self.is_editing = False
        return FormResult(ok=True, message=UPDATED_MESSAGE, document=document)

    def request_delete(self) -> FormResult:
        """Запрос подтверждения удаления"""
        if self.document is None:
            return FormResult(ok=False, message=DELETE_FAILED_MESSAGE)

        self.is_confirming_delete = True
        return FormResult(ok=True, message=CONFIRM_DELETE_MESSAGE)

    def cancel_delete(self) -> None:
        self.is_confirming_delete = False

    async def delete(self, service: DocumentService, identity: Optional[Identity]) -> FormResult:
        """Удаление после подтверждения через request_delete()"""
        if self.document is None:
            return FormResult(ok=False, message=DELETE_FAILED_MESSAGE)
        if not self.is_confirming_delete:
            return FormResult(ok=False, message=CONFIRM_DELETE_MESSAGE)
        if self.is_pending:
            return FormResult(ok=False, message=PENDING_MESSAGE)

        self.is_pending = True
        try:
            await service.delete_document(identity, self.document.uuid)
        except DocumentError as e:
            logger.warning(f"Document deletion failed: {e!r}")
            return FormResult(ok=False, message=DELETE_FAILED_MESSAGE)
        finally:
            self.is_pending = False

        self.is_confirming_delete = False
        return FormResult(ok=True, message=DELETED_MESSAGE)

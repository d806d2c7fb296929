from pydantic import BaseModel, Field, ValidationError, field_validator, ConfigDict
from pydantic_core import PydanticCustomError
from typing import Any, Dict, Optional, List, Type, TypeVar
import uuid
from datetime import datetime

from docsearch.core.errors import ValidationFailed
from docsearch.domains.documents.entities import DEFAULT_CATEGORY
from docsearch.domains.documents.sorting import SortKey
from docsearch.domains.documents.tags import TagList

TITLE_MAX_LENGTH = 200
CATEGORY_MAX_LENGTH = 50

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def _check_title(v: str) -> str:
    if not v:
        raise PydanticCustomError("title_required", "Title is required")
    if len(v) > TITLE_MAX_LENGTH:
        raise PydanticCustomError(
            "title_too_long", f"Title must be less than {TITLE_MAX_LENGTH} characters"
        )
    return v


def _check_content(v: str) -> str:
    if not v:
        raise PydanticCustomError("content_required", "Content is required")
    return v


def _check_category(v: str) -> str:
    if not v:
        raise PydanticCustomError("category_required", "Category is required")
    if len(v) > CATEGORY_MAX_LENGTH:
        raise PydanticCustomError(
            "category_too_long", f"Category must be less than {CATEGORY_MAX_LENGTH} characters"
        )
    return v


class DocumentCreate(BaseModel):
    """Схема для создания документа"""
    title: str = Field("", validate_default=True)
    content: str = Field("", validate_default=True)
    category: str = DEFAULT_CATEGORY
    tags: List[str] = Field(default_factory=list)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return _check_title(v)

    @field_validator('content')
    @classmethod
    def validate_content(cls, v):
        return _check_content(v)

    @field_validator('category')
    @classmethod
    def validate_category(cls, v):
        return _check_category(v)

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v):
        return TagList(v).to_list()


class DocumentUpdate(BaseModel):
    """Схема для обновления документа, передаются только изменяемые поля"""
    title: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return _check_title(v) if v is not None else v

    @field_validator('content')
    @classmethod
    def validate_content(cls, v):
        return _check_content(v) if v is not None else v

    @field_validator('category')
    @classmethod
    def validate_category(cls, v):
        return _check_category(v) if v is not None else v

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v):
        return TagList(v).to_list() if v is not None else v

    def changes(self) -> Dict[str, Any]:
        """Явно переданные поля"""
        return self.model_dump(exclude_unset=True, exclude_none=True)


def validate_document_input(schema: Type[SchemaT], data: Dict[str, Any]) -> SchemaT:
    """Проверка полей документа до отправки в хранилище.

    Raises:
        ValidationFailed: с сообщением первого нарушенного правила.
    """
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        field = str(first["loc"][0]) if first["loc"] else None
        raise ValidationFailed(first["msg"], field=field) from e


class DocumentResponse(BaseModel):
    """Схема для ответа с данными документа"""
    uuid: uuid.UUID
    owner_id: uuid.UUID
    title: str
    content: str
    category: str
    tags: List[str]
    tag_count: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class HighlightSegmentResponse(BaseModel):
    """Фрагмент текста с отметкой совпадения с поисковым запросом"""
    text: str
    matched: bool

    model_config = ConfigDict(from_attributes=True)


class DocumentCardResponse(BaseModel):
    """Карточка документа в списке результатов"""
    uuid: uuid.UUID
    title: str
    title_segments: List[HighlightSegmentResponse]
    snippet: str
    snippet_segments: List[HighlightSegmentResponse]
    category: str
    tags: List[str]
    tag_count: int
    created_at: datetime
    updated_at: datetime
    updated_label: str


class DocumentSearchResponse(BaseModel):
    """Схема для ответа с результатами поиска"""
    documents: List[DocumentCardResponse]
    total_found: int
    query: str
    category: str
    sort: SortKey


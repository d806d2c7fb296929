from datetime import datetime
from typing import List, Optional

from docsearch.domains.documents.entities import Document, ALL_CATEGORIES
from docsearch.domains.documents.highlight import highlight
from docsearch.domains.documents.schemas import (
    DocumentCardResponse, DocumentSearchResponse, HighlightSegmentResponse
)
from docsearch.domains.documents.services import DocumentService
from docsearch.domains.documents.sorting import SortKey, sort_documents
from docsearch.domains.identity.entities import Identity


def format_date(value: datetime) -> str:
    """Дата в виде "Oct 18, 2026" """
    return f"{value:%b} {value.day}, {value.year}"


def _segments(text: str, query: str) -> List[HighlightSegmentResponse]:
    return [HighlightSegmentResponse.model_validate(segment) for segment in highlight(text, query)]


def build_card(document: Document, query: str = "") -> DocumentCardResponse:
    """Карточка документа с подсветкой поискового запроса"""
    snippet = document.get_snippet()
    return DocumentCardResponse(
        uuid=document.uuid,
        title=document.title,
        title_segments=_segments(document.title, query),
        snippet=snippet,
        snippet_segments=_segments(snippet, query),
        category=document.category,
        tags=document.tags,
        tag_count=document.tag_count,
        created_at=document.created_at,
        updated_at=document.updated_at,
        updated_label=format_date(document.updated_at)
    )


class DocumentSearchView:
    """Список документов: поиск, фильтр по категории и сортировка"""

    def __init__(self, service: DocumentService):
        self.service = service

    async def search(
        self,
        identity: Optional[Identity],
        search: str = "",
        category: str = ALL_CATEGORIES,
        sort: SortKey = SortKey.UPDATED
    ) -> DocumentSearchResponse:
        documents = await self.service.list_documents(identity, search=search, category=category)
        ordered = sort_documents(documents, sort)

        return DocumentSearchResponse(
            documents=[build_card(doc, search) for doc in ordered],
            total_found=len(ordered),
            query=search,
            category=category or ALL_CATEGORIES,
            sort=sort
        )

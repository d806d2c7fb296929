from docsearch.domains.documents.entities import Document, ALL_CATEGORIES, DEFAULT_CATEGORY
from docsearch.domains.documents.schemas import (
    DocumentCreate, DocumentUpdate, DocumentResponse, DocumentCardResponse,
    DocumentSearchResponse, HighlightSegmentResponse,
    validate_document_input
)
from docsearch.domains.documents.services import DocumentService
from docsearch.domains.documents.sorting import SortKey, sort_documents
from docsearch.domains.documents.tags import TagList
from docsearch.domains.documents.highlight import HighlightSegment, highlight
from docsearch.domains.documents.views import DocumentSearchView, build_card
from docsearch.domains.documents.forms import DocumentForm, DocumentEditor, FormResult

__all__ = [
    "Document", "ALL_CATEGORIES", "DEFAULT_CATEGORY",
    "DocumentCreate", "DocumentUpdate", "DocumentResponse", "DocumentCardResponse",
    "DocumentSearchResponse", "HighlightSegmentResponse",
    "validate_document_input",
    "DocumentService",
    "SortKey", "sort_documents",
    "TagList",
    "HighlightSegment", "highlight",
    "DocumentSearchView", "build_card",
    "DocumentForm", "DocumentEditor", "FormResult"
]

from fastapi import APIRouter, Depends, HTTPException, status, Query, Response
from typing import List, Optional
import uuid

from docsearch.api.deps import get_current_identity, get_document_service
from docsearch.domains.documents.entities import ALL_CATEGORIES
from docsearch.domains.documents.schemas import (
    DocumentCreate, DocumentUpdate, DocumentResponse, DocumentSearchResponse
)
from docsearch.domains.documents.services import DocumentService
from docsearch.domains.documents.sorting import SortKey
from docsearch.domains.documents.views import DocumentSearchView
from docsearch.domains.identity.entities import Identity

router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("", response_model=DocumentSearchResponse)
async def search_documents(
    search: str = Query(""),
    category: str = Query(ALL_CATEGORIES),
    sort: SortKey = Query(SortKey.UPDATED),
    identity: Optional[Identity] = Depends(get_current_identity),
    document_service: DocumentService = Depends(get_document_service)
):
    """Список документов с поиском, фильтром по категории и сортировкой"""
    view = DocumentSearchView(document_service)
    return await view.search(identity, search=search, category=category, sort=sort)


@router.get("/categories", response_model=List[str])
async def get_categories(
    identity: Optional[Identity] = Depends(get_current_identity),
    document_service: DocumentService = Depends(get_document_service)
):
    """Категории документов пользователя"""
    return await document_service.list_categories(identity)


@router.get("/{document_uuid}", response_model=DocumentResponse)
async def get_document(
    document_uuid: uuid.UUID,
    identity: Optional[Identity] = Depends(get_current_identity),
    document_service: DocumentService = Depends(get_document_service)
):
    """Получение документа по UUID"""
    document = await document_service.get_document(identity, document_uuid)

    if not document:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found"
        )

    return DocumentResponse.model_validate(document)


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    document_data: DocumentCreate,
    identity: Optional[Identity] = Depends(get_current_identity),
    document_service: DocumentService = Depends(get_document_service)
):
    """Создание нового документа"""
    document = await document_service.create_document(identity, document_data)
    return DocumentResponse.model_validate(document)


@router.put("/{document_uuid}", response_model=DocumentResponse)
async def update_document(
    document_uuid: uuid.UUID,
    update_data: DocumentUpdate,
    identity: Optional[Identity] = Depends(get_current_identity),
    document_service: DocumentService = Depends(get_document_service)
):
    """Обновление документа"""
    document = await document_service.update_document(identity, document_uuid, update_data)
    return DocumentResponse.model_validate(document)


@router.delete("/{document_uuid}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_uuid: uuid.UUID,
    identity: Optional[Identity] = Depends(get_current_identity),
    document_service: DocumentService = Depends(get_document_service)
):
    """Удаление документа"""
    await document_service.delete_document(identity, document_uuid)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from docsearch.core.cache import QueryCache
from docsearch.core.db import get_db
from docsearch.domains.documents.services import DocumentService
from docsearch.domains.identity.entities import Identity
from docsearch.domains.identity.services import IdentityService

security = HTTPBearer(auto_error=False)


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> Optional[Identity]:
    """Identity из bearer-токена; None, если токена нет или он недействителен"""
    if credentials is None:
        return None

    identity_service = IdentityService(db)
    return await identity_service.get_identity_from_token(credentials.credentials)


def get_query_cache(request: Request) -> QueryCache:
    return request.app.state.query_cache


def get_document_service(
    db: AsyncSession = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
) -> DocumentService:
    return DocumentService(db, cache)

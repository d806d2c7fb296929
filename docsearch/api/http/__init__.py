from docsearch.api.http.auth import router as auth_router
from docsearch.api.http.documents import router as documents_router

__all__ = [
    "auth_router",
    "documents_router"
]

from docsearch.db.repositories.user_repository import UserRepository
from docsearch.db.repositories.document_repository import DocumentRepository

__all__ = [
    "UserRepository",
    "DocumentRepository",
]

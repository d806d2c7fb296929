from docsearch.db.models.user import User
from docsearch.db.models.document import Document

__all__ = [
    "User",
    "Document",
]

import enum
import unicodedata
from typing import Iterable, List, Tuple

from docsearch.domains.documents.entities import Document


class SortKey(str, enum.Enum):
    UPDATED = "updated"
    CREATED = "created"
    TITLE = "title"


def title_collation_key(title: str) -> Tuple[str, str]:
    """Ключ сравнения заголовков, близкий к локализованному сравнению строк.

    Диакритика и регистр влияют на порядок только при равенстве базовых букв.
    """
    decomposed = unicodedata.normalize("NFKD", title)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), title


def sort_documents(documents: Iterable[Document], key: SortKey = SortKey.UPDATED) -> List[Document]:
    """Новый список документов, упорядоченный по выбранному ключу.

    Сортировка устойчивая: документы с равными ключами остаются в исходном порядке.
    """
    key = SortKey(key)

    if key is SortKey.TITLE:
        return sorted(documents, key=lambda doc: title_collation_key(doc.title))

    if key is SortKey.CREATED:
        return sorted(documents, key=lambda doc: doc.created_at, reverse=True)

    return sorted(documents, key=lambda doc: doc.updated_at, reverse=True)

from typing import Optional


class DocumentError(Exception):
    """Базовая ошибка операций с документами"""

    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class Unauthenticated(DocumentError):
    """Нет активной сессии пользователя"""

    status_code = 401

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class NotFound(DocumentError):
    """Документ не найден среди документов пользователя"""

    status_code = 404

    def __init__(self, message: str = "Document not found"):
        super().__init__(message)


class ValidationFailed(DocumentError):
    """Нарушено ограничение на поле документа (первое из нарушенных)"""

    status_code = 422

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class RemoteFailure(DocumentError):
    """Хранилище отклонило операцию или не смогло её выполнить"""

    status_code = 503

    def __init__(self, message: str = "Storage operation failed"):
        super().__init__(message)

import uuid

from sqlalchemy import Column, DateTime, UUID

from docsearch.core.clock import utcnow
from docsearch.core.db import Base


class BaseModel(Base):
    """Общие колонки: первичный ключ и временные метки"""
    __abstract__ = True

    uuid = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

from sqlalchemy import Column, String, Text, ForeignKey, UUID, JSON, Index
from sqlalchemy.orm import relationship

from docsearch.db.base import BaseModel


class Document(BaseModel):
    __tablename__ = "documents"

    owner_id = Column(UUID(as_uuid=True), ForeignKey("users.uuid", ondelete="CASCADE"), nullable=False)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, default="General")
    tags = Column(JSON, nullable=False, default=list)

    # Relationships
    owner = relationship("User", back_populates="documents")

    __table_args__ = (
        Index("ix_documents_owner_updated", "owner_id", "updated_at"),
        Index("ix_documents_owner_category", "owner_id", "category"),
    )

"""Question/answer pair an assistant can reply with."""

from typing import Optional

from sqlalchemy import BigInteger, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.config import settings
from app.models.base import BaseModel
from app.utils.vector_types import Vector

EMBEDDING_INDEX_NAME = "vector_idx_knowledge_entries_embedding"


class AssistantResponse(BaseModel):
    """Knowledge entry matched against incoming questions by embedding.

    Attributes:
        question: Canonical question text
        answer: Answer returned to the customer
        embedding: Question embedding; a JSON array instead of ``vector`` on
            databases without the vector extension
        assistant_id: Owning assistant
        document_id: Source document the entry was generated from (nullable)
        account_id: Owning account

    Example:
        response = AssistantResponse(
            question="How do I reset my password?",
            answer="Use the 'Forgot password' link on the login page.",
            assistant_id=1,
            account_id=1,
        )
    """

    __tablename__ = "captain_assistant_responses"
    __table_args__ = (
        Index(
            EMBEDDING_INDEX_NAME,
            "embedding",
            postgresql_using="ivfflat",
            postgresql_ops={"embedding": "vector_l2_ops"},
        ),
    )

    question: Mapped[str] = mapped_column(String, nullable=False)
    answer: Mapped[str] = mapped_column(Text, nullable=False)
    embedding: Mapped[Optional[list[float]]] = mapped_column(
        Vector(settings.EMBEDDING_DIMENSIONS), nullable=True
    )
    assistant_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    document_id: Mapped[Optional[int]] = mapped_column(
        BigInteger, nullable=True, index=True
    )
    account_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)

    def __repr__(self) -> str:
        """String representation of the response."""
        return (
            f"AssistantResponse(id={self.id}, assistant_id={self.assistant_id}, "
            f"question={self.question[:50]!r})"
        )

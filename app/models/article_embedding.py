"""Legacy help-center article embeddings."""

from typing import Optional

from sqlalchemy import BigInteger, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.config import settings
from app.models.base import BaseModel
from app.utils.vector_types import Vector


class ArticleEmbedding(BaseModel):
    """Embedding of a search term for a help-center article.

    Predates the captain tables; the migration only creates the table when it
    is missing.

    Attributes:
        article_id: Help-center article
        term: Text the embedding was computed from
        embedding: Vector embedding (JSON array without the vector extension)
    """

    __tablename__ = "article_embeddings"
    __table_args__ = (
        Index(
            "ix_article_embeddings_embedding",
            "embedding",
            postgresql_using="ivfflat",
            postgresql_ops={"embedding": "vector_l2_ops"},
        ),
    )

    article_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    term: Mapped[str] = mapped_column(Text, nullable=False)
    embedding: Mapped[Optional[list[float]]] = mapped_column(
        Vector(settings.EMBEDDING_DIMENSIONS), nullable=True
    )

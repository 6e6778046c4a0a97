"""Knowledge source document attached to an assistant."""

from typing import Optional

from sqlalchemy import BigInteger, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


class CaptainDocument(BaseModel):
    """External page or file an assistant learns answers from.

    Each external link is stored once per assistant.

    Attributes:
        name: Document title
        external_link: URL the content was fetched from
        content: Extracted text (nullable until crawled)
        assistant_id: Owning assistant
        account_id: Owning account
    """

    __tablename__ = "captain_documents"
    __table_args__ = (
        Index(
            "ix_captain_documents_assistant_id_external_link",
            "assistant_id",
            "external_link",
            unique=True,
        ),
    )

    name: Mapped[str] = mapped_column(String, nullable=False)
    external_link: Mapped[str] = mapped_column(String, nullable=False)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    assistant_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    account_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)

    def __repr__(self) -> str:
        """String representation of the document."""
        return (
            f"CaptainDocument(id={self.id}, assistant_id={self.assistant_id}, "
            f"name={self.name!r}, external_link={self.external_link!r})"
        )

"""Conversation model."""

from typing import Optional

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel
from app.models.label_cache import LabelCacheMixin, install_label_cache


class Conversation(LabelCacheMixin, BaseModel):
    """Support conversation belonging to an account.

    Attributes:
        account_id: Owning account
        status: Conversation state ("open", "resolved", ...)
        cached_label_list: Comma-separated labels, see ``label_list``
    """

    __tablename__ = "conversations"

    account_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, server_default="open"
    )
    cached_label_list: Mapped[Optional[str]] = mapped_column(String, nullable=True)


install_label_cache(Conversation)

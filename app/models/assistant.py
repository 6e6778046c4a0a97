"""Captain assistant model."""

from typing import Optional

from sqlalchemy import BigInteger, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


class Assistant(BaseModel):
    """AI assistant configured for an account.

    Names are unique within an account.

    Attributes:
        name: Display name of the assistant
        account_id: Owning account
        description: Free-form description (nullable)
    """

    __tablename__ = "captain_assistants"
    __table_args__ = (
        Index(
            "ix_captain_assistants_account_id_name",
            "account_id",
            "name",
            unique=True,
        ),
    )

    name: Mapped[str] = mapped_column(String, nullable=False)
    account_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(String, nullable=True)

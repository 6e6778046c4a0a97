"""Data models package."""

from app.models.article_embedding import ArticleEmbedding
from app.models.assistant import Assistant
from app.models.assistant_response import AssistantResponse
from app.models.base import BaseModel
from app.models.captain_document import CaptainDocument
from app.models.conversation import Conversation
from app.models.label_cache import LabelCacheMixin, install_label_cache

__all__ = [
    "BaseModel",
    "LabelCacheMixin",
    "install_label_cache",
    "Conversation",
    "Assistant",
    "CaptainDocument",
    "AssistantResponse",
    "ArticleEmbedding",
]

"""Chat message repository."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select

from .base import BaseRepository
from ..database import ChatMessage


class ChatMessageRepository(BaseRepository[ChatMessage]):
    """Repository for the chat log. Append-only."""

    async def append(self, account_id: Optional[UUID], message: str) -> ChatMessage:
        """Store one chat turn."""
        return await self.create(account_id=account_id, message=message)

    async def get_log(self, limit: int = 100) -> List[ChatMessage]:
        """Latest turns in sequence order."""
        query = select(ChatMessage).order_by(ChatMessage.id.desc()).limit(limit)
        result = await self.session.execute(query)
        messages = list(result.scalars().all())

        # Return in chronological order
        return list(reversed(messages))

    async def count(self) -> int:
        """Count stored turns."""
        result = await self.session.execute(select(func.count(ChatMessage.id)))
        return result.scalar_one()

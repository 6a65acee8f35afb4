"""Chat proxy: persist the prompt, ask the completion API, persist the reply."""

from typing import Optional
from uuid import UUID

from loguru import logger

from ..completion_client import CompletionClient
from ..repositories import ChatMessageRepository


class ChatService:
    """Forwards prompts to the completion API and logs both turns."""

    def __init__(
        self,
        message_repo: ChatMessageRepository,
        completion_client: CompletionClient,
    ):
        self.message_repo = message_repo
        self.completion_client = completion_client

    async def send(self, account_id: Optional[UUID], prompt: str) -> str:
        """
        Run one chat exchange and return the reply text.

        The prompt is committed before the external call, so a failed
        completion leaves it stored without a reply. Nothing is retried.

        Raises:
            UpstreamError: The completion API failed
        """
        await self.message_repo.append(account_id, prompt)
        await self.message_repo.commit()

        try:
            text = await self.completion_client.complete(prompt)
        except Exception:
            logger.warning(f"No reply stored for prompt from account {account_id}")
            raise

        await self.message_repo.append(None, text)
        await self.message_repo.commit()

        return text

"""Client for the external text-completion API."""

from typing import Optional

import httpx
from loguru import logger

from .config import Settings
from .core.exceptions import UpstreamError


class CompletionClient:
    """Client for an OpenAI-style ``/completions`` endpoint."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        temperature: float = 0.0,
        max_tokens: int = 3000,
        timeout: float = 120.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize completion client.

        Args:
            base_url: API base URL, e.g. ``https://api.openai.com/v1``
            api_key: Bearer key for the API
            model: Completion model name
            temperature: Sampling temperature
            max_tokens: Upper bound on the reply length
            timeout: Request timeout in seconds
            http_client: Pre-built client (tests pass one with a mock transport)
        """
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = http_client or httpx.AsyncClient(timeout=timeout)
        self._headers = {"Authorization": f"Bearer {api_key}"}

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "CompletionClient":
        return cls(
            base_url=settings.COMPLETION_API_URL,
            api_key=settings.COMPLETION_API_KEY,
            model=settings.COMPLETION_MODEL,
            temperature=settings.COMPLETION_TEMPERATURE,
            max_tokens=settings.COMPLETION_MAX_TOKENS,
            timeout=settings.COMPLETION_TIMEOUT_SECONDS,
            http_client=http_client,
        )

    async def complete(self, prompt: str) -> str:
        """Return the completion text for ``prompt``.

        Raises:
            UpstreamError: Transport failure, timeout, error status, or a
                response without ``choices[0].text``
        """
        payload = {
            "model": self.model,
            "prompt": prompt,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

        try:
            response = await self._client.post(
                f"{self.base_url}/completions",
                json=payload,
                headers=self._headers,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            logger.error(f"Completion request timed out: {e}")
            raise UpstreamError("Completion API timed out")
        except httpx.HTTPStatusError as e:
            logger.error(f"Completion API returned {e.response.status_code}: {e.response.text}")
            raise UpstreamError(f"Completion API returned status {e.response.status_code}")
        except httpx.HTTPError as e:
            logger.error(f"Completion request failed: {e}")
            raise UpstreamError("Completion API unreachable")
        except ValueError as e:
            logger.error(f"Completion API returned invalid JSON: {e}")
            raise UpstreamError("Malformed completion response")

        try:
            text = data["choices"][0]["text"]
        except (KeyError, IndexError, TypeError):
            logger.error(f"Completion response missing choices: {data!r}")
            raise UpstreamError("Malformed completion response")

        if not isinstance(text, str):
            raise UpstreamError("Malformed completion response")

        return text.strip()

    async def close(self) -> None:
        await self._client.aclose()

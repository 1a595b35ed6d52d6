"""
Chat completion client
- httpx.AsyncClient based, bearer auth
- single request per call: no retry, no streaming
- OpenAI-compatible /chat/completions endpoint
"""
from typing import Any, Optional

import httpx

from src.utils.logger import logger


def extract_content(data: Any) -> str:
    """First choice's message text, or "" when the response has an unexpected shape."""
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    if not isinstance(first, dict):
        return ""
    message = first.get("message")
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    return content if isinstance(content, str) else ""


class CompletionClient:
    """Thin async client for a chat completion service."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-4o",
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            transport=transport,
        )

    async def close(self):
        await self._client.aclose()

    async def complete(
        self,
        messages: list[dict],
        temperature: float,
        max_tokens: int,
    ) -> str:
        """
        Send one chat completion request and return the generated text.
        Raises httpx.HTTPStatusError on non-2xx and ValueError on a non-JSON body.
        """
        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        logger.debug(f"Completion request: model={self.model}, messages={len(messages)}")

        response = await self._client.post("/chat/completions", json=payload)
        response.raise_for_status()

        return extract_content(response.json())

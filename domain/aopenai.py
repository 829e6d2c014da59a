import json
from typing import Any, Self

import httpx


BASE_URL = "https://api.openai.com/v1/"
DEFAULT_MODEL = "gpt-4o-mini"
MAX_TOKENS = 1200
TIMEOUT = 30.0


class ChatError(Exception):
    pass


def openai_client(
    token: str,
    *,
    base_url: str = BASE_URL,
    timeout: float = TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    try:
        return httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )
    except httpx.InvalidURL as e:
        raise ChatError(f"Invalid completion service url {base_url!r}.") from e


class ChatMsg:
    def __init__(self, *, role: str, content: str) -> None:
        self.role = role
        self.content = content

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}


class Chat:
    """A single JSON-mode exchange with a chat completion endpoint."""

    @classmethod
    def from_system_prompt(
        cls,
        prompt: str,
        *,
        client: httpx.AsyncClient,
        model: str = DEFAULT_MODEL,
    ) -> Self:
        return cls(
            client=client,
            model=model,
            messages=[ChatMsg(role="system", content=prompt)],
        )

    def __init__(
        self,
        *,
        client: httpx.AsyncClient,
        model: str = DEFAULT_MODEL,
        messages: list[ChatMsg] | None = None,
        max_tokens: int = MAX_TOKENS,
    ) -> None:
        self.model = model
        self._messages: list[ChatMsg] = [] if messages is None else messages
        self.max_tokens = max_tokens
        self._client = client

    def to_dict(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [m.to_dict() for m in self._messages],
            "max_tokens": self.max_tokens,
            "response_format": {"type": "json_object"},
        }

    async def _chat_raw(self, data: dict[str, Any]) -> dict[str, Any]:
        try:
            resp = await self._client.post("chat/completions", json=data)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ChatError(f"Request to completion service failed. {e!r}") from e
        if not resp.is_success:
            raise ChatError(f"Completion service returned {resp.status_code}.")
        try:
            body = resp.json()
        except ValueError as e:
            raise ChatError("Completion service returned a non JSON body.") from e
        if not isinstance(body, dict) or "error" in body:
            raise ChatError(f"Problem creating completion. {body}")
        return body

    async def chat_json(self, msg: str) -> dict[str, Any]:
        """Send `msg` and decode the first choice's content as a JSON object."""
        self._messages.append(ChatMsg(role="user", content=msg))
        body = await self._chat_raw(self.to_dict())
        try:
            content = body["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ChatError("Completion envelope is missing choices.") from e
        if not isinstance(content, str):
            raise ChatError("Completion content is not a string.")
        self._messages.append(ChatMsg(role="assistant", content=content))
        try:
            data = json.loads(content)
        except ValueError as e:
            raise ChatError("Completion content is not JSON.") from e
        if not isinstance(data, dict):
            raise ChatError("Completion content is not a JSON object.")
        return data

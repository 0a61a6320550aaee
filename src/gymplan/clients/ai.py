"""Client for the generative AI service (vision and text, JSON answers)."""

import base64
import json
import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from openai import AsyncOpenAI

logger = logging.getLogger(__name__)


@dataclass
class ImageInput:
    """An uploaded image to send to the model."""

    data: bytes
    mime_type: str

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


@runtime_checkable
class AIClient(Protocol):
    """What the services need from an AI backend.

    Implementations return the raw answer text; callers treat it as
    untrusted and parse it themselves.
    """

    async def complete_json(
        self,
        prompt: str,
        images: list[ImageInput] | None = None,
        schema: dict | None = None,
    ) -> str:
        ...


class OpenAIClient:
    """AIClient backed by an OpenAI-compatible chat completions API."""

    SYSTEM_PROMPT = (
        "You are a fitness assistant for a gym app. "
        "Always answer with a single JSON object and nothing else."
    )

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        timeout: float = 60.0,
        base_url: str | None = None,
    ):
        self.client = AsyncOpenAI(api_key=api_key, timeout=timeout, base_url=base_url)
        self.model = model

    def _system_prompt(self, schema: dict | None) -> str:
        if schema is None:
            return self.SYSTEM_PROMPT
        return (
            f"{self.SYSTEM_PROMPT}\n"
            f"The JSON object must match this JSON schema:\n{json.dumps(schema)}"
        )

    async def complete_json(
        self,
        prompt: str,
        images: list[ImageInput] | None = None,
        schema: dict | None = None,
    ) -> str:
        content: list[dict] = [{"type": "text", "text": prompt}]
        for image in images or []:
            content.append(
                {"type": "image_url", "image_url": {"url": image.to_data_url()}}
            )

        logger.debug(
            "Requesting %s with %d image(s)", self.model, len(images or [])
        )
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": self._system_prompt(schema)},
                {"role": "user", "content": content},
            ],
            response_format={"type": "json_object"},
        )
        return response.choices[0].message.content or ""

    async def close(self) -> None:
        await self.client.close()


def create_ai_client(
    api_key: str | None, model: str = "gpt-4o-mini", timeout: float = 60.0
) -> OpenAIClient | None:
    """Build the process-wide client, or None when no key is configured."""
    if not api_key:
        logger.warning("OPENAI_API_KEY not set; AI features are disabled")
        return None
    return OpenAIClient(api_key=api_key, model=model, timeout=timeout)

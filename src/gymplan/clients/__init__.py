"""External service clients."""

from .ai import AIClient, ImageInput, OpenAIClient, create_ai_client

__all__ = ["AIClient", "create_ai_client", "ImageInput", "OpenAIClient"]

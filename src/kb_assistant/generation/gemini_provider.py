"""Google Gemini streaming provider using the google-genai SDK."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import aclosing

from google import genai
from google.genai import types

from kb_assistant.exceptions import GenerationError
from kb_assistant.observability.logger import get_logger

logger = get_logger("gemini")


class GeminiProvider:
    """One client and one default config per model, shared by all queries.

    The default config is never mutated. A call asking for different sampling
    settings gets its own one-shot copy.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        temperature: float = 0.7,
        max_tokens: int = 500,
    ) -> None:
        self._client = genai.Client(api_key=api_key)
        self._model = model
        self._default_config = types.GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=max_tokens,
        )
        logger.info("gemini_initialized", model=model)

    @property
    def model(self) -> str:
        return self._model

    def config_for(self, temperature: float, max_tokens: int) -> types.GenerateContentConfig:
        default = self._default_config
        if temperature == default.temperature and max_tokens == default.max_output_tokens:
            return default
        logger.debug("one_shot_config", temperature=temperature, max_tokens=max_tokens)
        return default.model_copy(
            update={"temperature": temperature, "max_output_tokens": max_tokens}
        )

    async def stream(
        self,
        prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> AsyncIterator[str]:
        config = self.config_for(temperature, max_tokens)
        try:
            response = await self._client.aio.models.generate_content_stream(
                model=self._model,
                contents=prompt,
                config=config,
            )
            async with aclosing(response) as chunks:
                async for chunk in chunks:
                    if chunk.text:
                        yield chunk.text
        except GenerationError:
            raise
        except Exception as e:
            raise GenerationError(f"Gemini generation failed: {e}") from e

"""Tests for the Gemini provider's config isolation and error wrapping."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from kb_assistant.exceptions import GenerationError
from kb_assistant.generation.gemini_provider import GeminiProvider


class FakeModels:
    def __init__(self, texts: list[str | None], error: Exception | None = None) -> None:
        self.texts = texts
        self.error = error
        self.configs = []
        self.closed = False

    async def generate_content_stream(self, model, contents, config):
        self.configs.append(config)
        if self.error is not None:
            raise self.error

        async def chunks():
            try:
                for text in self.texts:
                    yield SimpleNamespace(text=text)
            finally:
                self.closed = True

        return chunks()


def _provider(models: FakeModels) -> GeminiProvider:
    provider = GeminiProvider(api_key="test-key", temperature=0.7, max_tokens=500)
    provider._client = SimpleNamespace(aio=SimpleNamespace(models=models))
    return provider


def test_default_config_is_shared():
    provider = _provider(FakeModels([]))
    assert provider.config_for(0.7, 500) is provider.config_for(0.7, 500)


def test_override_builds_one_shot_config():
    provider = _provider(FakeModels([]))
    default = provider.config_for(0.7, 500)
    one_shot = provider.config_for(0.0, 500)
    assert one_shot is not default
    assert one_shot.temperature == 0.0
    assert default.temperature == 0.7
    assert one_shot.max_output_tokens == 500


async def test_stream_yields_text_and_skips_empty_chunks():
    models = FakeModels(["Hel", None, "lo"])
    provider = _provider(models)
    out = [t async for t in provider.stream("p", 0.0, 500)]
    assert out == ["Hel", "lo"]
    assert models.configs[0].temperature == 0.0
    assert models.closed is True


async def test_stream_wraps_sdk_errors():
    provider = _provider(FakeModels([], error=RuntimeError("quota exceeded")))
    with pytest.raises(GenerationError, match="quota exceeded"):
        _ = [t async for t in provider.stream("p", 0.7, 500)]

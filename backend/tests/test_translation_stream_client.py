"""
Tests for the streamed translation client
"""
import pytest

from polyglot.services.translation.prompts import build_translation_prompt
from polyglot.services.translation.stream_client import TranslationStreamClient
from tests.helpers import make_genai_client


def test_prompt_names_languages_and_quotes_text():
    prompt = build_translation_prompt("Hello", "en", "es")
    assert "from en to es" in prompt
    assert "ONLY the translated text" in prompt
    assert prompt.endswith('"Hello"')


def test_prompt_auto_detect_label():
    prompt = build_translation_prompt("Hello", "auto", "fr")
    assert "from automatically detected to fr" in prompt


def test_prompt_keeps_braces():
    prompt = build_translation_prompt("{name} says {0}", "en", "de")
    assert '"{name} says {0}"' in prompt


@pytest.mark.asyncio
async def test_fragments_delivered_in_order():
    genai_client = make_genai_client(fragments=["Hol", "a", " mundo"])
    client = TranslationStreamClient(genai_client, model="test-model")

    received = []
    await client.stream_translate("Hello world", "en", "es", received.append)

    assert received == ["Hol", "a", " mundo"]
    call = genai_client.aio.models.stream_calls[0]
    assert call["model"] == "test-model"
    assert call["contents"] == build_translation_prompt("Hello world", "en", "es")
    assert call["config"].temperature == pytest.approx(0.3)


@pytest.mark.asyncio
async def test_empty_fragments_skipped():
    genai_client = make_genai_client(fragments=["", None, "Bonjour", ""])
    client = TranslationStreamClient(genai_client)

    received = []
    await client.stream_translate("Hello", "en", "fr", received.append)

    assert received == ["Bonjour"]


@pytest.mark.asyncio
async def test_stream_with_no_fragments():
    client = TranslationStreamClient(make_genai_client(fragments=[]))

    received = []
    await client.stream_translate("Hello", "en", "fr", received.append)

    assert received == []


@pytest.mark.asyncio
async def test_provider_error_propagates():
    client = TranslationStreamClient(make_genai_client(error=ConnectionError("quota exceeded")))

    received = []
    with pytest.raises(ConnectionError, match="quota exceeded"):
        await client.stream_translate("Hello", "en", "fr", received.append)

    assert received == []

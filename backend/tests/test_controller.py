"""
Tests for the debounced translation controller
"""
import asyncio

import pytest

from polyglot.config.constants import TRANSLATION_ERROR_MESSAGE
from polyglot.services.exceptions import InvalidLanguageError
from polyglot.services.session import controller as controller_module
from polyglot.services.session.controller import TranslationController
from polyglot.services.session.state import TranslationStatus
from polyglot.services.speech.client import SpeechClient
from polyglot.services.translation.stream_client import TranslationStreamClient
from tests.helpers import RecordingSink, make_genai_client, pcm_bytes

DEBOUNCE = 0.05


def by_direction(prompt: str):
    if "from es to en" in prompt:
        return ["Hel", "lo"]
    if "to fr" in prompt:
        return ["Bon", "jour"]
    return ["Hol", "a"]


class GatedStreamClient:
    """Stream client whose attempts can be held open mid-stream."""

    def __init__(self):
        self.calls = []
        self.gates = {}

    async def stream_translate(self, text, source_lang, target_lang, on_fragment):
        self.calls.append(text)
        on_fragment(f"<{text}>")
        gate = self.gates.get(text)
        if gate is not None:
            await gate.wait()
        on_fragment(" done")


@pytest.fixture
def genai_client():
    return make_genai_client(fragments=by_direction, audio=pcm_bytes([0, 100, -100, 0]))


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def controller(genai_client, history_store, sink):
    ctl = TranslationController(
        TranslationStreamClient(genai_client),
        SpeechClient(genai_client, sink=sink),
        history_store,
        debounce_sec=DEBOUNCE,
        source_lang="en",
        target_lang="es",
    )
    yield ctl
    ctl.close()


def requests(genai_client):
    return genai_client.aio.models.stream_calls


@pytest.mark.asyncio
async def test_translation_recorded_in_history(controller, history_store, genai_client):
    controller.set_source_text("Hello")
    assert controller.state.status == TranslationStatus.PENDING

    await controller.wait_until_settled()

    assert controller.state.translated_text == "Hola"
    assert controller.state.status == TranslationStatus.DONE
    assert controller.state.is_translating is False
    assert len(requests(genai_client)) == 1

    entry = history_store.entries[0]
    assert (entry.source_text, entry.translated_text) == ("Hello", "Hola")
    assert (entry.source_lang, entry.target_lang) == ("en", "es")


@pytest.mark.asyncio
async def test_rapid_edits_coalesce_into_one_request(controller, genai_client, history_store):
    for text in ["H", "He", "Hel", "Hell", "Hello"]:
        controller.set_source_text(text)
        await asyncio.sleep(0.005)

    await controller.wait_until_settled()

    assert len(requests(genai_client)) == 1
    assert '"Hello"' in requests(genai_client)[0]["contents"]
    assert [e.source_text for e in history_store.entries] == ["Hello"]


@pytest.mark.asyncio
async def test_short_text_translated_but_not_recorded(controller, history_store):
    controller.set_source_text("Hi!")
    await controller.wait_until_settled()

    assert controller.state.translated_text == "Hola"
    assert len(history_store) == 0

    controller.set_source_text("Hey!")
    await controller.wait_until_settled()

    assert len(history_store) == 1


@pytest.mark.asyncio
async def test_provider_failure_shows_error(history_store):
    ctl = TranslationController(
        TranslationStreamClient(make_genai_client(error=ConnectionError("network down"))),
        None,
        history_store,
        debounce_sec=DEBOUNCE,
    )

    ctl.set_source_text("Hello there")
    await ctl.wait_until_settled()

    assert ctl.state.translated_text == TRANSLATION_ERROR_MESSAGE
    assert ctl.state.status == TranslationStatus.FAILED
    assert ctl.state.is_translating is False
    assert len(history_store) == 0


@pytest.mark.asyncio
async def test_blank_text_clears_without_request(controller, genai_client):
    controller.set_source_text("Hello")
    await controller.wait_until_settled()

    controller.set_source_text("   ")
    await controller.wait_until_settled()

    assert controller.state.translated_text == ""
    assert controller.state.status == TranslationStatus.IDLE
    assert len(requests(genai_client)) == 1


@pytest.mark.asyncio
async def test_clearing_text_cancels_pending_request(controller, genai_client):
    controller.set_source_text("Hello")
    controller.set_source_text("")
    await asyncio.sleep(DEBOUNCE * 3)

    assert requests(genai_client) == []
    assert controller.state.status == TranslationStatus.IDLE


@pytest.mark.asyncio
async def test_unchanged_text_does_not_retranslate(controller, genai_client):
    controller.set_source_text("Hello")
    await controller.wait_until_settled()
    controller.set_source_text("Hello")
    await controller.wait_until_settled()

    assert len(requests(genai_client)) == 1


@pytest.mark.asyncio
async def test_source_text_is_clipped(controller):
    controller.set_source_text("a" * 6000)
    assert len(controller.state.source_text) == 5000


@pytest.mark.asyncio
async def test_language_change_retranslates(controller, genai_client, history_store):
    controller.set_source_text("Hello")
    await controller.wait_until_settled()

    controller.set_target_lang("fr")
    await controller.wait_until_settled()

    assert controller.state.translated_text == "Bonjour"
    assert len(requests(genai_client)) == 2
    assert history_store.entries[0].target_lang == "fr"


@pytest.mark.asyncio
async def test_invalid_languages_rejected(controller):
    with pytest.raises(InvalidLanguageError):
        controller.set_target_lang("auto")
    with pytest.raises(InvalidLanguageError):
        controller.set_source_lang("xx")

    assert controller.state.source_lang == "en"
    assert controller.state.target_lang == "es"


@pytest.mark.asyncio
async def test_swap_exchanges_languages_and_texts(controller, genai_client):
    controller.set_source_text("Hello")
    await controller.wait_until_settled()

    assert controller.swap() is True
    assert controller.state.source_lang == "es"
    assert controller.state.target_lang == "en"
    assert controller.state.source_text == "Hola"
    assert controller.state.translated_text == "Hello"

    await controller.wait_until_settled()

    assert len(requests(genai_client)) == 2
    assert "from es to en" in requests(genai_client)[1]["contents"]
    assert controller.state.translated_text == "Hello"


@pytest.mark.asyncio
async def test_swap_disabled_for_auto_detect(history_store, genai_client):
    ctl = TranslationController(
        TranslationStreamClient(genai_client),
        None,
        history_store,
        debounce_sec=DEBOUNCE,
        source_lang="auto",
        target_lang="es",
    )

    assert ctl.can_swap() is False
    assert ctl.swap() is False
    assert (ctl.state.source_lang, ctl.state.target_lang) == ("auto", "es")


@pytest.mark.asyncio
async def test_stale_attempt_is_discarded(history_store):
    stream_client = GatedStreamClient()
    gate = asyncio.Event()
    stream_client.gates["first text"] = gate
    ctl = TranslationController(stream_client, None, history_store, debounce_sec=DEBOUNCE)

    ctl.set_source_text("first text")
    await asyncio.sleep(DEBOUNCE * 3)
    assert ctl.state.translated_text == "<first text>"
    assert ctl.state.is_translating is True

    ctl.set_source_text("second text")
    assert ctl.state.is_translating is False
    await asyncio.sleep(DEBOUNCE * 3)

    # The first request completes only after the second one
    gate.set()
    await ctl.wait_until_settled()

    assert stream_client.calls == ["first text", "second text"]
    assert ctl.state.translated_text == "<second text> done"
    assert ctl.state.status == TranslationStatus.DONE
    assert [e.source_text for e in history_store.entries] == ["second text"]
    ctl.close()


@pytest.mark.asyncio
async def test_listener_sees_state_transitions(controller):
    statuses = []
    controller.on_change = lambda snapshot: statuses.append(snapshot["status"])

    controller.set_source_text("Hello")
    await controller.wait_until_settled()

    assert statuses[0] == "pending"
    assert statuses[1] == "streaming"
    assert statuses[-1] == "done"


@pytest.mark.asyncio
async def test_copy(controller, monkeypatch):
    monkeypatch.setattr(controller_module, "COPY_CONFIRMATION_SEC", 0.02)

    assert controller.copy_translation() == ""
    assert controller.state.copied is False

    controller.set_source_text("Hello")
    await controller.wait_until_settled()

    assert controller.copy_translation() == "Hola"
    assert controller.state.copied is True

    await asyncio.sleep(0.1)
    assert controller.state.copied is False


@pytest.mark.asyncio
async def test_speak_requires_translation(controller, sink):
    assert await controller.speak() is None
    assert sink.buffers == []


@pytest.mark.asyncio
async def test_speak_plays_translation(controller, sink, genai_client):
    controller.set_source_text("Hello")
    await controller.wait_until_settled()

    handle = await controller.speak("Puck")

    assert handle is not None
    assert handle.frames == 4
    assert len(sink.buffers) == 1
    assert controller.state.is_speaking is False
    assert genai_client.aio.models.generate_calls[0]["contents"].endswith("Hola")


@pytest.mark.asyncio
async def test_speak_ignored_while_speaking(controller, sink):
    controller.set_source_text("Hello")
    await controller.wait_until_settled()
    controller.state.is_speaking = True

    assert await controller.speak() is None
    assert sink.buffers == []


@pytest.mark.asyncio
async def test_speak_failure_is_logged_not_raised(history_store):
    genai_client = make_genai_client(fragments=["Hola"], audio=None)
    sink = RecordingSink()
    ctl = TranslationController(
        TranslationStreamClient(genai_client),
        SpeechClient(genai_client, sink=sink),
        history_store,
        debounce_sec=DEBOUNCE,
    )
    ctl.set_source_text("Hello")
    await ctl.wait_until_settled()

    assert await ctl.speak() is None
    assert ctl.state.is_speaking is False
    assert sink.buffers == []
    ctl.close()


@pytest.mark.asyncio
async def test_history_actions(controller, history_store):
    controller.set_source_text("Hello")
    await controller.wait_until_settled()
    controller.set_source_text("Good morning")
    await controller.wait_until_settled()
    assert len(history_store) == 2

    assert controller.toggle_history() is True
    assert controller.toggle_history() is False

    entry_id = history_store.entries[0].id
    assert await controller.delete_history_entry(entry_id) is True
    assert await controller.delete_history_entry(entry_id) is False
    assert len(history_store) == 1

    await controller.clear_history()
    assert len(history_store) == 0


@pytest.mark.asyncio
async def test_close_cancels_pending_timer(controller, genai_client):
    controller.set_source_text("Hello")
    controller.close()
    await asyncio.sleep(DEBOUNCE * 3)

    assert requests(genai_client) == []


@pytest.mark.asyncio
async def test_history_keeps_latest_50_translations(history_store):
    ctl = TranslationController(
        TranslationStreamClient(make_genai_client(fragments=["Hola"])),
        None,
        history_store,
        debounce_sec=0.001,
        source_lang="en",
        target_lang="es",
    )

    for n in range(51):
        ctl.set_source_text(f"Sentence {n}")
        await ctl.wait_until_settled()

    sources = [e.source_text for e in history_store.entries]
    assert len(sources) == 50
    assert sources[0] == "Sentence 50"
    assert "Sentence 0" not in sources
    ctl.close()

"""
Translation Controller - debounced streaming translation for one session.

State machine:
    Idle -> Pending      source text / language changed, text not blank
    Pending -> Streaming quiescence delay elapsed without further changes
    Streaming -> Done    stream finished; history entry recorded if text > 3 chars
    Streaming -> Failed  stream raised; fixed error message displayed
    any -> Pending       a new change always re-arms the timer

In-flight requests are never cancelled. Every attempt captures a generation
number when it starts; the next input change bumps the generation, and from
then on the old attempt's fragments and outcome are discarded.

Usage:
    controller = TranslationController(stream_client, speech_client, history_store)
    controller.set_target_lang("es")
    controller.set_source_text("Hello")
    await controller.wait_until_settled()
    controller.state.translated_text  # "Hola"
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, Set

from polyglot.config.constants import (
    AUTO_DETECT_LANGUAGE,
    COPY_CONFIRMATION_SEC,
    DEBOUNCE_DELAY_SEC,
    DEFAULT_SOURCE_LANGUAGE,
    DEFAULT_TARGET_LANGUAGE,
    DEFAULT_TTS_VOICE,
    HISTORY_MIN_SOURCE_CHARS,
    MAX_SOURCE_TEXT_CHARS,
    TRANSLATION_ERROR_MESSAGE,
)
from polyglot.config.languages import validate_source, validate_target
from polyglot.models.history_entry import HistoryEntry
from polyglot.services.audio.playback import PlaybackHandle
from polyglot.services.exceptions import PolyglotError
from polyglot.services.history.store import HistoryStore
from polyglot.services.session.state import SessionState, TranslationStatus
from polyglot.services.speech.client import SpeechClient
from polyglot.services.translation.stream_client import TranslationStreamClient

logger = logging.getLogger(__name__)

StateListener = Callable[[Dict[str, Any]], None]


class TranslationController:
    """
    Owns the session state and drives translation attempts.

    Must be used from inside a running event loop: input changes arm
    loop timers and attempts run as tasks.
    """

    def __init__(
        self,
        stream_client: TranslationStreamClient,
        speech_client: Optional[SpeechClient],
        history_store: HistoryStore,
        *,
        debounce_sec: float = DEBOUNCE_DELAY_SEC,
        source_lang: str = DEFAULT_SOURCE_LANGUAGE,
        target_lang: str = DEFAULT_TARGET_LANGUAGE,
        on_change: Optional[StateListener] = None,
    ):
        self.stream_client = stream_client
        self.speech_client = speech_client
        self.history_store = history_store
        self.debounce_sec = debounce_sec
        self.on_change = on_change

        self.state = SessionState(
            source_lang=validate_source(source_lang),
            target_lang=validate_target(target_lang),
        )

        self._generation = 0
        self._timer: Optional[asyncio.TimerHandle] = None
        self._copy_timer: Optional[asyncio.TimerHandle] = None
        self._tasks: Set[asyncio.Task] = set()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def set_source_text(self, text: str) -> None:
        text = text[:MAX_SOURCE_TEXT_CHARS]
        if text == self.state.source_text:
            return
        self.state.source_text = text
        self._on_input_changed()

    def set_source_lang(self, code: str) -> None:
        code = validate_source(code)
        if code == self.state.source_lang:
            return
        self.state.source_lang = code
        self._on_input_changed()

    def set_target_lang(self, code: str) -> None:
        code = validate_target(code)
        if code == self.state.target_lang:
            return
        self.state.target_lang = code
        self._on_input_changed()

    def can_swap(self) -> bool:
        return self.state.source_lang != AUTO_DETECT_LANGUAGE

    def swap(self) -> bool:
        """
        Exchange languages and texts. Returns False (state untouched) when the
        source language is auto-detect, which cannot become a target.
        """
        if not self.can_swap():
            return False

        s = self.state
        s.source_lang, s.target_lang = s.target_lang, s.source_lang
        s.source_text, s.translated_text = s.translated_text, s.source_text
        self._on_input_changed()
        return True

    # ------------------------------------------------------------------
    # Debounce / attempts
    # ------------------------------------------------------------------

    def _on_input_changed(self) -> None:
        self._cancel_pending()
        # Supersede any attempt still streaming for the previous input
        self._generation += 1
        self.state.is_translating = False

        if not self.state.source_text.strip():
            self.state.translated_text = ""
            self.state.status = TranslationStatus.IDLE
            self._notify()
            return

        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.debounce_sec, self._start_attempt)
        self.state.status = TranslationStatus.PENDING
        self._notify()

    def _cancel_pending(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _start_attempt(self) -> None:
        self._timer = None
        self._generation += 1
        s = self.state
        task = asyncio.create_task(
            self._run_attempt(self._generation, s.source_text, s.source_lang, s.target_lang)
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def _run_attempt(self, generation: int, text: str, source_lang: str, target_lang: str):
        if not self._is_current(generation):
            return
        self.state.translated_text = ""
        self.state.is_translating = True
        self.state.status = TranslationStatus.STREAMING
        self._notify()

        fragments: List[str] = []

        def on_fragment(fragment: str) -> None:
            fragments.append(fragment)
            if self._is_current(generation):
                self.state.translated_text = "".join(fragments)
                self._notify()

        try:
            await self.stream_client.stream_translate(text, source_lang, target_lang, on_fragment)
        except Exception as e:
            logger.error(f"[Controller] Translation failed: {e}")
            if self._is_current(generation):
                self.state.translated_text = TRANSLATION_ERROR_MESSAGE
                self.state.status = TranslationStatus.FAILED
                self.state.is_translating = False
                self._notify()
            return

        if not self._is_current(generation):
            logger.debug(f"[Controller] Discarding stale translation (generation {generation})")
            return

        translation = "".join(fragments)
        self.state.status = TranslationStatus.DONE
        self.state.is_translating = False
        self._notify()

        if len(text) > HISTORY_MIN_SOURCE_CHARS:
            entry = HistoryEntry.create(
                source_text=text,
                translated_text=translation,
                source_lang=source_lang,
                target_lang=target_lang,
            )
            try:
                await self.history_store.insert(entry)
            except PolyglotError as e:
                logger.error(f"[Controller] Could not record history entry: {e}")

    async def wait_until_settled(self) -> None:
        """Wait until no timer is armed and no attempt is in flight."""
        while self._timer is not None or self._tasks:
            if self._tasks:
                await asyncio.gather(*list(self._tasks), return_exceptions=True)
            else:
                await asyncio.sleep(min(self.debounce_sec, 0.05))

    # ------------------------------------------------------------------
    # Output actions
    # ------------------------------------------------------------------

    def copy_translation(self) -> str:
        """Return the text to put on the clipboard and raise the copied flag."""
        text = self.state.translated_text
        if not text:
            return ""

        if self._copy_timer is not None:
            self._copy_timer.cancel()
        self.state.copied = True
        self._notify()
        loop = asyncio.get_running_loop()
        self._copy_timer = loop.call_later(COPY_CONFIRMATION_SEC, self._reset_copied)
        return text

    def _reset_copied(self) -> None:
        self._copy_timer = None
        self.state.copied = False
        self._notify()

    async def speak(self, voice: str = DEFAULT_TTS_VOICE) -> Optional[PlaybackHandle]:
        """Read the current translation aloud. Failures are logged, not raised."""
        if not self.state.translated_text or self.state.is_speaking:
            return None
        if self.speech_client is None:
            logger.warning("[Controller] Speech requested but no speech client configured")
            return None

        self.state.is_speaking = True
        self._notify()
        try:
            return await self.speech_client.speak(self.state.translated_text, voice)
        except Exception as e:
            logger.error(f"[Controller] Speech failed: {e}")
            return None
        finally:
            self.state.is_speaking = False
            self._notify()

    def toggle_history(self) -> bool:
        self.state.show_history = not self.state.show_history
        self._notify()
        return self.state.show_history

    async def delete_history_entry(self, entry_id: str) -> bool:
        return await self.history_store.remove_by_id(entry_id)

    async def clear_history(self) -> None:
        await self.history_store.clear()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Stop timers and detach from in-flight attempts (they finish unobserved)."""
        self._cancel_pending()
        if self._copy_timer is not None:
            self._copy_timer.cancel()
            self._copy_timer = None
        self._generation += 1
        self.on_change = None

    def _notify(self) -> None:
        if self.on_change is None:
            return
        try:
            self.on_change(self.state.snapshot())
        except Exception as e:
            logger.error(f"[Controller] State listener error: {e}")


import asyncio
import logging
from typing import Any, Dict, List, Optional, Set, Union

from fastapi import WebSocket, WebSocketDisconnect
from google import genai
from pydantic import ValidationError

from polyglot.config.languages import TTS_VOICES
from polyglot.models.history_entry import HistoryEntry
from polyglot.schemas.websocket_events import (
    ClearHistoryEvent,
    ClientEvent,
    CopyEvent,
    DeleteHistoryEvent,
    PingEvent,
    SetSourceLangEvent,
    SetSourceTextEvent,
    SetTargetLangEvent,
    SpeakEvent,
    SwapEvent,
    ToggleHistoryEvent,
    client_event_adapter,
)
from polyglot.services.audio.playback import WebSocketAudioSink
from polyglot.services.exceptions import PolyglotError
from polyglot.services.history.store import HistoryStore
from polyglot.services.session.controller import TranslationController
from polyglot.services.speech.client import SpeechClient
from polyglot.services.translation.stream_client import TranslationStreamClient

logger = logging.getLogger(__name__)

OutgoingMessage = Union[Dict[str, Any], None]


class TranslatorSession:
    """
    Orchestrates one WebSocket translator session.
    Handles:
    - Controller setup (one debounced translation pipeline per connection)
    - Message loop processing (client events -> controller actions)
    - Pushing state / history updates back to the client
    - Cleanup on disconnect
    """

    def __init__(
        self,
        websocket: WebSocket,
        history_store: HistoryStore,
        genai_client: genai.Client,
    ):
        self.websocket = websocket
        self.history_store = history_store
        self.controller = TranslationController(
            stream_client=TranslationStreamClient(genai_client),
            speech_client=SpeechClient(genai_client, sink=WebSocketAudioSink(websocket)),
            history_store=history_store,
            on_change=self._on_state_change,
        )
        self._outbox: "asyncio.Queue[OutgoingMessage]" = asyncio.Queue()
        self._tasks: Set[asyncio.Task] = set()
        self._unsubscribe_history = None

    async def run(self):
        """
        Main entry point for handling a WebSocket connection.
        """
        await self.websocket.accept()
        self._unsubscribe_history = self.history_store.subscribe(self._on_history_change)
        sender = asyncio.create_task(self._send_loop())

        self._send({
            "type": "connected",
            "state": self.controller.state.snapshot(),
            "can_swap": self.controller.can_swap(),
            "history": self._serialize_history(self.history_store.entries),
        })

        try:
            await self._message_loop()
        finally:
            await self._cleanup(sender)

    async def _message_loop(self):
        try:
            while True:
                message = await self.websocket.receive()

                if message["type"] == "websocket.disconnect":
                    raise WebSocketDisconnect(message.get("code", 1000))
                if message.get("text") is not None:
                    await self._handle_text_message(message["text"])
                elif message.get("bytes") is not None:
                    logger.warning("[Session] Ignoring unexpected binary message")
                    self._send_error("Binary messages are not supported")

        except WebSocketDisconnect:
            logger.info("[Session] Client disconnected")

        except Exception as e:
            logger.error(f"[Session] Error during message loop: {e}")

    async def _handle_text_message(self, text_data: str):
        """
        Handle JSON control messages.
        """
        try:
            event = client_event_adapter.validate_json(text_data)
        except ValidationError as e:
            logger.warning(f"[Session] Invalid message: {e.error_count()} errors")
            self._send_error("Invalid message")
            return

        try:
            await self._dispatch(event)
        except PolyglotError as e:
            self._send_error(str(e))

    async def _dispatch(self, event: ClientEvent):
        controller = self.controller

        if isinstance(event, SetSourceTextEvent):
            controller.set_source_text(event.text)

        elif isinstance(event, SetSourceLangEvent):
            controller.set_source_lang(event.code)

        elif isinstance(event, SetTargetLangEvent):
            controller.set_target_lang(event.code)

        elif isinstance(event, SwapEvent):
            if not controller.swap():
                logger.debug("[Session] Swap ignored while source is auto-detect")

        elif isinstance(event, CopyEvent):
            text = controller.copy_translation()
            if text:
                self._send({"type": "copied", "text": text})

        elif isinstance(event, SpeakEvent):
            if event.voice not in TTS_VOICES:
                self._send_error(f"Unknown voice: {event.voice!r}")
                return
            # Run in the background so the session keeps accepting input
            self._spawn(controller.speak(event.voice))

        elif isinstance(event, ToggleHistoryEvent):
            controller.toggle_history()

        elif isinstance(event, DeleteHistoryEvent):
            if not await controller.delete_history_entry(event.id):
                logger.debug(f"[Session] History entry not found: {event.id}")

        elif isinstance(event, ClearHistoryEvent):
            await controller.clear_history()

        elif isinstance(event, PingEvent):
            self._send({"type": "pong"})

    def _spawn(self, coro):
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _on_state_change(self, snapshot: Dict[str, Any]):
        self._send({
            "type": "state",
            "state": snapshot,
            "can_swap": self.controller.can_swap(),
        })

    def _on_history_change(self, entries: List[HistoryEntry]):
        self._send({"type": "history", "entries": self._serialize_history(entries)})

    @staticmethod
    def _serialize_history(entries: List[HistoryEntry]) -> List[Dict[str, Any]]:
        return [entry.model_dump(by_alias=True) for entry in entries]

    def _send(self, message: Dict[str, Any]):
        self._outbox.put_nowait(message)

    def _send_error(self, detail: str):
        self._send({"type": "error", "detail": detail})

    async def _send_loop(self):
        while True:
            message = await self._outbox.get()
            if message is None:
                return
            try:
                await self.websocket.send_json(message)
            except Exception as e:
                logger.error(f"[Session] Error sending {message.get('type')}: {e}")
                return

    async def _cleanup(self, sender: Optional[asyncio.Task]):
        """
        Detach from the controller and history store, stop the sender.
        """
        self.controller.close()
        if self._unsubscribe_history is not None:
            self._unsubscribe_history()
            self._unsubscribe_history = None

        for task in list(self._tasks):
            task.cancel()

        if sender is not None:
            self._outbox.put_nowait(None)
            try:
                await asyncio.wait_for(sender, timeout=1.0)
            except asyncio.TimeoutError:
                logger.warning("[Session] Sender did not drain in time, cancelled")

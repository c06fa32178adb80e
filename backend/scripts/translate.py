import argparse
import asyncio
import os
import sys

# Add backend to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from polyglot.config.constants import DEFAULT_TTS_VOICE
from polyglot.services.audio.playback import SoundDeviceSink
from polyglot.services.gemini import get_genai_client
from polyglot.services.speech.client import SpeechClient
from polyglot.services.translation.stream_client import TranslationStreamClient


async def run_translation(text: str, source_lang: str, target_lang: str, speak: bool, voice: str):
    client = get_genai_client()
    translator = TranslationStreamClient(client)

    fragments = []

    def on_fragment(fragment: str):
        fragments.append(fragment)
        print(fragment, end="", flush=True)

    print(f"🔄 {source_lang} -> {target_lang}\n")
    await translator.stream_translate(text, source_lang, target_lang, on_fragment)
    print("\n")

    if speak and fragments:
        speech = SpeechClient(client, sink=SoundDeviceSink())
        handle = await speech.speak("".join(fragments), voice)
        print(f"🔊 Playing {handle.duration:.1f}s of audio...")
        await asyncio.sleep(handle.duration)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Stream a translation to stdout")
    parser.add_argument("text", help="Text to translate")
    parser.add_argument("--source", default="auto", help="Source language code (default: auto)")
    parser.add_argument("--target", default="es", help="Target language code (default: es)")
    parser.add_argument("--speak", action="store_true", help="Read the translation aloud")
    parser.add_argument("--voice", default=DEFAULT_TTS_VOICE, help="Prebuilt TTS voice")
    args = parser.parse_args()

    try:
        asyncio.run(run_translation(args.text, args.source, args.target, args.speak, args.voice))
    except KeyboardInterrupt:
        pass

from typing import List

from fastapi import APIRouter
from pydantic import BaseModel

from polyglot.config.constants import DEFAULT_TTS_VOICE
from polyglot.config.languages import TTS_VOICES, source_languages, target_languages
from polyglot.models.language import Language

router = APIRouter()


class LanguagesResponse(BaseModel):
    source: List[Language]
    target: List[Language]


class VoicesResponse(BaseModel):
    voices: List[str]
    default: str


@router.get("/languages", response_model=LanguagesResponse)
async def list_languages():
    """Language pickers: the target list excludes auto-detect."""
    return LanguagesResponse(source=source_languages(), target=target_languages())


@router.get("/voices", response_model=VoicesResponse)
async def list_voices():
    return VoicesResponse(voices=TTS_VOICES, default=DEFAULT_TTS_VOICE)

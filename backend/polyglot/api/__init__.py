from fastapi import APIRouter

from polyglot.api import history
from polyglot.api import languages
from polyglot.api import translate

router = APIRouter()


@router.get("/health")
async def health():
    return {"status": "ok"}


# Include languages, history, translate routers
router.include_router(languages.router)
router.include_router(history.router)
router.include_router(translate.router)

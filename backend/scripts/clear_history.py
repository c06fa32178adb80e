import asyncio
import os
import sys

# Add backend to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from polyglot.config.redis import close_redis
from polyglot.config.settings import settings
from polyglot.services.history.store import get_history_store


async def clear_history():
    print(f"🧹 Clearing translation history ({settings.HISTORY_BACKEND})...")
    store = get_history_store()
    entries = await store.load()
    await store.clear()
    print(f"✅ Removed {len(entries)} entries.")
    await close_redis()

if __name__ == "__main__":
    asyncio.run(clear_history())

"""
History API - read and prune the translation log.

Entries are only created by completed translations; clients can list,
delete one, or clear all.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel

from polyglot.api.deps import get_history
from polyglot.models.history_entry import HistoryEntry
from polyglot.services.history.store import HistoryStore

router = APIRouter()


class HistoryResponse(BaseModel):
    entries: List[HistoryEntry]
    total: int


@router.get("/history", response_model=HistoryResponse, response_model_by_alias=True)
async def list_history(store: HistoryStore = Depends(get_history)):
    entries = store.entries
    return HistoryResponse(entries=entries, total=len(entries))


@router.delete("/history/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_history_entry(entry_id: str, store: HistoryStore = Depends(get_history)):
    if not await store.remove_by_id(entry_id):
        raise HTTPException(status_code=404, detail="History entry not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/history", status_code=status.HTTP_204_NO_CONTENT)
async def clear_history(store: HistoryStore = Depends(get_history)):
    await store.clear()
    return Response(status_code=status.HTTP_204_NO_CONTENT)

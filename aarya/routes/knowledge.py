"""
Knowledge base CRUD endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from aarya.models.schemas import KnowledgeDeleteResponse, KnowledgeEntry, KnowledgeEntryCreate
from aarya.routes.deps import get_store
from aarya.services.knowledge_store import KnowledgeStore

router = APIRouter(prefix="/api/knowledge", tags=["knowledge"])


@router.get("", response_model=List[KnowledgeEntry])
async def list_entries(store: KnowledgeStore = Depends(get_store)):
    return await store.list_entries()


@router.post("", response_model=KnowledgeEntry, status_code=status.HTTP_201_CREATED)
async def add_entry(
    entry: KnowledgeEntryCreate,
    store: KnowledgeStore = Depends(get_store),
):
    return await store.add_entry(entry)


@router.delete("/{entry_id}", response_model=KnowledgeDeleteResponse)
async def delete_entry(
    entry_id: str,
    store: KnowledgeStore = Depends(get_store),
):
    if not await store.delete_entry(entry_id):
        raise HTTPException(status_code=404, detail="Knowledge entry not found")
    return KnowledgeDeleteResponse(status="deleted", id=entry_id)

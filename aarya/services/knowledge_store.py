"""
SQLAlchemy-backed knowledge base with change subscriptions.

Listeners always receive the full ordered snapshot (topic, then insertion
order), so the matcher's first-wins tie-break is stable across refreshes.
"""

import asyncio
from typing import Callable, List, Sequence, Tuple

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import async_sessionmaker

from aarya.models.entities import KnowledgeRecord
from aarya.models.schemas import KnowledgeEntry, KnowledgeEntryCreate

Snapshot = Tuple[KnowledgeEntry, ...]
Listener = Callable[[Snapshot], None]

DEFAULT_KNOWLEDGE = [
    KnowledgeEntryCreate(
        topic="Welcome",
        keywords=["hello", "hi", "hey", "greetings"],
        response="Hello! I am Aarya AI. How can I help you today?",
    ),
    KnowledgeEntryCreate(
        topic="Capabilities",
        keywords=["help", "do", "features", "what can you do"],
        response="I can answer questions based on my local database. If I don't know the answer, I'll ask my cloud brain!",
    ),
]


class KnowledgeSnapshot:
    """Holds the latest snapshot; replaced wholesale, never mutated in place."""

    def __init__(self, entries: Sequence[KnowledgeEntry] = ()) -> None:
        self.entries: Snapshot = tuple(entries)

    def replace(self, entries: Snapshot) -> None:
        self.entries = tuple(entries)


class KnowledgeStore:
    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory
        self._listeners: List[Listener] = []
        # held across commit and notify: snapshots are published in commit order
        self._write_lock = asyncio.Lock()

    async def init(self, seed: bool = True) -> None:
        if not seed:
            return
        async with self._session_factory() as db:
            existing = await db.execute(select(KnowledgeRecord.id).limit(1))
            if existing.first() is not None:
                return
            db.add_all(KnowledgeRecord(**entry.model_dump()) for entry in DEFAULT_KNOWLEDGE)
            await db.commit()
        logger.info(f"Seeded knowledge base with {len(DEFAULT_KNOWLEDGE)} default entries")

    async def list_entries(self) -> List[KnowledgeEntry]:
        async with self._session_factory() as db:
            result = await db.execute(
                select(KnowledgeRecord).order_by(
                    KnowledgeRecord.topic, KnowledgeRecord.created_at, KnowledgeRecord.id
                )
            )
            return [KnowledgeEntry.model_validate(row) for row in result.scalars().all()]

    async def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener`, deliver the current snapshot, return an unsubscribe callable."""
        self._listeners.append(listener)
        listener(tuple(await self.list_entries()))

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = tuple(await self.list_entries())
        for listener in list(self._listeners):
            listener(snapshot)

    async def add_entry(self, entry: KnowledgeEntryCreate) -> KnowledgeEntry:
        async with self._write_lock:
            async with self._session_factory() as db:
                record = KnowledgeRecord(**entry.model_dump())
                db.add(record)
                await db.commit()
                created = KnowledgeEntry.model_validate(record)

            logger.info(f"Added knowledge entry '{created.topic}' ({len(created.keywords)} keywords)")
            await self._notify()
        return created

    async def delete_entry(self, entry_id: str) -> bool:
        async with self._write_lock:
            async with self._session_factory() as db:
                record = await db.get(KnowledgeRecord, entry_id)
                if record is None:
                    return False
                await db.delete(record)
                await db.commit()

            logger.info(f"Deleted knowledge entry {entry_id}")
            await self._notify()
        return True

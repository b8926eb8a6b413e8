"""
Key/value storage used for best-effort client state.

Visit drafts and dismissal flags are kept behind a small async interface so
the draft engine can run against MongoDB in the service and against an
in-memory dict in tests.
"""

from typing import Dict, Optional, Protocol

from beanie import Document, Indexed

from app.shared.models import TimestampMixin


DRAFT_KEY_PREFIX = "visit-draft-"
SEEN_FLAG_PREFIX = "seen-"


def draft_key(patient_id: str) -> str:
    """Storage key of the single draft slot for a patient."""
    return f"{DRAFT_KEY_PREFIX}{patient_id}"


def seen_flag_key(flag: str) -> str:
    """Storage key of a 'seen' / dismissal flag."""
    return f"{SEEN_FLAG_PREFIX}{flag}"


class KeyValueStore(Protocol):
    """Minimal async key/value interface."""
    
    async def get(self, key: str) -> Optional[str]: ...
    
    async def set(self, key: str, value: str) -> None: ...
    
    async def remove(self, key: str) -> None: ...


class InMemoryKeyValueStore:
    """Dict-backed store, one instance per process or per test."""
    
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
    
    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)
    
    async def set(self, key: str, value: str) -> None:
        self._data[key] = value
    
    async def remove(self, key: str) -> None:
        self._data.pop(key, None)
    
    def keys(self):
        return list(self._data.keys())


class StoredValue(Document, TimestampMixin):
    """Key/value row, namespaced per organization."""
    
    namespace: Indexed(str)
    key: str
    value: str
    
    class Settings:
        name = "stored_values"
        use_state_management = True
        indexes = [
            [("namespace", 1), ("key", 1)],
        ]


class MongoKeyValueStore:
    """Store backed by the `stored_values` collection."""
    
    def __init__(self, namespace: str):
        self.namespace = namespace
    
    async def _find(self, key: str) -> Optional[StoredValue]:
        return await StoredValue.find_one(
            StoredValue.namespace == self.namespace,
            StoredValue.key == key
        )
    
    async def get(self, key: str) -> Optional[str]:
        row = await self._find(key)
        return row.value if row else None
    
    async def set(self, key: str, value: str) -> None:
        row = await self._find(key)
        if row:
            row.value = value
            row.update_timestamp()
            await row.save()
            return
        
        await StoredValue(namespace=self.namespace, key=key, value=value).insert()
    
    async def remove(self, key: str) -> None:
        row = await self._find(key)
        if row:
            await row.delete()


async def has_seen(store: KeyValueStore, flag: str) -> bool:
    """Whether a dismissal flag has been recorded."""
    return await store.get(seen_flag_key(flag)) == "true"


async def mark_seen(store: KeyValueStore, flag: str) -> None:
    """Record a dismissal flag."""
    await store.set(seen_flag_key(flag), "true")

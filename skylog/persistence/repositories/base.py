"""Generic async Firestore repository."""

from __future__ import annotations

from typing import Any, Generic, Type, TypeVar

from skylog.contracts.common import FirestoreModel
from skylog.persistence.firestore_client import get_firestore_client

T = TypeVar("T", bound=FirestoreModel)


class BaseRepository(Generic[T]):
    """CRUD for one Firestore collection.

    ``user_scoped`` collections live under ``/users/{user_id}/``; the others
    are top-level and ignore ``user_id``.  Serialization relies entirely on
    the contract's ``to_firestore()`` and ``from_firestore()`` methods.
    """

    def __init__(self, model_class: Type[T], collection_name: str, user_scoped: bool = False):
        self._model_class = model_class
        self._collection_name = collection_name
        self._user_scoped = user_scoped

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _collection_ref(self, user_id: str | None = None):
        db = get_firestore_client()
        if self._user_scoped:
            if not user_id:
                raise ValueError(f"{self._collection_name} is user-scoped; user_id is required")
            return db.collection("users").document(user_id).collection(self._collection_name)
        return db.collection(self._collection_name)

    def document_ref(self, doc_id: str | None = None, user_id: str | None = None):
        """Reference to a document; a new auto-ID when ``doc_id`` is None."""
        collection = self._collection_ref(user_id)
        return collection.document(doc_id) if doc_id else collection.document()

    def _hydrate(self, doc: Any) -> T:
        data = doc.to_dict()
        data["id"] = doc.id
        return self._model_class.from_firestore(data)

    @staticmethod
    def _serialize(entity: FirestoreModel) -> dict[str, Any]:
        data = entity.to_firestore()
        data.pop("id", None)
        return data

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get(self, doc_id: str, user_id: str | None = None) -> T | None:
        """Fetch a single document by ID. Returns *None* if missing."""
        doc = await self._collection_ref(user_id).document(doc_id).get()
        if not doc.exists:
            return None
        return self._hydrate(doc)

    async def list_all(self, user_id: str | None = None) -> list[T]:
        """Stream every document in the collection."""
        results: list[T] = []
        async for doc in self._collection_ref(user_id).stream():
            results.append(self._hydrate(doc))
        return results

    async def list_where(self, field: str, op: str, value: Any, user_id: str | None = None) -> list[T]:
        query = self._collection_ref(user_id).where(field, op, value)
        results: list[T] = []
        async for doc in query.stream():
            results.append(self._hydrate(doc))
        return results

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def create(self, entity: T, user_id: str | None = None) -> str:
        """Create a document.

        If ``to_firestore()`` includes an ``id`` key it is used as the
        document ID, otherwise Firestore auto-generates one.

        Returns the document ID.
        """
        data = entity.to_firestore()
        doc_id = data.pop("id", None)
        if doc_id:
            await self._collection_ref(user_id).document(doc_id).set(data)
            return doc_id
        ref = await self._collection_ref(user_id).add(data)
        return ref[1].id  # (write_result, doc_ref) tuple

    async def delete(self, doc_id: str, user_id: str | None = None) -> None:
        """Delete a document."""
        await self._collection_ref(user_id).document(doc_id).delete()

"""In-memory Firestore fake for repository and service unit tests.

Mimics the google-cloud-firestore AsyncClient interface just enough
to test the repositories and the gamification service without network
access: documents carry an ``update_time``, batches honour ``create``
and ``last_update_time`` preconditions atomically at commit, and queries
support ``where`` / ``order_by`` (dotted paths) / ``limit``.
"""

from __future__ import annotations

import itertools
import uuid
from contextlib import ExitStack, contextmanager
from typing import Any, Awaitable, Callable
from unittest.mock import patch

from google.api_core import exceptions as gexc

_clock = itertools.count(1)


def _lookup(data: dict, field_path: str) -> Any:
    value: Any = data
    for part in field_path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


class FakeDocumentSnapshot:
    def __init__(self, data: dict[str, Any] | None, doc_id: str, update_time: int | None = None):
        self._data = data
        self.id = doc_id
        self.exists = data is not None
        self.update_time = update_time

    def to_dict(self) -> dict[str, Any]:
        if self._data is None:
            raise ValueError("Document does not exist")
        return dict(self._data)


class FakeWriteOption:
    def __init__(self, last_update_time: Any):
        self.last_update_time = last_update_time


class FakeStore:
    """Documents keyed by full path, each with a monotonically increasing version."""

    def __init__(self):
        self.docs: dict[str, dict] = {}
        self.versions: dict[str, int] = {}

    def write(self, path: str, data: dict) -> None:
        self.docs[path] = dict(data)
        self.versions[path] = next(_clock)

    def remove(self, path: str) -> None:
        self.docs.pop(path, None)
        self.versions.pop(path, None)

    def snapshot(self, path: str) -> FakeDocumentSnapshot:
        doc_id = path.rsplit("/", 1)[-1]
        data = self.docs.get(path)
        return FakeDocumentSnapshot(
            dict(data) if data is not None else None, doc_id, self.versions.get(path)
        )

    def children(self, collection_path: str):
        prefix = collection_path + "/"
        for path in sorted(self.docs):
            rest = path[len(prefix):]
            # Only direct children (no nested subcollections)
            if path.startswith(prefix) and "/" not in rest:
                yield path


class FakeDocumentRef:
    def __init__(self, store: FakeStore, path: str):
        self._store = store
        self._path = path
        self.id = path.rsplit("/", 1)[-1]

    @property
    def path(self) -> str:
        return self._path

    async def get(self) -> FakeDocumentSnapshot:
        return self._store.snapshot(self._path)

    async def set(self, data: dict, merge: bool = False) -> None:
        if merge and self._path in self._store.docs:
            merged = dict(self._store.docs[self._path])
            merged.update(data)
            self._store.write(self._path, merged)
        else:
            self._store.write(self._path, data)

    async def delete(self) -> None:
        self._store.remove(self._path)

    def collection(self, name: str) -> "FakeCollectionRef":
        return FakeCollectionRef(self._store, f"{self._path}/{name}")


class FakeWriteResult:
    pass


class FakeBatch:
    def __init__(self, client: "FakeFirestoreClient"):
        self._client = client
        self._store = client.store
        self._ops: list[tuple[str, str, dict | None, FakeWriteOption | None]] = []

    def create(self, doc_ref: FakeDocumentRef, data: dict) -> None:
        self._ops.append(("create", doc_ref._path, dict(data), None))

    def set(self, doc_ref: FakeDocumentRef, data: dict, merge: bool = False) -> None:
        self._ops.append(("merge" if merge else "set", doc_ref._path, dict(data), None))

    def update(self, doc_ref: FakeDocumentRef, data: dict, option: FakeWriteOption | None = None) -> None:
        self._ops.append(("update", doc_ref._path, dict(data), option))

    def delete(self, doc_ref: FakeDocumentRef, option: FakeWriteOption | None = None) -> None:
        self._ops.append(("delete", doc_ref._path, None, option))

    async def commit(self) -> list[FakeWriteResult]:
        if self._client.before_commit is not None:
            await self._client.before_commit(self)
        self._client.commits += 1

        # Validate every precondition before applying anything.
        for op, path, _, option in self._ops:
            exists = path in self._store.docs
            if op == "create" and exists:
                raise gexc.AlreadyExists(f"Document already exists: {path}")
            if op == "update" and not exists:
                raise gexc.NotFound(f"No document to update: {path}")
            if option is not None and self._store.versions.get(path) != option.last_update_time:
                raise gexc.FailedPrecondition(f"Document {path} was modified")

        for op, path, data, _ in self._ops:
            if op == "delete":
                self._store.remove(path)
            elif op in ("update", "merge") and path in self._store.docs:
                merged = dict(self._store.docs[path])
                merged.update(data)
                self._store.write(path, merged)
            else:
                self._store.write(path, data)
        return [FakeWriteResult() for _ in self._ops]


class FakeQuery:
    def __init__(self, store: FakeStore, path: str):
        self._store = store
        self._path = path
        self._filters: list[tuple[str, str, Any]] = []
        self._order: list[tuple[str, str]] = []
        self._limit: int | None = None

    def _copy(self) -> "FakeQuery":
        query = FakeQuery(self._store, self._path)
        query._filters = list(self._filters)
        query._order = list(self._order)
        query._limit = self._limit
        return query

    def where(self, field: str, op: str, value: Any) -> "FakeQuery":
        query = self._copy()
        query._filters.append((field, op, value))
        return query

    def order_by(self, field: str, direction: str = "ASCENDING") -> "FakeQuery":
        query = self._copy()
        query._order.append((field, direction))
        return query

    def limit(self, count: int) -> "FakeQuery":
        query = self._copy()
        query._limit = count
        return query

    def _matches(self, data: dict) -> bool:
        for field, op, value in self._filters:
            val = _lookup(data, field)
            if op == "==" and val != value:
                return False
            if op == "array_contains" and not (isinstance(val, list) and value in val):
                return False
        return True

    async def stream(self):
        paths = [p for p in self._store.children(self._path) if self._matches(self._store.docs[p])]
        for field, direction in reversed(self._order):
            # Documents missing the field are excluded, as in Firestore.
            paths = [p for p in paths if _lookup(self._store.docs[p], field) is not None]
            paths.sort(
                key=lambda p: _lookup(self._store.docs[p], field),
                reverse=direction == "DESCENDING",
            )
        if self._limit is not None:
            paths = paths[: self._limit]
        for path in paths:
            yield self._store.snapshot(path)


class FakeCollectionRef(FakeQuery):
    def document(self, doc_id: str | None = None) -> FakeDocumentRef:
        if doc_id is None:
            doc_id = uuid.uuid4().hex[:20]
        return FakeDocumentRef(self._store, f"{self._path}/{doc_id}")

    async def add(self, data: dict) -> tuple[FakeWriteResult, FakeDocumentRef]:
        doc_ref = self.document()
        self._store.write(doc_ref._path, data)
        return FakeWriteResult(), doc_ref


class FakeFirestoreClient:
    """Drop-in replacement for ``google.cloud.firestore.AsyncClient``.

    ``before_commit`` is awaited at the start of every batch commit, which
    lets a test slip a competing write in between read and commit.
    """

    def __init__(self):
        self.store = FakeStore()
        self.commits = 0
        self.before_commit: Callable[[FakeBatch], Awaitable[None]] | None = None

    def collection(self, name: str) -> FakeCollectionRef:
        return FakeCollectionRef(self.store, name)

    def document(self, path: str) -> FakeDocumentRef:
        return FakeDocumentRef(self.store, path)

    def batch(self) -> FakeBatch:
        return FakeBatch(self)

    @staticmethod
    def write_option(last_update_time: Any = None) -> FakeWriteOption:
        return FakeWriteOption(last_update_time)

    async def get_all(self, refs: list[FakeDocumentRef]):
        for ref in refs:
            yield self.store.snapshot(ref._path)


# Every module that imports ``get_firestore_client`` by name.
FIRESTORE_CLIENT_TARGETS = (
    "skylog.persistence.firestore_client.get_firestore_client",
    "skylog.persistence.repositories.base.get_firestore_client",
    "skylog.persistence.repositories.user_repo.get_firestore_client",
    "skylog.services.gamification.engine.get_firestore_client",
)


@contextmanager
def patched_firestore(client: FakeFirestoreClient):
    """Route every ``get_firestore_client`` call to ``client``."""
    with ExitStack() as stack:
        for target in FIRESTORE_CLIENT_TARGETS:
            stack.enter_context(patch(target, return_value=client))
        yield client

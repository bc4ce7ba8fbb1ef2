"""Tests for the in-memory and Firestore document stores."""

from __future__ import annotations

from typing import Any

from google.api_core.exceptions import NotFound
import pytest

from quizline.core.services.document_store import DocumentNotFoundError, InMemoryDocumentStore
from quizline.core.services.firestore_store import FirestoreDocumentStore


class FakeSnapshot:
    def __init__(self, document_id: str, data: dict[str, Any] | None) -> None:
        self.id = document_id
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> dict[str, Any] | None:
        return dict(self._data) if self._data is not None else None


class FakeDocumentReference:
    def __init__(self, documents: dict[str, dict[str, Any]], document_id: str) -> None:
        self._documents = documents
        self.id = document_id

    async def get(self) -> FakeSnapshot:
        return FakeSnapshot(self.id, self._documents.get(self.id))

    async def update(self, data: dict[str, Any]) -> None:
        if self.id not in self._documents:
            raise NotFound(f"No document to update: {self.id}")
        self._documents[self.id].update(data)

    async def delete(self) -> None:
        self._documents.pop(self.id, None)


class FakeCollection:
    def __init__(self, documents: dict[str, dict[str, Any]]) -> None:
        self._documents = documents

    async def stream(self):
        for document_id, data in list(self._documents.items()):
            yield FakeSnapshot(document_id, data)

    async def add(self, data: dict[str, Any]) -> tuple[object, FakeDocumentReference]:
        document_id = f"doc{len(self._documents) + 1}"
        self._documents[document_id] = dict(data)
        return object(), FakeDocumentReference(self._documents, document_id)

    def document(self, document_id: str) -> FakeDocumentReference:
        return FakeDocumentReference(self._documents, document_id)


class FakeFirestoreClient:
    """Minimal stand-in for ``firestore.AsyncClient`` backed by dictionaries."""

    def __init__(self) -> None:
        self.collections: dict[str, dict[str, dict[str, Any]]] = {}

    def collection(self, name: str) -> FakeCollection:
        return FakeCollection(self.collections.setdefault(name, {}))


@pytest.fixture(params=["memory", "firestore"])
def store(request):
    if request.param == "memory":
        return InMemoryDocumentStore()
    return FirestoreDocumentStore(client=FakeFirestoreClient())


async def test_add_then_list_and_get(store):
    document_id = await store.add_document("questions", {"question": "Q?", "options": ["a"]})

    documents = await store.list_documents("questions")
    fetched = await store.get_document("questions", document_id)

    assert [document.id for document in documents] == [document_id]
    assert fetched.data == {"question": "Q?", "options": ["a"]}


async def test_collections_are_independent(store):
    await store.add_document("ms-word", {"question": "W"})

    assert await store.list_documents("ms-excel") == []


async def test_update_merges_fields(store):
    document_id = await store.add_document("questions", {"question": "Q?", "correctAnswer": "0"})

    await store.update_document("questions", document_id, {"correctAnswer": "1"})

    fetched = await store.get_document("questions", document_id)
    assert fetched.data == {"question": "Q?", "correctAnswer": "1"}


async def test_update_missing_document_raises(store):
    with pytest.raises(DocumentNotFoundError):
        await store.update_document("questions", "missing", {"question": "Q?"})


async def test_get_missing_document_raises(store):
    with pytest.raises(DocumentNotFoundError) as excinfo:
        await store.get_document("questions", "missing")

    assert excinfo.value.document_id == "missing"


async def test_delete_is_idempotent(store):
    document_id = await store.add_document("questions", {"question": "Q?"})

    await store.delete_document("questions", document_id)
    await store.delete_document("questions", document_id)

    assert await store.list_documents("questions") == []


async def test_memory_store_returns_copies():
    store = InMemoryDocumentStore()
    document_id = await store.add_document("questions", {"options": ["a", "b"]})

    fetched = await store.get_document("questions", document_id)
    fetched.data["options"].append("c")

    assert (await store.get_document("questions", document_id)).data["options"] == ["a", "b"]
    assert store.document_count("questions") == 1

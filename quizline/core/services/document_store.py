"""Document store seam: the external database holding questions and results."""

from __future__ import annotations

from abc import ABC, abstractmethod
import copy
import logging
from typing import Any
from uuid import uuid4

from quizline.core.models import StoredDocument

logger = logging.getLogger(__name__)


class DocumentNotFoundError(LookupError):
    """Raised when a document key does not exist in its collection."""

    def __init__(self, collection: str, document_id: str) -> None:
        super().__init__(f"Document {document_id!r} not found in {collection!r}.")
        self.collection = collection
        self.document_id = document_id


class DocumentStore(ABC):
    """Collections of schemaless documents addressed by a store-assigned key."""

    @abstractmethod
    async def list_documents(self, collection: str) -> list[StoredDocument]:
        """Return every document in ``collection`` in whatever order the store reports."""

    @abstractmethod
    async def get_document(self, collection: str, document_id: str) -> StoredDocument:
        """Return one document or raise ``DocumentNotFoundError``."""

    @abstractmethod
    async def add_document(self, collection: str, data: dict[str, Any]) -> str:
        """Create a document and return its new key."""

    @abstractmethod
    async def update_document(self, collection: str, document_id: str, data: dict[str, Any]) -> None:
        """Merge ``data`` into an existing document."""

    @abstractmethod
    async def delete_document(self, collection: str, document_id: str) -> None:
        """Remove a document; deleting a missing key is not an error."""


class InMemoryDocumentStore(DocumentStore):
    """Process-local store used for development and tests."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}

    async def list_documents(self, collection: str) -> list[StoredDocument]:
        documents = self._collections.get(collection, {})
        return [StoredDocument(id=key, data=copy.deepcopy(data)) for key, data in documents.items()]

    async def get_document(self, collection: str, document_id: str) -> StoredDocument:
        data = self._collections.get(collection, {}).get(document_id)
        if data is None:
            raise DocumentNotFoundError(collection, document_id)
        return StoredDocument(id=document_id, data=copy.deepcopy(data))

    async def add_document(self, collection: str, data: dict[str, Any]) -> str:
        document_id = uuid4().hex
        self._collections.setdefault(collection, {})[document_id] = copy.deepcopy(data)
        logger.debug("Added document %s to %s", document_id, collection)
        return document_id

    async def update_document(self, collection: str, document_id: str, data: dict[str, Any]) -> None:
        documents = self._collections.get(collection, {})
        if document_id not in documents:
            raise DocumentNotFoundError(collection, document_id)
        documents[document_id].update(copy.deepcopy(data))

    async def delete_document(self, collection: str, document_id: str) -> None:
        self._collections.get(collection, {}).pop(document_id, None)

    def document_count(self, collection: str) -> int:
        return len(self._collections.get(collection, {}))

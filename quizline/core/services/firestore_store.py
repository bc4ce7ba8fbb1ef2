"""Firestore-backed document store."""

from __future__ import annotations

import logging
from typing import Any

from google.api_core.exceptions import NotFound
from google.cloud import firestore

from quizline.core.models import StoredDocument
from quizline.core.services.document_store import DocumentNotFoundError, DocumentStore

logger = logging.getLogger(__name__)


class FirestoreDocumentStore(DocumentStore):
    """Maps store operations onto a Firestore ``AsyncClient``.

    The client is created from ``project`` with application default
    credentials unless one is injected.
    """

    def __init__(self, client: Any | None = None, project: str | None = None) -> None:
        self._client = client if client is not None else firestore.AsyncClient(project=project)

    async def list_documents(self, collection: str) -> list[StoredDocument]:
        documents: list[StoredDocument] = []
        async for snapshot in self._client.collection(collection).stream():
            documents.append(StoredDocument(id=snapshot.id, data=snapshot.to_dict() or {}))
        return documents

    async def get_document(self, collection: str, document_id: str) -> StoredDocument:
        snapshot = await self._client.collection(collection).document(document_id).get()
        if not snapshot.exists:
            raise DocumentNotFoundError(collection, document_id)
        return StoredDocument(id=snapshot.id, data=snapshot.to_dict() or {})

    async def add_document(self, collection: str, data: dict[str, Any]) -> str:
        _, reference = await self._client.collection(collection).add(data)
        logger.info("Added document %s to %s", reference.id, collection)
        return reference.id

    async def update_document(self, collection: str, document_id: str, data: dict[str, Any]) -> None:
        try:
            await self._client.collection(collection).document(document_id).update(data)
        except NotFound as exc:
            raise DocumentNotFoundError(collection, document_id) from exc

    async def delete_document(self, collection: str, document_id: str) -> None:
        await self._client.collection(collection).document(document_id).delete()

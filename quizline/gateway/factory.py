"""Builds the configured document store and gateway."""

from __future__ import annotations

from quizline.config import Settings
from quizline.core.services.document_store import DocumentStore, InMemoryDocumentStore
from quizline.gateway.base import QuizGateway
from quizline.gateway.direct import DirectStoreGateway
from quizline.gateway.http import HttpFacadeGateway


def create_store(settings: Settings) -> DocumentStore:
    if settings.store_backend == "firestore":
        # Imported here so the in-memory setup does not load the Firestore SDK.
        from quizline.core.services.firestore_store import FirestoreDocumentStore

        return FirestoreDocumentStore(project=settings.firestore_project_id)
    return InMemoryDocumentStore()


def create_gateway(settings: Settings, store: DocumentStore | None = None) -> QuizGateway:
    """Return the gateway for ``settings.gateway_transport``."""
    if settings.gateway_transport == "http":
        return HttpFacadeGateway(settings.api_url)
    return DirectStoreGateway(store if store is not None else create_store(settings))

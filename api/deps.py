from __future__ import annotations

from core.store import DocumentStore


def get_store() -> DocumentStore:
    """Request-scoped store handle; the engine underneath is shared process-wide."""
    return DocumentStore()

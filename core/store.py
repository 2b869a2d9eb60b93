"""Document-style collections over the SQLAlchemy session.

Every record leaves this module as a plain dict keyed by its public
document fields plus ``_id`` (an opaque string). Driver exceptions are
translated into the taxonomy in ``core.errors`` before they escape.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager, nullcontext
from typing import Any, Callable, ContextManager, Iterator, Optional, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.db import session_scope
from core.errors import DuplicateError, StoreUnavailable, ValidationError
from core.models import Document, Location, Region, Workout

logger = logging.getLogger(__name__)

T = TypeVar("T")
ScopeFactory = Callable[[], ContextManager[Session]]


def to_document(row: Document) -> dict[str, Any]:
    doc: dict[str, Any] = {"_id": str(row.id)}
    for key, attr in row.__document_fields__.items():
        doc[key] = getattr(row, attr)
    return doc


def _is_unique_violation(exc: IntegrityError) -> bool:
    text = str(getattr(exc, "orig", exc)).lower()
    return "unique" in text or "duplicate" in text


@contextmanager
def translate_store_errors(action: str) -> Iterator[None]:
    try:
        yield
    except IntegrityError as exc:
        if _is_unique_violation(exc):
            raise DuplicateError() from exc
        logger.warning("store_integrity_error", extra={"action": action, "error": str(exc.orig)})
        raise ValidationError("A required field is missing.") from exc
    except SQLAlchemyError as exc:
        logger.error("store_unavailable", extra={"action": action, "error": str(exc)})
        raise StoreUnavailable() from exc


class Collection:
    def __init__(self, model: type[Document], scope: ScopeFactory):
        self.model = model
        self._scope = scope

    @property
    def name(self) -> str:
        return self.model.__tablename__

    def _attr(self, key: str):
        if key == "_id":
            return self.model.id
        try:
            return getattr(self.model, self.model.__document_fields__[key])
        except KeyError:
            raise ValueError(f"Unknown field {key!r} for collection {self.name}") from None

    def _where(self, stmt, flt: Optional[dict[str, Any]]):
        for key, value in (flt or {}).items():
            stmt = stmt.where(self._attr(key) == value)
        return stmt

    def _assign(self, row: Document, fields: dict[str, Any]) -> None:
        for key, value in fields.items():
            attr = self.model.__document_fields__.get(key)
            if attr is not None:
                setattr(row, attr, value)

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        with translate_store_errors(f"{self.name}.{action}"):
            with self._scope() as s:
                yield s

    def find_all(self) -> list[dict[str, Any]]:
        with self._session("find_all") as s:
            rows = s.execute(select(self.model).order_by(self.model.created_at)).scalars().all()
            return [to_document(r) for r in rows]

    def find(self, flt: Optional[dict[str, Any]] = None) -> list[dict[str, Any]]:
        with self._session("find") as s:
            stmt = self._where(select(self.model), flt).order_by(self.model.created_at)
            return [to_document(r) for r in s.execute(stmt).scalars().all()]

    def find_by_id(self, doc_id: str) -> Optional[dict[str, Any]]:
        with self._session("find_by_id") as s:
            row = s.get(self.model, str(doc_id))
            return to_document(row) if row is not None else None

    def find_one(self, flt: Optional[dict[str, Any]] = None) -> Optional[dict[str, Any]]:
        with self._session("find_one") as s:
            stmt = self._where(select(self.model), flt).order_by(self.model.created_at).limit(1)
            row = s.execute(stmt).scalars().first()
            return to_document(row) if row is not None else None

    def count(self, flt: Optional[dict[str, Any]] = None) -> int:
        with self._session("count") as s:
            stmt = self._where(select(func.count()).select_from(self.model), flt)
            return int(s.execute(stmt).scalar_one())

    def create(self, doc: dict[str, Any]) -> dict[str, Any]:
        with self._session("create") as s:
            row = self.model()
            self._assign(row, doc)
            s.add(row)
            s.flush()
            return to_document(row)

    def update_by_id(self, doc_id: str, fields: dict[str, Any]) -> Optional[dict[str, Any]]:
        with self._session("update_by_id") as s:
            row = s.get(self.model, str(doc_id))
            if row is None:
                return None
            self._assign(row, fields)
            s.flush()
            return to_document(row)

    def delete_by_id(self, doc_id: str) -> Optional[dict[str, Any]]:
        with self._session("delete_by_id") as s:
            row = s.get(self.model, str(doc_id))
            if row is None:
                return None
            doc = to_document(row)
            s.delete(row)
            s.flush()
            return doc

    def delete_many(self, flt: Optional[dict[str, Any]] = None) -> int:
        with self._session("delete_many") as s:
            result = s.execute(self._where(delete(self.model), flt))
            return int(result.rowcount or 0)


class Collections:
    def __init__(self, scope: ScopeFactory):
        self.regions = Collection(Region, scope)
        self.locations = Collection(Location, scope)
        self.workouts = Collection(Workout, scope)


class DocumentStore(Collections):
    """Autocommit collections plus an all-or-nothing transaction primitive."""

    def __init__(self, scope: ScopeFactory = session_scope):
        super().__init__(scope)
        self._session_scope = scope

    def with_transaction(self, fn: Callable[[Collections], T]) -> T:
        """Run ``fn`` against collections sharing one session.

        Commits iff ``fn`` returns; any exception rolls back every write made
        inside ``fn`` and is re-raised.
        """
        with translate_store_errors("with_transaction"):
            with self._session_scope() as session:
                return fn(Collections(lambda: nullcontext(session)))

"""Generic repository base for SQLAlchemy 2.x.

Persistence-only concerns shared by every repository live here:

* whitelisted equality filters (no raw column names reach SQL);
* primary-key ordering so listings are deterministic;
* update helpers that refuse mass-assignment outside ``_updatable_fields``.

Repositories never commit or roll back. The Unit of Work owns the transaction.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, and_, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from croctop.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type

# Bounds of the ``Integer`` primary key columns
MIN_ID = -(2**31)
MAX_ID = 2**31 - 1


# ------------------------------ Base repository ------------------------------


class BaseRepository(Generic[E]):
    """Persistence-only repository for a single aggregate.

    Subclasses set ``model`` and may override ``_filterable_fields``,
    ``_updatable_fields`` and ``_default_eagerload``.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """
        :param session: Session shared across the Unit of Work scope. Falls
            back to the Flask-scoped ``db.session`` when omitted.
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ Extensibility ----------------------------

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        """Attach loader options to generic get/list queries."""
        return stmt

    def _pk_attr(self) -> InstrumentedAttribute[Any] | None:
        return getattr(self.model, "id", None)

    @staticmethod
    def _storable_id(entity_id: Any) -> bool:
        """Return ``False`` for ids no row can have, e.g. beyond the column range."""
        return isinstance(entity_id, int) and MIN_ID <= entity_id <= MAX_ID

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {}

    def _updatable_fields(self) -> set[str]:
        return set()

    # ------------------------------ Internals --------------------------------

    def _apply_equality_filters(
        self,
        stmt: Select[Any],
        filters: Mapping[str, Any] | None,
    ) -> Select[Any]:
        """Apply equality filters for whitelisted keys only.

        :raises ValueError: On a key outside ``_filterable_fields``.
        """
        if not filters:
            return stmt
        allowed = self._filterable_fields()
        clauses: list[Any] = []
        for key, value in filters.items():
            col = allowed.get(key)
            if col is None:
                raise ValueError(f"Field is not filterable: {key}")
            clauses.append(col == value)
        return stmt.where(and_(*clauses))

    def _sanitize_update_fields(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Return ``fields`` unchanged if every key is updatable.

        :raises ValueError: On any key outside ``_updatable_fields``.
        """
        allowed = self._updatable_fields()
        unknown = sorted(k for k in fields if k not in allowed)
        if unknown:
            raise ValueError(f"Unknown or non-updatable fields: {unknown}")
        return dict(fields)

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so its primary key is populated."""
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError("BaseRepository.get requires a detectable PK attribute.")
        if not self._storable_id(entity_id):
            return None
        stmt = self._default_eagerload(select(self.model).where(pk_attr == entity_id))
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def get_for_update(self, entity_id: Any) -> E | None:
        """Like :meth:`get` with ``FOR UPDATE`` where the dialect supports it."""
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError("BaseRepository.get_for_update requires a detectable PK.")
        if not self._storable_id(entity_id):
            return None
        stmt = self._default_eagerload(
            select(self.model).where(pk_attr == entity_id)
        ).with_for_update()
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def delete(self, instance: E) -> None:
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        self.session.flush()

    # ----------------------------- Safe updates -------------------------------

    def assign_updates(self, instance: E, fields: Mapping[str, Any], *, flush: bool = True) -> E:
        """Assign whitelisted ``fields`` through ``setattr``.

        Going through ``setattr`` keeps the model ``@validates`` hooks in play.
        """
        for key, value in self._sanitize_update_fields(fields).items():
            setattr(instance, key, value)
        if flush:
            self.flush()
        return instance

    # ------------------------------- Listing ---------------------------------

    def list(
        self,
        *,
        filters: Mapping[str, Any] | None = None,
    ) -> list[E]:
        """List entities matching whitelisted filters, primary key ascending."""
        stmt = self._apply_equality_filters(select(self.model), filters)
        stmt = self._default_eagerload(stmt)
        pk_attr = self._pk_attr()
        if pk_attr is not None:
            stmt = stmt.order_by(pk_attr.asc())
        return cast(list[E], list(self.session.execute(stmt).scalars().all()))

"""
Record store for pets.

This module owns the single ``pets`` table.  ``PetStore`` provides
insert/query/update/delete operations keyed by ``_id``; queries return
a :class:`PetCursor`, a lazy and re-iterable view of the matching rows.

Values arrive as plain ``{column: value}`` mappings and are validated
through the pydantic schemas in :mod:`pet_catalog.app.schemas.pet`
before anything is written, so a rejected write never leaves a partial
row behind.  All queries use parameterized statements; ``selection``
is a ``WHERE`` fragment with ``?`` placeholders bound to
``selection_args``.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

import pydantic

from pet_catalog.app.core.contract import PetEntry
from pet_catalog.app.core.db import get_connection
from pet_catalog.app.core.errors import CursorClosedError, ValidationError
from pet_catalog.app.schemas.pet import PetCreate, PetUpdate


logger = logging.getLogger(__name__)

_SORT_TERM = re.compile(r"^\s*(\w+)(?:\s+(ASC|DESC))?\s*$", re.IGNORECASE)


class PetCursor:
    """Lazy, restartable result of a pet query.

    The statement runs on first use (iteration, ``len``, ``get_count``
    or ``first``) and the rows are kept, so the cursor can be iterated
    any number of times.  ``requery`` drops the kept rows and reads
    again; ``close`` releases them for good.
    """

    def __init__(self, sql: str, params: Sequence[Any], columns: Sequence[str]) -> None:
        self._sql = sql
        self._params = tuple(params)
        self.columns = tuple(columns)
        self.notification_address = None
        self._rows: Optional[List[Dict[str, Any]]] = None
        self._closed = False

    def _fill(self) -> List[Dict[str, Any]]:
        if self._closed:
            raise CursorClosedError("Cursor is closed")
        if self._rows is None:
            conn = get_connection()
            try:
                rows = conn.execute(self._sql, self._params).fetchall()
            finally:
                conn.close()
            self._rows = [dict(row) for row in rows]
        return self._rows

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return iter(self._fill())

    def __len__(self) -> int:
        return len(self._fill())

    def get_count(self) -> int:
        return len(self)

    def first(self) -> Optional[Dict[str, Any]]:
        rows = self._fill()
        return rows[0] if rows else None

    def requery(self) -> None:
        if self._closed:
            raise CursorClosedError("Cursor is closed")
        self._rows = None

    def close(self) -> None:
        self._closed = True
        self._rows = None

    @property
    def closed(self) -> bool:
        return self._closed

    def set_notification_address(self, address) -> None:
        self.notification_address = address

    def __repr__(self) -> str:
        state = "closed" if self._closed else ("filled" if self._rows is not None else "pending")
        return f"<PetCursor columns={self.columns!r} {state}>"


class PetStore:
    """Service class for reading and writing pet rows."""

    @staticmethod
    def _validate_projection(projection: Optional[Sequence[str]]) -> tuple:
        if projection is None:
            return PetEntry.ALL_COLUMNS
        columns = tuple(projection)
        if not columns:
            raise ValidationError("Projection must name at least one column")
        unknown = [c for c in columns if c not in PetEntry.ALL_COLUMNS]
        if unknown:
            raise ValidationError(f"Unknown column(s) in projection: {', '.join(unknown)}")
        return columns

    @staticmethod
    def _validate_sort_order(sort_order: Optional[str]) -> str:
        if not sort_order:
            return f"{PetEntry.COLUMN_ID} ASC"
        terms = []
        for term in sort_order.split(","):
            match = _SORT_TERM.match(term)
            if not match or match.group(1) not in PetEntry.ALL_COLUMNS:
                raise ValidationError(f"Invalid sort order: {sort_order!r}")
            terms.append(f"{match.group(1)} {(match.group(2) or 'ASC').upper()}")
        return ", ".join(terms)

    @staticmethod
    def _validation_message(exc: pydantic.ValidationError) -> str:
        parts = []
        for err in exc.errors():
            field = ".".join(str(loc) for loc in err.get("loc", ())) or "values"
            parts.append(f"{field}: {err.get('msg')}")
        return "; ".join(parts)

    @classmethod
    def _validate_changes(cls, values: Mapping[str, Any]) -> Dict[str, Any]:
        """Validate a partial set of values for an update."""
        try:
            data = PetUpdate.model_validate(dict(values))
        except pydantic.ValidationError as exc:
            raise ValidationError(cls._validation_message(exc)) from exc
        changes = data.model_dump(exclude_unset=True)
        nulls = [column for column, value in changes.items() if value is None and column != PetEntry.COLUMN_PET_BREED]
        if nulls:
            raise ValidationError(f"Column(s) cannot be null: {', '.join(nulls)}")
        return changes

    @staticmethod
    def _where(
        pet_id: Optional[int],
        selection: Optional[str],
        selection_args: Optional[Sequence[Any]],
    ) -> tuple:
        clauses: List[str] = []
        params: List[Any] = []
        if pet_id is not None:
            clauses.append(f"{PetEntry.COLUMN_ID} = ?")
            params.append(int(pet_id))
        if selection:
            clauses.append(f"({selection})")
            params.extend(selection_args or ())
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        return where, params

    @classmethod
    def insert(cls, values: Mapping[str, Any]) -> int:
        """Insert a new pet and return its ``_id``.

        Raises :class:`ValidationError` if the values are rejected; no
        row is created in that case.
        """
        try:
            data = PetCreate.model_validate(dict(values))
        except pydantic.ValidationError as exc:
            raise ValidationError(cls._validation_message(exc)) from exc

        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                INSERT INTO {PetEntry.TABLE_NAME}
                    ({PetEntry.COLUMN_PET_NAME}, {PetEntry.COLUMN_PET_BREED},
                     {PetEntry.COLUMN_PET_GENDER}, {PetEntry.COLUMN_PET_WEIGHT})
                VALUES (?, ?, ?, ?)
                """,
                (data.name, data.breed, data.gender, data.weight),
            )
            pet_id = cursor.lastrowid
            conn.commit()
            logger.info("Inserted pet %s", pet_id)
            return pet_id
        finally:
            conn.close()

    @classmethod
    def query(
        cls,
        pet_id: Optional[int] = None,
        projection: Optional[Sequence[str]] = None,
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
        sort_order: Optional[str] = None,
    ) -> PetCursor:
        """Return a cursor over matching pets.

        With ``pet_id`` the cursor yields at most one row.  Without a
        ``sort_order`` rows come back in insertion order.
        """
        columns = cls._validate_projection(projection)
        order_by = cls._validate_sort_order(sort_order)
        where, params = cls._where(pet_id, selection, selection_args)
        sql = f"SELECT {', '.join(columns)} FROM {PetEntry.TABLE_NAME}{where} ORDER BY {order_by}"
        return PetCursor(sql, params, columns)

    @classmethod
    def update(cls, pet_id: int, values: Mapping[str, Any]) -> int:
        """Overwrite the given columns of one pet.

        Returns ``1`` if the pet exists and ``0`` otherwise.
        """
        return cls._update(values, pet_id, None, None)

    @classmethod
    def update_where(
        cls,
        values: Mapping[str, Any],
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
    ) -> int:
        """Overwrite the given columns of every pet matching ``selection``."""
        return cls._update(values, None, selection, selection_args)

    @classmethod
    def _update(
        cls,
        values: Mapping[str, Any],
        pet_id: Optional[int],
        selection: Optional[str],
        selection_args: Optional[Sequence[Any]],
    ) -> int:
        changes = cls._validate_changes(values)
        if not changes:
            return 0
        assignments = ", ".join(f"{column} = ?" for column in changes)
        where, params = cls._where(pet_id, selection, selection_args)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"UPDATE {PetEntry.TABLE_NAME} SET {assignments}{where}",
                (*changes.values(), *params),
            )
            affected = cursor.rowcount
            conn.commit()
            if affected:
                logger.info("Updated %s pet(s) (%s)", affected, ", ".join(changes))
            return affected
        finally:
            conn.close()

    @classmethod
    def delete(cls, pet_id: int) -> int:
        """Delete one pet; returns the number of rows removed (0 or 1)."""
        return cls._delete(pet_id, None, None)

    @classmethod
    def delete_where(
        cls,
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
    ) -> int:
        """Delete every pet matching ``selection`` (all pets without one)."""
        return cls._delete(None, selection, selection_args)

    @classmethod
    def _delete(
        cls,
        pet_id: Optional[int],
        selection: Optional[str],
        selection_args: Optional[Sequence[Any]],
    ) -> int:
        where, params = cls._where(pet_id, selection, selection_args)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(f"DELETE FROM {PetEntry.TABLE_NAME}{where}", params)
            affected = cursor.rowcount
            conn.commit()
            if affected:
                logger.info("Deleted %s pet(s)", affected)
            return affected
        finally:
            conn.close()

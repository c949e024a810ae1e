"""
Contact store.

``ContactStore`` owns all SQL touching the ``contacts`` table.  It is
constructed around the process-wide connection and handed to the
request handlers as a dependency, so tests can build one per temporary
database.

All queries use parameterized statements to avoid SQL injection.
Nothing is retried.  Instead of raising, every operation returns a
``StoreResult`` carrying either a value or a ``StoreFailure`` tagged
with a ``FailureKind``; the handlers decide what that means for the
client.
"""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Iterable, List, Optional, TypeVar

from contact_manager_api.app.schemas.contact import ContactInput, ContactRead

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNIQUE_VIOLATION = "UNIQUE constraint failed"

# SQLite stores INTEGER PRIMARY KEY as a signed 64-bit value; larger ids
# cannot be bound as parameters and never match a row.
_MIN_ROWID = -(2 ** 63)
_MAX_ROWID = 2 ** 63 - 1


class FailureKind(str, Enum):
    CONFLICT = "conflict"
    DATABASE = "database"


@dataclass(frozen=True)
class StoreFailure:
    kind: FailureKind
    message: str
    error: BaseException


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    value: Optional[T] = None
    failure: Optional[StoreFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: T) -> "StoreResult[T]":
        return cls(value=value)

    @classmethod
    def from_error(cls, exc: sqlite3.Error) -> "StoreResult[T]":
        return cls(failure=classify_error(exc))


def classify_error(exc: sqlite3.Error) -> StoreFailure:
    """Tag a driver error as a uniqueness conflict or a generic failure."""
    message = str(exc)
    if isinstance(exc, sqlite3.IntegrityError) and _UNIQUE_VIOLATION in message:
        return StoreFailure(FailureKind.CONFLICT, message, exc)
    return StoreFailure(FailureKind.DATABASE, message, exc)


def _is_rowid(contact_id: int) -> bool:
    return _MIN_ROWID <= contact_id <= _MAX_ROWID


class ContactStore:
    """Parameterized access to the contacts table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def list_contacts(self) -> StoreResult[List[ContactRead]]:
        """Return every contact, most recently created first."""
        try:
            rows = self.conn.execute(
                "SELECT * FROM contacts ORDER BY created_at DESC, id DESC"
            ).fetchall()
        except sqlite3.Error as exc:
            return StoreResult.from_error(exc)
        return StoreResult.success([self._row_to_contact(row) for row in rows])

    def get_contact(self, contact_id: int) -> StoreResult[Optional[ContactRead]]:
        """Return the contact or a successful ``None`` when it does not exist."""
        if not _is_rowid(contact_id):
            return StoreResult.success(None)
        try:
            row = self.conn.execute(
                "SELECT * FROM contacts WHERE id = ?",
                (contact_id,),
            ).fetchone()
        except sqlite3.Error as exc:
            return StoreResult.from_error(exc)
        return StoreResult.success(self._row_to_contact(row) if row else None)

    def create_contact(self, data: ContactInput) -> StoreResult[ContactRead]:
        """Insert a contact and return it with the assigned id and timestamp."""
        try:
            row = self.conn.execute(
                """
                INSERT INTO contacts (name, phone, email, address)
                VALUES (?, ?, ?, ?)
                RETURNING id, created_at
                """,
                (data.name, data.phone, data.email, data.address),
            ).fetchall()[0]
        except sqlite3.Error as exc:
            return StoreResult.from_error(exc)
        logger.debug("Inserted contact %s", row["id"])
        return StoreResult.success(
            ContactRead(id=row["id"], created_at=row["created_at"], **data.model_dump())
        )

    def update_contact(self, contact_id: int, data: ContactInput) -> StoreResult[int]:
        """Replace the editable fields of a contact.

        The value is the number of rows changed; zero means no contact
        has ``contact_id``.
        """
        if not _is_rowid(contact_id):
            return StoreResult.success(0)
        try:
            cursor = self.conn.execute(
                "UPDATE contacts SET name = ?, phone = ?, email = ?, address = ? WHERE id = ?",
                (data.name, data.phone, data.email, data.address, contact_id),
            )
        except sqlite3.Error as exc:
            return StoreResult.from_error(exc)
        return StoreResult.success(cursor.rowcount)

    def delete_contact(self, contact_id: int) -> StoreResult[int]:
        """Hard delete a contact; the value is the number of rows removed."""
        if not _is_rowid(contact_id):
            return StoreResult.success(0)
        try:
            cursor = self.conn.execute("DELETE FROM contacts WHERE id = ?", (contact_id,))
        except sqlite3.Error as exc:
            return StoreResult.from_error(exc)
        return StoreResult.success(cursor.rowcount)

    def import_contacts(self, contacts: Iterable[ContactInput]) -> StoreResult[List[int]]:
        """Insert many contacts in a single transaction.

        Either every contact is stored or, on the first failure, none
        are.  The value is the list of assigned ids in input order.
        """
        ids: List[int] = []
        try:
            self.conn.execute("BEGIN")
            try:
                for data in contacts:
                    cursor = self.conn.execute(
                        "INSERT INTO contacts (name, phone, email, address) VALUES (?, ?, ?, ?)",
                        (data.name, data.phone, data.email, data.address),
                    )
                    ids.append(cursor.lastrowid)
            except sqlite3.Error:
                self.conn.execute("ROLLBACK")
                raise
            self.conn.execute("COMMIT")
        except sqlite3.Error as exc:
            return StoreResult.from_error(exc)
        logger.info("Imported %d contacts", len(ids))
        return StoreResult.success(ids)

    def close(self) -> None:
        self.conn.close()

    @staticmethod
    def _row_to_contact(row: sqlite3.Row) -> ContactRead:
        """Convert a database row to a ContactRead schema instance."""
        return ContactRead(
            id=row["id"],
            name=row["name"],
            phone=row["phone"],
            email=row["email"],
            address=row["address"],
            created_at=row["created_at"],
        )

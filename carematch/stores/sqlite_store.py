"""SQLite-backed profile store."""

import sqlite3
from collections.abc import Callable
from typing import TypeVar

from carematch.core import db
from carematch.core.errors import ProfileStoreError
from carematch.core.schemas import CareRecipient, Family, Professional
from carematch.stores.base import ProfileStore

T = TypeVar("T")


class SqliteProfileStore(ProfileStore):
    """Profile store over a connection returned by ``init_db``.

    Reads run synchronously on the event loop thread; sqlite3 connections
    are bound to the thread that created them.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    @property
    def store_id(self) -> str:
        return "sqlite"

    async def get_family(self, family_id: str) -> Family | None:
        return self._read("get_family", lambda: db.get_family(self._conn, family_id))

    async def get_professional(self, professional_id: str) -> Professional | None:
        return self._read(
            "get_professional", lambda: db.get_professional(self._conn, professional_id),
        )

    async def list_families(self) -> list[Family]:
        return self._read("list_families", lambda: db.list_families(self._conn))

    async def list_professionals(self) -> list[Professional]:
        return self._read("list_professionals", lambda: db.list_professionals(self._conn))

    async def get_care_recipient(self, user_id: str) -> CareRecipient | None:
        return self._read(
            "get_care_recipient", lambda: db.get_care_recipient(self._conn, user_id),
        )

    async def list_care_recipients(self) -> list[CareRecipient]:
        return self._read("list_care_recipients", lambda: db.list_care_recipients(self._conn))

    def _read(self, operation: str, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except sqlite3.Error as e:
            msg = f"SQLite read failed during {operation}: {e}"
            raise ProfileStoreError(msg) from e

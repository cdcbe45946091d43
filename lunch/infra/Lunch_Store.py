"""Lunch store: restaurant list plus a bounded pick history in one SQLite database.

Tables (layout shared with databases created by earlier releases of the app):
    lunch_list(restaurants TEXT PRIMARY KEY, option TEXT)     name -> category
    recent_lunch(restaurants TEXT PRIMARY KEY, date TEXT)     name -> RFC3339 pick time

Every public operation holds the store lock for its whole duration. Roll is a
read-modify-write sequence (last pick -> pool -> record -> trim) and must not
interleave with any other operation on the same connection.
"""
import logging
import random
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from lunch.domain.errors import DuplicateNameError, NoCandidatesError, NotFoundError, StorageError
from lunch.domain.RecentPick import RecentPick, format_timestamp, parse_timestamp
from lunch.domain.Restaurant import Restaurant
from lunch.infra.seed import read_seed_file
from lunch.utilities.constants import HISTORY_LIMIT

logger = logging.getLogger(__name__)


CREATE_TABLES = """
CREATE TABLE IF NOT EXISTS lunch_list (
    restaurants TEXT PRIMARY KEY,
    option TEXT
);
CREATE TABLE IF NOT EXISTS recent_lunch (
    restaurants TEXT PRIMARY KEY,
    date TEXT
);
"""

LIST_RESTAURANTS = "SELECT restaurants, option FROM lunch_list ORDER BY restaurants"

LIST_BY_CATEGORY = """
SELECT restaurants, option FROM lunch_list WHERE LOWER(option) = LOWER(?) ORDER BY restaurants
"""

GET_RESTAURANT = "SELECT restaurants, option FROM lunch_list WHERE restaurants = ?"

COUNT_RESTAURANTS = "SELECT COUNT(*) FROM lunch_list"

INSERT_RESTAURANT = "INSERT INTO lunch_list (restaurants, option) VALUES (?, ?)"

DELETE_RESTAURANT = "DELETE FROM lunch_list WHERE restaurants = ?"

UPDATE_RESTAURANT = "UPDATE lunch_list SET restaurants = ?, option = ? WHERE restaurants = ?"

# A stale history row already holding the new name is replaced
RENAME_PICK = "UPDATE OR REPLACE recent_lunch SET restaurants = ? WHERE restaurants = ?"

# Rows with a NULL name or a date that is not RFC3339 text are ignored for
# ordering and dropped by the next trim
WELL_FORMED_PICK = """
restaurants IS NOT NULL
AND date GLOB '[0-9][0-9][0-9][0-9]-[01][0-9]-[0-3][0-9]T[0-2][0-9]:*'
"""

LAST_PICK = f"""
SELECT restaurants, date FROM recent_lunch WHERE {WELL_FORMED_PICK} ORDER BY date DESC LIMIT 1
"""

RECORD_PICK = "INSERT OR REPLACE INTO recent_lunch (restaurants, date) VALUES (?, ?)"

TRIM_HISTORY = f"""
DELETE FROM recent_lunch WHERE restaurants IS NULL OR restaurants NOT IN (
    SELECT restaurants FROM recent_lunch WHERE {WELL_FORMED_PICK} ORDER BY date DESC LIMIT ?
)
"""

LIST_PICKS = f"""
SELECT restaurants, date FROM recent_lunch WHERE {WELL_FORMED_PICK} ORDER BY date DESC
"""


Chooser = Callable[[Sequence[Restaurant]], Restaurant]
Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _require_fields(name: str, category: str) -> None:
    if not name or not name.strip():
        raise ValueError("Restaurant name cannot be empty")
    if not category or not category.strip():
        raise ValueError("Restaurant category cannot be empty")


class LunchStore:
    def __init__(self, conn: sqlite3.Connection, chooser: Optional[Chooser] = None,
                 clock: Optional[Clock] = None):
        self._conn = conn
        self._lock = threading.Lock()
        self._choose = chooser or random.choice
        self._clock = clock or _utc_now
        self.init_tables()

    @classmethod
    def open(cls, path, seed_file=None, **kwargs) -> "LunchStore":
        """Open (creating if needed) the database file and seed it on first launch."""
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # Shared across request threads; the store lock serializes access
            conn = sqlite3.connect(str(path), check_same_thread=False)
        except (OSError, sqlite3.Error) as e:
            logger.error("Could not open lunch database %s: %s", path, e)
            raise StorageError(str(e)) from e
        try:
            store = cls(conn, **kwargs)
            if seed_file is not None:
                store.seed(read_seed_file(seed_file))
        except Exception:
            conn.close()
            raise
        logger.info("Lunch database opened at %s", path)
        return store

    @classmethod
    def in_memory(cls, **kwargs) -> "LunchStore":
        return cls(sqlite3.connect(":memory:", check_same_thread=False), **kwargs)

    @contextmanager
    def _locked(self, action: str):
        with self._lock:
            try:
                yield self._conn
            except sqlite3.Error as e:
                logger.error("Lunch store %s failed: %s", action, e)
                raise StorageError(str(e)) from e

    def init_tables(self) -> None:
        with self._locked("init"):
            self._conn.executescript(CREATE_TABLES)

    def close(self) -> None:
        with self._locked("close"):
            self._conn.close()

    def seed(self, rows: Iterable[Tuple[str, str]]) -> int:
        """Bulk-insert the initial list, only when lunch_list is empty.

        Returns the number of inserted rows (0 when the list already had data).
        A duplicate name inside the seed aborts the whole seed.
        """
        rows = [(name, category) for name, category in rows
                if name and name.strip() and category and category.strip()]
        with self._locked("seed") as conn:
            with conn:
                count = conn.execute(COUNT_RESTAURANTS).fetchone()[0]
                if count > 0:
                    logger.debug("Lunch list already holds %d restaurants, seed skipped", count)
                    return 0
                for name, category in rows:
                    try:
                        conn.execute(INSERT_RESTAURANT, (name, category))
                    except sqlite3.IntegrityError as e:
                        raise DuplicateNameError(name) from e
        logger.info("Seeded lunch list with %d restaurants", len(rows))
        return len(rows)

    def list_all(self) -> List[Restaurant]:
        with self._locked("list") as conn:
            rows = conn.execute(LIST_RESTAURANTS).fetchall()
        return [Restaurant.from_row(row) for row in rows]

    def list_by_category(self, category: str) -> List[Restaurant]:
        with self._locked("list by category") as conn:
            return self._select_category(conn, category)

    @staticmethod
    def _select_category(conn: sqlite3.Connection, category: str) -> List[Restaurant]:
        rows = conn.execute(LIST_BY_CATEGORY, (category,)).fetchall()
        return [Restaurant.from_row(row) for row in rows]

    def add(self, name: str, category: str) -> None:
        _require_fields(name, category)
        with self._locked("add") as conn:
            try:
                with conn:
                    conn.execute(INSERT_RESTAURANT, (name, category))
            except sqlite3.IntegrityError as e:
                raise DuplicateNameError(name) from e
        logger.info("Added restaurant %r (%s)", name, category)

    def delete(self, name: str) -> None:
        """Remove a restaurant; an unknown name is not an error."""
        with self._locked("delete") as conn:
            with conn:
                deleted = conn.execute(DELETE_RESTAURANT, (name,)).rowcount
        if deleted:
            logger.info("Deleted restaurant %r", name)

    def update(self, original_name: str, new_name: str, new_category: str) -> None:
        """Rename and/or recategorize an existing restaurant.

        The history row follows a rename so the repeat check still applies.
        """
        _require_fields(new_name, new_category)
        with self._locked("update") as conn:
            with conn:
                if conn.execute(GET_RESTAURANT, (original_name,)).fetchone() is None:
                    raise NotFoundError(original_name)
                renamed = new_name != original_name
                if renamed and conn.execute(GET_RESTAURANT, (new_name,)).fetchone() is not None:
                    raise DuplicateNameError(new_name)
                conn.execute(UPDATE_RESTAURANT, (new_name, new_category, original_name))
                if renamed:
                    conn.execute(RENAME_PICK, (new_name, original_name))
        logger.info("Updated restaurant %r -> %r (%s)", original_name, new_name, new_category)

    def roll(self, category: str) -> Restaurant:
        """Pick a random restaurant from ``category``, avoiding the last pick.

        Only the single most recent pick (any category) is excluded. When that
        exclusion leaves nothing, the full category is used, so a one-entry
        category keeps returning its only entry.
        """
        with self._locked("roll") as conn:
            with conn:
                restaurants = self._select_category(conn, category)
                if not restaurants:
                    raise NoCandidatesError(category)

                last = conn.execute(LAST_PICK).fetchone()
                last_name = last[0] if last else None
                pool = [r for r in restaurants if r.name != last_name] or restaurants
                logger.debug("Rolling %r: %d candidates, last pick %r", category, len(pool), last_name)
                chosen = self._choose(pool)

                picked_at = self._next_timestamp(last[1] if last else None)
                conn.execute(RECORD_PICK, (chosen.name, format_timestamp(picked_at)))
                conn.execute(TRIM_HISTORY, (HISTORY_LIMIT,))
        logger.info("Rolled %r for category %r", chosen.name, category)
        return chosen

    def _next_timestamp(self, last_date: Optional[str]) -> datetime:
        # History order must be strict: never at or before the newest stored pick
        picked_at = self._clock()
        if picked_at.tzinfo is None:
            picked_at = picked_at.replace(tzinfo=timezone.utc)
        if last_date is None:
            return picked_at
        try:
            previous = parse_timestamp(last_date)
        except ValueError:
            logger.warning("Unreadable pick timestamp %r in history", last_date)
            return picked_at
        if picked_at <= previous:
            picked_at = previous + timedelta(microseconds=1)
        return picked_at

    def recent_picks(self) -> List[RecentPick]:
        """History rows, newest first."""
        with self._locked("history") as conn:
            rows = conn.execute(LIST_PICKS).fetchall()
        picks = []
        for row in rows:
            try:
                picks.append(RecentPick.from_row(row))
            except ValueError:
                logger.warning("Skipping unreadable pick timestamp %r for %r", row[1], row[0])
        return picks

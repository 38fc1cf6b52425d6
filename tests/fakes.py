# tests/fakes.py

"""
In-memory stand-in for the slice of the supabase-py table API the
persistence helpers use: select / insert / update / delete / upsert with
eq, in_, is_, order and limit.
"""

import copy
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace


class FakeQuery:
    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.action = "select"
        self.payload = None
        self.on_conflict = None
        self.filters = []
        self.ordering = None
        self.row_limit = None

    # -- actions ----------------------------------------------------
    def select(self, *_columns):
        self.action = "select"
        return self

    def insert(self, data):
        self.action, self.payload = "insert", data
        return self

    def update(self, data):
        self.action, self.payload = "update", data
        return self

    def delete(self):
        self.action = "delete"
        return self

    def upsert(self, data, on_conflict=None):
        self.action, self.payload, self.on_conflict = "upsert", data, on_conflict
        return self

    # -- filters ----------------------------------------------------
    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def is_(self, column, value):
        assert value == "null"
        self.filters.append(lambda row: row.get(column) is None)
        return self

    def order(self, column, desc=False):
        self.ordering = (column, desc)
        return self

    def limit(self, count):
        self.row_limit = count
        return self

    # -- execution --------------------------------------------------
    def _matching(self):
        return [row for row in self.db.rows(self.table) if all(f(row) for f in self.filters)]

    def execute(self):
        self.db.calls.append((self.table, self.action))
        handler = getattr(self, f"_execute_{self.action}")
        return SimpleNamespace(data=copy.deepcopy(handler()))

    def _execute_select(self):
        rows = self._matching()
        if self.ordering:
            column, desc = self.ordering
            rows = sorted(
                rows,
                key=lambda r: (r.get(column) is None, str(r.get(column))),
                reverse=desc,
            )
        if self.row_limit is not None:
            rows = rows[: self.row_limit]
        return rows

    def _execute_insert(self):
        return [self.db.add(self.table, self.payload)]

    def _execute_update(self):
        updated = []
        for row in self._matching():
            row.update(copy.deepcopy(self.payload))
            updated.append(row)
        return updated

    def _execute_delete(self):
        doomed = self._matching()
        doomed_ids = {id(r) for r in doomed}
        self.db.tables[self.table] = [r for r in self.db.rows(self.table) if id(r) not in doomed_ids]
        return doomed

    def _execute_upsert(self):
        key = self.on_conflict
        for row in self.db.rows(self.table):
            if key and row.get(key) == self.payload.get(key):
                row.update(copy.deepcopy(self.payload))
                return [row]
        return [self.db.add(self.table, self.payload)]


class FakeSupabase:
    """Tables are lists of dicts; ids are uuids; created_at strictly increases."""

    def __init__(self):
        self.tables = {}
        self.calls = []
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def rows(self, table):
        return self.tables.setdefault(table, [])

    def _tick(self):
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    def add(self, table, data):
        row = copy.deepcopy(data)
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", self._tick())
        self.rows(table).append(row)
        return row

    def seed(self, table, **data):
        """Insert a row directly and return a copy."""
        return copy.deepcopy(self.add(table, data))

    def table(self, name):
        return FakeQuery(self, name)

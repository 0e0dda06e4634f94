"""In-memory stand-ins for the Supabase table and auth clients."""

import itertools
import os
import random
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from postgrest import APIError
from supabase import AuthError

os.environ.setdefault("SUPABASE_URL", "https://example.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-test-key")

from dreamrate.crud import DreamCRUD, ReviewCRUD  # noqa: E402

# Embedded relations the fake understands: select alias -> (table, local key, remote key, many)
RELATIONS = {
    ("dreams", "reviews"): ("reviews", "id", "dream_id", True),
    ("reviews", "dreams"): ("dreams", "dream_id", "id", False),
}
FOREIGN_KEYS = {"reviews": ("dream_id", "dreams")}
EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeAuthError(AuthError):
    """AuthError with a stable constructor across supabase-auth releases."""

    def __init__(self, message, code=None):
        Exception.__init__(self, message)
        self.message = message
        self.code = code
        self.status = 400


class FakeRequest:
    """Chainable request builder mimicking postgrest's async builders."""

    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = "select"
        self.columns = "*"
        self.payload = None
        self.filters = []
        self.ordering = None
        self.limit_count = None
        self.bounds = None
        self.is_single = False

    def select(self, columns="*"):
        self.columns = columns
        return self

    def insert(self, row):
        self.op, self.payload = "insert", dict(row)
        return self

    def update(self, row):
        self.op, self.payload = "update", dict(row)
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) is not None and row.get(column) == value)
        return self

    def neq(self, column, value):
        self.filters.append(lambda row: row.get(column) is not None and row.get(column) != value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column, desc=False):
        self.ordering = (column, desc)
        return self

    def limit(self, count):
        self.limit_count = count
        return self

    def range(self, start, end):
        self.bounds = (start, end)
        return self

    def single(self):
        self.is_single = True
        return self

    def _matches(self):
        return [row for row in self.db.tables[self.table] if all(f(row) for f in self.filters)]

    def _embed(self, row):
        out = dict(row)
        for alias in ("reviews", "dreams"):
            if f"{alias}(" not in self.columns:
                continue
            other, local_key, remote_key, many = RELATIONS[(self.table, alias)]
            related = [dict(r) for r in self.db.tables[other] if r.get(remote_key) == row.get(local_key)]
            out[alias] = related if many else (related[0] if related else None)
        return out

    async def execute(self):
        self.db.calls.append((self.table, self.op))
        if self.db.fail_next is not None:
            error, self.db.fail_next = self.db.fail_next, None
            raise error

        if self.op == "insert":
            data = [self.db.insert_row(self.table, self.payload)]
        elif self.op == "update":
            data = []
            for row in self._matches():
                row.update(self.payload)
                data.append(dict(row))
        elif self.op == "delete":
            doomed = self._matches()
            self.db.tables[self.table] = [r for r in self.db.tables[self.table] if r not in doomed]
            data = [dict(r) for r in doomed]
        else:
            rows = self._matches()
            if self.ordering:
                column, desc = self.ordering
                rows = sorted(rows, key=lambda r: r.get(column), reverse=desc)
            if self.limit_count is not None:
                rows = rows[: self.limit_count]
            if self.bounds is not None:
                rows = rows[self.bounds[0]: self.bounds[1] + 1]
            if self.db.max_rows is not None:
                rows = rows[: self.db.max_rows]
            data = [self._embed(r) for r in rows]

        if self.is_single:
            if len(data) != 1:
                raise APIError({
                    "code": "PGRST116",
                    "message": "JSON object requested, multiple (or no) rows returned",
                    "details": f"The result contains {len(data)} rows",
                    "hint": None,
                })
            data = data[0]
        return SimpleNamespace(data=data, count=None)


class FakeAuth:
    """Mimics the async GoTrue client surface used by AuthService."""

    def __init__(self):
        self.users = {}
        self.tokens = {}
        self.session = None
        self.listeners = []
        self.get_session_calls = 0
        self.session_error = None

    def on_auth_state_change(self, callback):
        self.listeners.append(callback)
        return SimpleNamespace(unsubscribe=lambda: self.listeners.remove(callback))

    def emit(self, event, session):
        for callback in list(self.listeners):
            callback(event, session)

    def _start_session(self, user):
        token = f"token-{user.id}-{len(self.tokens)}"
        self.tokens[token] = user
        self.session = SimpleNamespace(
            user=user, access_token=token, refresh_token=f"refresh-{token}", expires_at=1_900_000_000
        )
        self.emit("SIGNED_IN", self.session)
        return SimpleNamespace(user=user, session=self.session)

    async def get_session(self):
        self.get_session_calls += 1
        if self.session_error is not None:
            raise self.session_error
        return self.session

    async def sign_up(self, credentials):
        email = credentials["email"]
        if email in self.users:
            raise FakeAuthError("User already registered", code="user_already_exists")
        user = SimpleNamespace(id=f"user-{len(self.users) + 1}", email=email)
        self.users[email] = (user, credentials["password"])
        return self._start_session(user)

    async def sign_in_with_password(self, credentials):
        user, password = self.users.get(credentials["email"], (None, None))
        if user is None or password != credentials["password"]:
            raise FakeAuthError("Invalid login credentials", code="invalid_credentials")
        return self._start_session(user)

    async def sign_out(self):
        self.session = None
        self.emit("SIGNED_OUT", None)

    async def get_user(self, jwt=None):
        if jwt is None:
            return SimpleNamespace(user=self.session.user) if self.session else None
        if jwt not in self.tokens:
            raise FakeAuthError("invalid JWT", code="bad_jwt")
        return SimpleNamespace(user=self.tokens[jwt])


class FakeSupabase:
    """Just enough of supabase.AsyncClient: `.table()` and `.auth`."""

    def __init__(self):
        self.tables = {"dreams": [], "reviews": []}
        self.calls = []
        self.fail_next = None
        # Server-side cap on rows per response, like PostgREST max-rows.
        self.max_rows = None
        self.auth = FakeAuth()
        self._ids = {name: itertools.count(1) for name in self.tables}
        self._clock = itertools.count(1)

    def table(self, name):
        return FakeRequest(self, name)

    def insert_row(self, table, payload):
        fk = FOREIGN_KEYS.get(table)
        if fk:
            column, parent = fk
            if not any(r["id"] == payload.get(column) for r in self.tables[parent]):
                raise APIError({
                    "code": "23503",
                    "message": f'insert or update on table "{table}" violates foreign key constraint',
                    "details": f"Key ({column})=({payload.get(column)}) is not present in table \"{parent}\".",
                    "hint": None,
                })
        row = dict(payload)
        if "created_by" not in row and self.auth.session is not None:
            row["created_by"] = self.auth.session.user.id
        row["id"] = next(self._ids[table])
        row["created_at"] = (EPOCH + timedelta(seconds=next(self._clock))).isoformat()
        self.tables[table].append(row)
        return dict(row)


@pytest.fixture
def fake_db():
    return FakeSupabase()


@pytest.fixture
def dreams(fake_db):
    return DreamCRUD(fake_db, rng=random.Random(7))


@pytest.fixture
def reviews(fake_db):
    return ReviewCRUD(fake_db)

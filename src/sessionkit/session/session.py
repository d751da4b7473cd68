# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Session: key/value session data with identity, expiry and change tracking."""

from __future__ import annotations

import copy
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any, TypeVar, overload

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json, to_jsonable_python

from sessionkit.session import cookie
from sessionkit.session.exceptions import SessionSerializationError

T = TypeVar("T")


class SessionRecord(BaseModel):
    """Durable form of a session.

    Only ``id``, ``expiry`` and ``data`` are persisted; the pending cookie
    secret and the change/destroy flags never leave the process.
    """

    id: str
    expiry: datetime | None = None
    data: dict[str, Any] = {}


@lru_cache(maxsize=256)
def _adapter(as_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(as_type)


def _now() -> datetime:
    return datetime.now(UTC)


def _as_utc(expiry: datetime | None) -> datetime | None:
    """Timezone-less expiries are taken as UTC."""
    if expiry is not None and expiry.tzinfo is None:
        return expiry.replace(tzinfo=UTC)
    return expiry


def _same_json(a: Any, b: Any) -> bool:
    """Equality as JSON sees it: ``True`` is not ``1`` at any depth."""
    if type(a) is not type(b):
        return False
    if isinstance(a, dict):
        return a.keys() == b.keys() and all(_same_json(a[k], b[k]) for k in a)
    if isinstance(a, list | tuple):
        return len(a) == len(b) and all(_same_json(x, y) for x, y in zip(a, b))
    return a == b


class Session:
    """A session: string keys mapped to JSON-compatible values.

    ``Session()`` creates a fresh session with a random cookie secret and the
    id derived from it. Stores rebuild existing sessions with
    :meth:`from_parts` or :meth:`from_record`, which never carry a secret.

    The pending cookie value is handed out once by :meth:`take_cookie_value`;
    a store returns it to the caller, who sends it to the client.

    Equality and hashing consider the id only.
    """

    __slots__ = ("_id", "_expiry", "_data", "_cookie_value", "_data_changed", "_destroy")

    def __init__(self) -> None:
        cookie_value = cookie.generate_secret(cookie.SECRET_LENGTH)
        self._id = cookie.derive_id(cookie_value)
        self._expiry: datetime | None = None
        self._data: dict[str, Any] = {}
        self._cookie_value: str | None = cookie_value
        self._data_changed = False
        self._destroy = False

    @classmethod
    def new(cls) -> Session:
        return cls()

    @classmethod
    def from_parts(
        cls,
        session_id: str,
        data: dict[str, Any] | None = None,
        expiry: datetime | None = None,
    ) -> Session:
        """Rebuild a session from the parts a store persisted."""
        session = cls.__new__(cls)
        session._id = session_id
        session._expiry = _as_utc(expiry)
        session._data = dict(data) if data is not None else {}
        session._cookie_value = None
        session._data_changed = False
        session._destroy = False
        return session

    @classmethod
    def from_record(cls, record: SessionRecord) -> Session:
        return cls.from_parts(record.id, record.data, record.expiry)

    def to_record(self) -> SessionRecord:
        return SessionRecord(id=self._id, expiry=self._expiry, data=copy.deepcopy(self._data))

    @staticmethod
    def id_from_cookie_value(cookie_value: str) -> str:
        """Session id for *cookie_value*. Raises ``CookieDecodeError`` on bad base64."""
        return cookie.derive_id(cookie_value)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def id(self) -> str:
        return self._id

    def regenerate(self) -> None:
        """Issue a new cookie secret and id, keeping data and expiry.

        Call after a privilege change (e.g. login) so that a cookie value
        planted before it stops identifying the session.
        """
        cookie_value = cookie.generate_secret(cookie.SECRET_LENGTH)
        self._id = cookie.derive_id(cookie_value)
        self._cookie_value = cookie_value

    def set_cookie_value(self, cookie_value: str) -> None:
        """Replace the pending cookie value. For store implementations."""
        self._cookie_value = cookie_value

    def take_cookie_value(self) -> str | None:
        """Hand out the pending cookie value; later calls return ``None``."""
        cookie_value, self._cookie_value = self._cookie_value, None
        return cookie_value

    def into_cookie_value(self) -> str | None:
        """Consuming form of :meth:`take_cookie_value`.

        The session should not be used afterwards.
        """
        return self.take_cookie_value()

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    @property
    def data(self) -> dict[str, Any]:
        """A copy of the session data."""
        return copy.deepcopy(self._data)

    def insert(self, key: str, value: Any) -> None:
        """Store *value* under *key* after converting it to JSON-compatible form.

        Raises:
            SessionSerializationError: If *value* has no JSON representation.
        """
        try:
            json_value = to_jsonable_python(value)
        except (PydanticSerializationError, ValueError, TypeError) as exc:
            raise SessionSerializationError(key, str(exc)) from exc
        self.insert_value(key, json_value)

    def insert_value(self, key: str, value: Any) -> None:
        """Store an already JSON-compatible *value*; unchanged values are a no-op."""
        if key in self._data:
            if _same_json(self._data[key], value):
                return
        self._data[key] = copy.deepcopy(value)
        self._data_changed = True

    @overload
    def get(self, key: str) -> Any | None: ...

    @overload
    def get(self, key: str, as_type: type[T]) -> T | None: ...

    def get(self, key: str, as_type: Any = Any) -> Any | None:
        """Return the value under *key* validated as *as_type*.

        Returns ``None`` when the key is absent or the stored value does not
        validate as *as_type*, so ``None`` means "absent or wrong shape".
        """
        value = self.get_value(key)
        if value is None:
            return None
        try:
            # strict JSON validation: "1" is not an int, true is not 1
            return _adapter(as_type).validate_json(to_json(value), strict=True)
        except (ValidationError, PydanticSerializationError):
            return None

    def get_value(self, key: str) -> Any | None:
        """Return a copy of the raw JSON value under *key*, or ``None``."""
        if key not in self._data:
            return None
        return copy.deepcopy(self._data[key])

    def remove(self, key: str) -> None:
        self.take_value(key)

    def take_value(self, key: str) -> Any | None:
        """Remove *key* and return its value, or ``None`` if it was absent."""
        if key not in self._data:
            return None
        self._data_changed = True
        return self._data.pop(key)

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        # an empty session is still a session
        return True

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def is_empty(self) -> bool:
        return not self._data

    @property
    def data_changed(self) -> bool:
        """Whether data changed since creation, load or the last reset."""
        return self._data_changed

    def reset_data_changed(self) -> None:
        self._data_changed = False

    # ------------------------------------------------------------------
    # Expiry
    # ------------------------------------------------------------------

    @property
    def expiry(self) -> datetime | None:
        return self._expiry

    def set_expiry(self, expiry: datetime) -> None:
        """Expire at *expiry*. Naive datetimes are taken as UTC."""
        self._expiry = _as_utc(expiry)

    def expire_in(self, ttl: timedelta | float) -> None:
        """Expire *ttl* from now (a ``timedelta`` or seconds)."""
        if not isinstance(ttl, timedelta):
            ttl = timedelta(seconds=ttl)
        self._expiry = _now() + ttl

    @property
    def expires_in(self) -> timedelta | None:
        """Time left before expiry; ``None`` without expiry or once expired."""
        if self._expiry is None:
            return None
        remaining = self._expiry - _now()
        if remaining < timedelta(0):
            return None
        return remaining

    def is_expired(self) -> bool:
        return self._expiry is not None and self._expiry < _now()

    def validate(self) -> Session | None:
        """Return this session, or ``None`` if it has expired."""
        if self.is_expired():
            return None
        return self

    # ------------------------------------------------------------------
    # Destruction
    # ------------------------------------------------------------------

    def destroy(self) -> None:
        """Flag the session for removal. The store is not touched here."""
        self._destroy = True

    @property
    def is_destroyed(self) -> bool:
        return self._destroy

    # ------------------------------------------------------------------

    def copy(self) -> Session:
        """Independent copy, including the pending cookie value and flags."""
        clone = Session.from_parts(self._id, copy.deepcopy(self._data), self._expiry)
        clone._cookie_value = self._cookie_value
        clone._data_changed = self._data_changed
        clone._destroy = self._destroy
        return clone

    __copy__ = copy

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Session):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Session(id={self._id!r}, expiry={self._expiry!r}, keys={sorted(self._data)!r})"

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
"""In-memory session store over a sharded, lock-per-shard map."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

import structlog

from sessionkit.session.cookie import derive_id
from sessionkit.session.exceptions import CookieDecodeError, MemoryStoreError
from sessionkit.session.session import Session

logger = structlog.get_logger("sessionkit.session.memory")

DEFAULT_SHARDS = 16


class _Shard:
    __slots__ = ("lock", "entries")

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.entries: dict[str, Session] = {}


class ShardedSessionMap:
    """Session map split into independently locked shards.

    Keys hash to one shard; every operation on a key holds only that shard's
    lock, so writers for ids in different shards never wait on each other.
    Whole-map operations (``clear``, ``retain``, ``len``) visit the shards one
    at a time and are not atomic across shards.
    """

    def __init__(self, shards: int = DEFAULT_SHARDS) -> None:
        if shards < 1:
            raise ValueError(f"shards must be >= 1, got {shards}")
        self._shards = tuple(_Shard() for _ in range(shards))

    def _shard(self, key: str) -> _Shard:
        return self._shards[hash(key) % len(self._shards)]

    @contextmanager
    def entry(self, key: str) -> Iterator[dict[str, Session]]:
        """Hold the lock for *key*'s shard and yield the shard's dict."""
        shard = self._shard(key)
        with shard.lock:
            yield shard.entries

    def insert(self, key: str, session: Session) -> None:
        with self.entry(key) as entries:
            entries[key] = session

    def remove(self, key: str) -> Session | None:
        with self.entry(key) as entries:
            return entries.pop(key, None)

    def clear(self) -> None:
        for shard in self._shards:
            with shard.lock:
                shard.entries.clear()

    def retain(self, keep: Callable[[Session], bool]) -> int:
        """Drop entries for which *keep* is false; return how many were dropped."""
        dropped = 0
        for shard in self._shards:
            with shard.lock:
                doomed = [key for key, session in shard.entries.items() if not keep(session)]
                for key in doomed:
                    del shard.entries[key]
                dropped += len(doomed)
        return dropped

    def __len__(self) -> int:
        total = 0
        for shard in self._shards:
            with shard.lock:
                total += len(shard.entries)
        return total


class MemoryStore:
    """Process-local session store keyed by session id.

    Expired sessions are evicted lazily when loaded; call :meth:`cleanup`
    periodically to evict the ones nobody reads again. Sessions go in and
    come out as copies, so callers never share a record with the store.

    Share one instance between all callers; there is no cross-instance state.
    """

    def __init__(self, shards: int = DEFAULT_SHARDS) -> None:
        self._sessions = ShardedSessionMap(shards)

    async def load_session(self, cookie_value: str) -> Session | None:
        try:
            session_id = derive_id(cookie_value)
        except CookieDecodeError as exc:
            logger.warning("session_cookie_rejected", reason=str(exc))
            raise MemoryStoreError(str(exc), code=exc.code) from exc

        with self._sessions.entry(session_id) as entries:
            session = entries.get(session_id)
            if session is None:
                return None
            if session.is_expired():
                del entries[session_id]
                logger.debug("session_expired_evicted", session_id=session_id)
                return None
            loaded = session.copy()

        logger.debug("session_loaded", session_id=session_id)
        return loaded

    async def store_session(self, session: Session) -> str | None:
        session.reset_data_changed()
        cookie_value = session.take_cookie_value()
        self._sessions.insert(session.id, session.copy())
        logger.debug("session_stored", session_id=session.id, new_cookie=cookie_value is not None)
        return cookie_value

    async def destroy_session(self, session: Session) -> None:
        removed = self._sessions.remove(session.id)
        logger.debug("session_destroyed", session_id=session.id, existed=removed is not None)

    async def clear_store(self) -> None:
        self._sessions.clear()
        logger.debug("store_cleared")

    def cleanup(self) -> int:
        """Evict every expired session; returns the number evicted."""
        evicted = self._sessions.retain(lambda session: not session.is_expired())
        logger.debug("store_cleanup_completed", evicted=evicted)
        return evicted

    def count(self) -> int:
        """Number of stored sessions, expired ones included until evicted."""
        return len(self._sessions)

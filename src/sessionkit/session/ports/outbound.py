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
"""Session store protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from sessionkit.session.session import Session


@runtime_checkable
class SessionStore(Protocol):
    """Persistence contract every session backend implements.

    Backends raise their own :class:`~sessionkit.session.exceptions.SessionStoreError`
    subclass and nothing else. Expiry is never an error: an expired session
    loads as ``None``.
    """

    async def load_session(self, cookie_value: str) -> Session | None:
        """Rebuild the session identified by *cookie_value*.

        Returns ``None`` if it is unknown or expired.
        """
        ...

    async def store_session(self, session: Session) -> str | None:
        """Persist *session*.

        Returns the cookie value to send to the client, or ``None`` if the
        client already holds a valid one.
        """
        ...

    async def destroy_session(self, session: Session) -> None:
        """Remove *session*. Removing an absent session is not an error."""
        ...

    async def clear_store(self) -> None:
        """Remove every session the backend manages."""
        ...

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
"""Session exceptions: codec, (de)serialization and store failures."""

from __future__ import annotations

from sessionkit.kernel.exceptions import InfrastructureException, ValidationException


class SessionException(ValidationException):
    """Base class for errors raised by the session entity and its codec."""


class CookieDecodeError(SessionException):
    """A cookie value is not valid standard base64."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Cookie value is not valid base64: {reason}", code="SESSION_DECODE")


class SessionSerializationError(SessionException):
    """A value cannot be converted to a JSON-compatible session value."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        super().__init__(
            f"Cannot store value for session key '{key}': {reason}",
            code="SESSION_SERIALIZE",
            context={"key": key},
        )


class SessionDeserializationError(SessionException):
    """Decoded bytes do not describe a session record."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Malformed session record: {reason}", code="SESSION_DESERIALIZE")


class SessionStoreError(InfrastructureException):
    """Base class for the error kind each store backend declares."""


class MemoryStoreError(SessionStoreError):
    """Error raised by :class:`~sessionkit.session.adapters.memory.MemoryStore`."""


class CookieStoreError(SessionStoreError):
    """Error raised by :class:`~sessionkit.session.adapters.cookie.CookieStore`."""


class UnknownSessionStoreError(InfrastructureException):
    """Configuration names a store backend that does not exist."""

    def __init__(self, store: str, available: list[str]) -> None:
        self.store = store
        self.available = available
        super().__init__(
            f"Unknown session store '{store}' (available: {', '.join(available)})",
            code="SESSION_STORE_UNKNOWN",
            context={"store": store},
        )

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
"""sessionkit session: session entity, cookie value codec and pluggable stores.

Import concrete store types from the adapter package::

    from sessionkit.session.adapters.memory import MemoryStore
    from sessionkit.session.adapters.cookie import CookieStore
"""

from sessionkit.session.cookie import derive_id, generate_secret
from sessionkit.session.exceptions import (
    CookieDecodeError,
    CookieStoreError,
    MemoryStoreError,
    SessionDeserializationError,
    SessionException,
    SessionSerializationError,
    SessionStoreError,
    UnknownSessionStoreError,
)
from sessionkit.session.session import Session, SessionRecord
from sessionkit.session.ports.outbound import SessionStore

__all__ = [
    "CookieDecodeError",
    "CookieStoreError",
    "MemoryStoreError",
    "Session",
    "SessionDeserializationError",
    "SessionException",
    "SessionRecord",
    "SessionSerializationError",
    "SessionStore",
    "SessionStoreError",
    "UnknownSessionStoreError",
    "derive_id",
    "generate_secret",
]

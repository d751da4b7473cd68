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
"""Build the configured session store."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import structlog

from sessionkit.core.config import Config
from sessionkit.session.adapters.cookie import CookieStore
from sessionkit.session.adapters.memory import MemoryStore
from sessionkit.session.exceptions import UnknownSessionStoreError
from sessionkit.session.ports.outbound import SessionStore
from sessionkit.session.properties import SessionProperties

logger = structlog.get_logger("sessionkit.session.factory")

_STORES: dict[str, Callable[[SessionProperties], SessionStore]] = {
    "memory": lambda props: MemoryStore(shards=props.shards),
    "cookie": lambda props: CookieStore(),
}


def create_session_store(config: Config | None = None) -> SessionStore:
    """Create the store named by ``sessionkit.session.store``.

    Without *config*, configuration is loaded from the working directory.

    Raises:
        UnknownSessionStoreError: If the name is not a known backend.
    """
    props = (config or Config.from_sources(Path.cwd())).bind(SessionProperties)
    store_type = props.store.strip().lower()
    factory = _STORES.get(store_type)
    if factory is None:
        raise UnknownSessionStoreError(props.store, sorted(_STORES))

    store = factory(props)
    logger.info("session_store_created", store=store_type)
    return store

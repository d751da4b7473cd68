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
"""One-call setup: load configuration, configure logging, build the session store."""

from __future__ import annotations

from pathlib import Path

from sessionkit.core.config import Config
from sessionkit.logging.setup import configure_logging
from sessionkit.session.factory import create_session_store
from sessionkit.session.ports.outbound import SessionStore


def bootstrap(
    config: Config | None = None,
    *,
    active_profiles: list[str] | None = None,
    configure_logs: bool = True,
) -> SessionStore:
    """Return the configured session store, configuring logging first.

    Without *config*, configuration is loaded from the working directory with
    *active_profiles* applied. Pass ``configure_logs=False`` when the host
    application owns the logging setup.
    """
    if config is None:
        config = Config.from_sources(Path.cwd(), active_profiles=active_profiles)
    if configure_logs:
        configure_logging(config)
    return create_session_store(config)

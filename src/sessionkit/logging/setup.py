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
"""structlog setup for sessionkit and the application around it.

Keys read from :class:`~sessionkit.core.config.Config`:

``sessionkit.logging.level``
    Root level name (default ``INFO``).
``sessionkit.logging.format``
    ``console`` (default) or ``json``.
``sessionkit.logging.loggers``
    Mapping of logger name to level, e.g. ``sessionkit.session.memory: DEBUG``.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

from sessionkit.core.config import Config

_LEVEL_KEY = "sessionkit.logging.level"
_FORMAT_KEY = "sessionkit.logging.format"
_LOGGERS_KEY = "sessionkit.logging.loggers"

# event keys that would carry a client's bearer secret
SECRET_KEYS = frozenset({"cookie_value", "cookie", "secret"})
REDACTED = "**redacted**"


def redact_secrets(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor masking cookie values passed as event fields."""
    for key in SECRET_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def _level(name: Any) -> int:
    value = logging.getLevelName(str(name).upper())
    return value if isinstance(value, int) else logging.INFO


def configure_logging(config: Config) -> None:
    """Configure structlog over stdlib logging from *config*."""
    renderer: structlog.types.Processor
    if str(config.get(_FORMAT_KEY, "console")).lower() == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            redact_secrets,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=_level(config.get(_LEVEL_KEY, "INFO")),
        force=True,
    )

    for name, level in config.get_section(_LOGGERS_KEY).items():
        logging.getLogger(name).setLevel(_level(level))

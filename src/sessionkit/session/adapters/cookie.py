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
"""Cookie session store: the whole session travels in the cookie value."""

from __future__ import annotations

import base64

import structlog
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from sessionkit.session import cookie
from sessionkit.session.exceptions import (
    CookieDecodeError,
    CookieStoreError,
    SessionDeserializationError,
)
from sessionkit.session.session import Session, SessionRecord

logger = structlog.get_logger("sessionkit.session.cookie")


class CookieStore:
    """Stateless store that encodes ``id``, ``expiry`` and ``data`` into the cookie.

    The cookie value is base64 of the record's compact JSON. It is neither
    encrypted nor signed: clients can read and alter it, so keep only data
    that is safe in their hands. There is nothing server-side to remove,
    so :meth:`destroy_session` and :meth:`clear_store` do nothing; the caller
    drops the client's cookie instead.
    """

    async def load_session(self, cookie_value: str) -> Session | None:
        try:
            serialized = cookie.decode(cookie_value)
        except CookieDecodeError as exc:
            logger.warning("session_cookie_rejected", reason=str(exc))
            raise CookieStoreError(str(exc), code=exc.code) from exc

        try:
            record = SessionRecord.model_validate_json(serialized)
        except ValidationError as exc:
            error = SessionDeserializationError(f"{exc.error_count()} validation error(s)")
            logger.warning("session_cookie_rejected", reason=str(error))
            raise CookieStoreError(str(error), code=error.code) from exc

        session = Session.from_record(record).validate()
        if session is None:
            logger.debug("session_expired", session_id=record.id)
        return session

    async def store_session(self, session: Session) -> str | None:
        try:
            serialized = session.to_record().model_dump_json().encode("utf-8")
        except PydanticSerializationError as exc:
            logger.warning("session_not_encodable", session_id=session.id, reason=str(exc))
            raise CookieStoreError(str(exc), code="SESSION_SERIALIZE") from exc
        return base64.b64encode(serialized).decode("ascii")

    async def destroy_session(self, session: Session) -> None:
        return None

    async def clear_store(self) -> None:
        return None

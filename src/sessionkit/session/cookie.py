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
"""Cookie value codec: random cookie secrets and the session ids derived from them.

A cookie value is a base64-encoded random secret. The session id is the
base64-encoded BLAKE2s-256 digest of the decoded secret, so an id can be used
as a storage key or logged without revealing the value the client holds, and
knowing an id does not allow forging a cookie value that maps to it.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import secrets

from sessionkit.session.exceptions import CookieDecodeError

SECRET_LENGTH = 64
ID_DIGEST_SIZE = 32


def generate_secret(byte_length: int = SECRET_LENGTH) -> str:
    """Return *byte_length* cryptographically random bytes as standard base64."""
    return base64.b64encode(secrets.token_bytes(byte_length)).decode("ascii")


def decode(value: str) -> bytes:
    """Strict standard-base64 decode; raises :class:`CookieDecodeError`."""
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise CookieDecodeError(str(exc)) from exc


def derive_id(cookie_value: str) -> str:
    """Derive the session id for *cookie_value*.

    Deterministic: the same cookie value always yields the same id.

    Raises:
        CookieDecodeError: If *cookie_value* is not valid base64.
    """
    digest = hashlib.blake2s(decode(cookie_value), digest_size=ID_DIGEST_SIZE).digest()
    return base64.b64encode(digest).decode("ascii")

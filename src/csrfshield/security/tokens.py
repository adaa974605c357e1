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
"""CSRF token utilities: generation and timing-safe comparison.

Tokens are random bytes encoded with the URL-safe base64 alphabet and no
padding, so the default 32 bytes yield a 43 character string.
"""

from __future__ import annotations

import secrets

from csrfshield.kernel.exceptions import TokenGenerationException

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
UNSAFE_METHODS: frozenset[str] = frozenset({"POST", "PUT", "PATCH", "DELETE"})
"""HTTP methods that require CSRF validation. Matched case-sensitively."""

MIN_TOKEN_LENGTH: int = 16
"""Cookie values shorter than this are treated as absent and regenerated."""


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------
def generate_token(n: int) -> str:
    """Generate a cryptographically-secure CSRF token from *n* random bytes.

    Raises:
        ValueError: If *n* is not positive.
        TokenGenerationException: If the system random source fails.
    """
    if n <= 0:
        raise ValueError(f"token size must be positive, got {n}")
    try:
        return secrets.token_urlsafe(n)
    except (OSError, NotImplementedError) as exc:
        raise TokenGenerationException(
            "random source unavailable", code="CSRF_TOKEN_GENERATION", context={"bytes": n}
        ) from exc


def tokens_match(presented: str, expected: str) -> bool:
    """Compare two tokens in constant time.

    Both values are compared as UTF-8 bytes; tokens of different lengths
    never match.
    """
    return secrets.compare_digest(presented.encode("utf-8"), expected.encode("utf-8"))


def is_usable_cookie_token(value: str | None) -> bool:
    """Return ``True`` if an existing cookie value can be reused as the token."""
    return value is not None and len(value) >= MIN_TOKEN_LENGTH

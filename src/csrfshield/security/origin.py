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
"""Origin/Referer validation for state-changing requests.

This is a strict same-host check: the host (and port, if any) of the
presented URL must equal the allowed host, ignoring case. Subdomains are not
treated as equivalent.
"""

from __future__ import annotations

from urllib.parse import urlsplit

from csrfshield.kernel.exceptions import InvalidOriginException


def url_host(url: str) -> str | None:
    """Return the ``host[:port]`` part of *url*, or ``None`` if it cannot be parsed."""
    try:
        parts = urlsplit(url)
        # .port raises ValueError on a malformed port
        parts.port
    except ValueError:
        return None
    host = parts.netloc.rpartition("@")[2]
    return host or None


def same_host(url: str, allowed_host: str) -> bool:
    """Return ``True`` if *url* points at *allowed_host*. Parse failures never match."""
    host = url_host(url)
    if host is None or not allowed_host:
        return False
    return host.lower() == allowed_host.lower()


def validate_origin_or_referer(
    origin: str | None,
    referer: str | None,
    request_host: str | None,
    allowed_host: str | None = None,
) -> None:
    """Check that a request was issued from the allowed host.

    ``Origin`` is preferred; ``Referer`` is consulted only when ``Origin`` is
    absent. The allowed host is *allowed_host* when set, otherwise the
    request's own host.

    Raises:
        InvalidOriginException: If neither header is present or the presented
            URL does not match the allowed host.
    """
    host = allowed_host or request_host or ""

    if not origin and not referer:
        raise InvalidOriginException(context={"reason": "no origin or referer"})

    if origin:
        if not same_host(origin, host):
            raise InvalidOriginException(context={"reason": "origin mismatch", "origin": origin})
        return

    if referer and not same_host(referer, host):
        raise InvalidOriginException(context={"reason": "referer mismatch", "referer": referer})

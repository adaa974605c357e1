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
"""CSRF protector configuration.

``CsrfProperties`` is immutable and shared read-only by every request a
protector handles. Unset fields are replaced by fixed defaults on
construction, so every instance is fully populated.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from csrfshield.core.config import config_properties
from csrfshield.kernel.exceptions import ConfigurationException

DEFAULT_COOKIE_NAME = "csrf_token"
DEFAULT_COOKIE_PATH = "/"
DEFAULT_HEADER_NAME = "X-CSRF-Token"
DEFAULT_FORM_FIELD = "csrf_token"
DEFAULT_TOKEN_BYTES = 32


class SameSite(StrEnum):
    """SameSite attribute of the token cookie."""

    LAX = "lax"
    STRICT = "strict"
    NONE = "none"


@config_properties(prefix="csrfshield.csrf")
@dataclass(frozen=True)
class CsrfProperties:
    """Cookie, transport and policy settings for the CSRF protector (csrfshield.csrf.*).

    Attributes:
        cookie_name: Name of the token cookie.
        cookie_path: ``Path`` attribute of the cookie.
        cookie_domain: ``Domain`` attribute; empty omits it.
        cookie_secure: ``Secure`` flag. Enable in production behind HTTPS.
        cookie_http_only: ``HttpOnly`` flag. Defaults to ``False`` because the
            double-submit pattern expects client scripts to read the cookie.
            Enabling it is only useful when clients fetch the token from the
            token endpoint; it is not an XSS mitigation, since script running
            on the protected origin can fetch the token anyway.
        cookie_same_site: ``SameSite`` attribute.
        cookie_max_age: ``Max-Age`` in seconds. ``0`` issues a session cookie;
            negative values are not emitted either.
        header_name: Request header carrying the client-presented token.
        form_field: Form field carrying the token when the header is absent.
        enforce_origin_check: Validate ``Origin``/``Referer`` on unsafe methods.
        allowed_origin: Host (optionally ``host:port``) that unsafe requests must
            come from. Empty means the request's own host.
        token_bytes: Number of random bytes per token.
    """

    cookie_name: str = DEFAULT_COOKIE_NAME
    cookie_path: str = DEFAULT_COOKIE_PATH
    cookie_domain: str = ""
    cookie_secure: bool = False
    cookie_http_only: bool = False
    cookie_same_site: SameSite = SameSite.LAX
    cookie_max_age: int = 0
    header_name: str = DEFAULT_HEADER_NAME
    form_field: str = DEFAULT_FORM_FIELD
    enforce_origin_check: bool = False
    allowed_origin: str = ""
    token_bytes: int = DEFAULT_TOKEN_BYTES

    def __post_init__(self) -> None:
        # frozen: defaults are applied through object.__setattr__
        if not self.cookie_name:
            object.__setattr__(self, "cookie_name", DEFAULT_COOKIE_NAME)
        if not self.cookie_path:
            object.__setattr__(self, "cookie_path", DEFAULT_COOKIE_PATH)
        if not self.header_name:
            object.__setattr__(self, "header_name", DEFAULT_HEADER_NAME)
        if not self.form_field:
            object.__setattr__(self, "form_field", DEFAULT_FORM_FIELD)
        if self.token_bytes is None or self.token_bytes <= 0:
            object.__setattr__(self, "token_bytes", DEFAULT_TOKEN_BYTES)
        object.__setattr__(self, "cookie_same_site", _to_same_site(self.cookie_same_site))

    @property
    def max_age(self) -> int | None:
        """``Max-Age`` to emit, or ``None`` for a session cookie."""
        return self.cookie_max_age if self.cookie_max_age and self.cookie_max_age > 0 else None

    @property
    def domain(self) -> str | None:
        """``Domain`` to emit, or ``None`` to omit the attribute."""
        return self.cookie_domain or None


def _to_same_site(value: SameSite | str | None) -> SameSite:
    if value is None or value == "":
        return SameSite.LAX
    if isinstance(value, SameSite):
        return value
    try:
        return SameSite(str(value).strip().lower())
    except ValueError as exc:
        raise ConfigurationException(
            f"Invalid cookie_same_site value '{value}'",
            code="CONFIG_SAME_SITE",
            context={"allowed": [s.value for s in SameSite]},
        ) from exc

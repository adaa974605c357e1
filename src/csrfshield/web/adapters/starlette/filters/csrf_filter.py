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
"""CsrfFilter: double-submit cookie CSRF protection.

Implements the `double-submit cookie`_ pattern:

* **Every request**: the token cookie is looked up; a missing or too short
  value is replaced by a fresh token, sent back with ``Set-Cookie``. The
  token is bound to the request scope for downstream handlers.
* **Safe methods** (anything but POST, PUT, PATCH, DELETE): passed through.
* **Unsafe methods**: optionally the ``Origin``/``Referer`` is checked
  against the allowed host, then the token presented in the header (or form
  field) must equal the cookie token under a timing-safe comparison.

Failures answer ``403`` (policy) or ``500`` (random source) with a plain-text
body and never reach the downstream app.

.. _double-submit cookie:
   https://cheatsheetseries.owasp.org/cheatsheets/Cross-Site_Request_Forgery_Prevention_Cheat_Sheet.html#double-submit-cookie
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from starlette.responses import PlainTextResponse

from csrfshield.config import CsrfProperties
from csrfshield.context import bind_token
from csrfshield.kernel.exceptions import (
    BadTokenException,
    CsrfViolation,
    MissingTokenException,
    TokenGenerationException,
)
from csrfshield.logging import get_csrf_logger
from csrfshield.security.origin import validate_origin_or_referer
from csrfshield.security.tokens import (
    UNSAFE_METHODS,
    generate_token,
    is_usable_cookie_token,
    tokens_match,
)
from csrfshield.web.adapters.starlette.extract import extract_client_token
from csrfshield.web.filters import CallNext, OncePerRequestFilter

logger = get_csrf_logger()

COOKIE_FAILURE_MESSAGE = "failed to set CSRF cookie"


class CsrfFilter(OncePerRequestFilter):
    """Double-submit cookie CSRF filter.

    Args:
        properties: Cookie, transport and policy settings. Defaults apply when omitted.
        url_patterns: Glob paths to protect. Empty protects every path.
        exclude_patterns: Glob paths that bypass the filter entirely.
    """

    def __init__(
        self,
        properties: CsrfProperties | None = None,
        *,
        url_patterns: Iterable[str] = (),
        exclude_patterns: Iterable[str] = (),
    ) -> None:
        super().__init__(url_patterns, exclude_patterns)
        self._properties = properties or CsrfProperties()

    @property
    def properties(self) -> CsrfProperties:
        return self._properties

    async def do_filter(self, request: Any, call_next: CallNext) -> Any:
        try:
            token, issued = self._resolve_token(request)
        except TokenGenerationException:
            logger.exception(
                "csrf_token_generation_failed",
                method=request.method,
                path=request.url.path,
            )
            return PlainTextResponse(COOKIE_FAILURE_MESSAGE, status_code=500)

        bind_token(request.scope, token)

        if request.method in UNSAFE_METHODS:
            try:
                await self._validate(request, token)
            except CsrfViolation as exc:
                logger.warning(
                    "csrf_rejected",
                    code=exc.code,
                    reason=exc.context.get("reason"),
                    method=request.method,
                    path=request.url.path,
                )
                response = PlainTextResponse(exc.message, status_code=exc.status_code)
                if issued:
                    self._set_cookie(response, token)
                return response

        response = await call_next(request)
        if issued:
            self._set_cookie(response, token)
        return response

    def _resolve_token(self, request: Any) -> tuple[str, bool]:
        """Return the current token and whether it was just issued."""
        existing = request.cookies.get(self._properties.cookie_name)
        if is_usable_cookie_token(existing):
            return existing, False

        token = generate_token(self._properties.token_bytes)
        logger.debug("csrf_token_issued", cookie=self._properties.cookie_name)
        return token, True

    async def _validate(self, request: Any, cookie_token: str) -> None:
        props = self._properties

        if props.enforce_origin_check:
            validate_origin_or_referer(
                request.headers.get("origin"),
                request.headers.get("referer"),
                _request_host(request),
                props.allowed_origin,
            )

        presented = await extract_client_token(request, props.header_name, props.form_field)
        if not presented:
            raise MissingTokenException(context={"reason": "no token presented"})

        if not tokens_match(presented, cookie_token):
            raise BadTokenException(context={"reason": "token mismatch"})

    def _set_cookie(self, response: Any, token: str) -> None:
        props = self._properties
        response.set_cookie(
            key=props.cookie_name,
            value=token,
            max_age=props.max_age,
            path=props.cookie_path,
            domain=props.domain,
            secure=props.cookie_secure,
            httponly=props.cookie_http_only,
            samesite=props.cookie_same_site.value,
        )


def _request_host(request: Any) -> str:
    host = request.headers.get("host")
    if host:
        return host
    return request.url.netloc

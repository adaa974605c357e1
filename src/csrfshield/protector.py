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
"""Protector: the public entry point of csrfshield.

Usage::

    from starlette.applications import Starlette
    from starlette.routing import Route

    from csrfshield import CsrfProperties, Protector

    protector = Protector(CsrfProperties(cookie_secure=True, enforce_origin_check=True))
    app = Starlette(routes=[Route("/csrf-token", protector.token_handler())])
    app = protector.protect(app)

A protector is configured once and then shared by all requests; it holds no
per-request state.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp

from csrfshield.config import CsrfProperties
from csrfshield.core.config import Config
from csrfshield.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from csrfshield.web.adapters.starlette.filters.csrf_filter import CsrfFilter
from csrfshield.web.adapters.starlette.token_endpoint import token_endpoint


class Protector:
    """Wraps ASGI applications with double-submit cookie CSRF protection.

    Args:
        properties: Protector settings; all defaults when omitted.
        exclude_patterns: Glob paths that bypass protection entirely.
    """

    def __init__(
        self,
        properties: CsrfProperties | None = None,
        *,
        exclude_patterns: Iterable[str] = (),
    ) -> None:
        self._properties = properties or CsrfProperties()
        self._filter = CsrfFilter(self._properties, exclude_patterns=exclude_patterns)

    @classmethod
    def from_config(cls, config: Config, **kwargs: Any) -> Protector:
        """Build a protector from the ``csrfshield.csrf`` section of *config*."""
        return cls(config.bind(CsrfProperties), **kwargs)

    @property
    def properties(self) -> CsrfProperties:
        return self._properties

    @property
    def filter(self) -> CsrfFilter:
        """The underlying filter, for composing into an existing filter chain."""
        return self._filter

    def protect(self, app: ASGIApp) -> ASGIApp:
        """Return *app* wrapped so every HTTP request passes through the CSRF filter."""
        return WebFilterChainMiddleware(app, filters=[self._filter])

    def token_handler(self) -> Callable[[Request], Awaitable[PlainTextResponse]]:
        """Return the endpoint that answers with the current token as plain text."""
        return token_endpoint

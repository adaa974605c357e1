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
"""WebFilterChainMiddleware: pure ASGI middleware running a sequence of WebFilters."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, cast

from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from csrfshield.web.filters import CallNext, WebFilter


class DownstreamResponse(Response):
    """Response standing in for the downstream app until it is sent.

    ``call_next`` returns one of these without running the app. Headers a
    filter adds (``set_cookie``, ``headers[...] = ...``) are appended to the
    app's own ``http.response.start`` message, and every body message is
    passed through as the app produces it, so streamed responses are never
    held back.

    The downstream status and body are not visible to filters.
    """

    def __init__(self, app: ASGIApp, scope: Scope, receive: Receive) -> None:
        self.app = app
        self.scope = scope
        self.receive = receive
        self.background = None
        self.raw_headers: list[tuple[bytes, bytes]] = []

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        extra_headers = self.raw_headers

        async def _send(message: Message) -> None:
            if message["type"] == "http.response.start" and extra_headers:
                message = {
                    **message,
                    "headers": [*message.get("headers", []), *extra_headers],
                }
            await send(message)

        await self.app(self.scope, self.receive, _send)


class WebFilterChainMiddleware:
    """Pure ASGI middleware that runs *filters* in order in front of *app*.

    Each filter's ``should_not_filter()`` is checked before invocation; if it
    returns ``True`` the filter is skipped. The terminal ``call_next`` returns
    a :class:`DownstreamResponse`; the app runs once the chain's result is
    sent, streaming straight to the client.

    Request body messages read by a filter (form parsing) are recorded and
    replayed to the downstream app, which therefore still sees the full body.
    """

    def __init__(self, app: ASGIApp, filters: Sequence[WebFilter] = ()) -> None:
        self.app = app
        self._filters = list(filters)

    @property
    def filters(self) -> list[WebFilter]:
        return list(self._filters)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        consumed: list[Message] = []

        async def _recording_receive() -> Message:
            message = await receive()
            consumed.append(message)
            return message

        async def _replaying_receive() -> Message:
            if consumed:
                return consumed.pop(0)
            return await receive()

        request = Request(scope, _recording_receive, send)

        async def _call_app(req: Any) -> Response:
            return DownstreamResponse(self.app, req.scope, _replaying_receive)

        chain: CallNext = _call_app
        for f in reversed(self._filters):
            chain = _wrap(f, chain)

        response = cast(Response, await chain(request))
        await response(scope, receive, send)


def _wrap(web_filter: WebFilter, next_call: CallNext) -> CallNext:
    """Create a closure that conditionally invokes *web_filter*."""

    async def _inner(request: Request) -> Response:
        if web_filter.should_not_filter(request):
            return cast(Response, await next_call(request))
        return cast(Response, await web_filter.do_filter(request, next_call))

    return _inner

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
"""Starlette application protected by csrfshield.

Run with any ASGI server, for example::

    uvicorn examples.starlette_app:app

``GET /csrf-token`` hands the token to a single-page client, which echoes it
back in the ``X-CSRF-Token`` header (or a ``csrf_token`` form field) on
``POST /transfer``.
"""

from __future__ import annotations

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.routing import Route

from csrfshield import CsrfProperties, Protector, configure_logging, csrf_token

configure_logging()

protector = Protector(
    CsrfProperties(
        cookie_secure=True,
        enforce_origin_check=True,
        # empty means the request's own Host header
        allowed_origin="app.example.com",
    )
)


async def home(request: Request) -> PlainTextResponse:
    token = csrf_token(request)
    if token is None:
        return PlainTextResponse("Hello!")
    return PlainTextResponse(f"Hello! CSRF token: {token}")


async def transfer(request: Request) -> PlainTextResponse:
    # only reached when the presented token matched the cookie
    return PlainTextResponse("ok", status_code=201)


app = protector.protect(
    Starlette(
        routes=[
            Route("/csrf-token", protector.token_handler()),
            Route("/", home),
            Route("/transfer", transfer, methods=["POST"]),
        ]
    )
)

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
"""Token endpoint for single-page applications.

Mount it behind the CSRF filter, e.g. ``Route("/csrf-token", token_endpoint)``;
it answers with the token bound to the current request as plain text.
"""

from __future__ import annotations

from starlette.requests import Request
from starlette.responses import PlainTextResponse

from csrfshield.context import csrf_token

NO_TOKEN_MESSAGE = "no token"


async def token_endpoint(request: Request) -> PlainTextResponse:
    """Return the request-scoped CSRF token, or ``500`` if the filter did not run."""
    token = csrf_token(request)
    if token is None:
        return PlainTextResponse(NO_TOKEN_MESSAGE, status_code=500)
    return PlainTextResponse(token)

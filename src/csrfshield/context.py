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
"""Request-scoped CSRF token binding.

The token resolved by the filter is stored in the ASGI ``scope`` of the
request under a namespaced key, so it lives exactly as long as the request
and is never shared between concurrent requests. Any Starlette ``Request``
built from the same scope downstream sees it.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

_TOKEN_SCOPE_KEY = "csrfshield.token"


def bind_token(scope: MutableMapping[str, Any], token: str) -> None:
    """Attach *token* to the request *scope*."""
    scope[_TOKEN_SCOPE_KEY] = token


def token_from_scope(scope: MutableMapping[str, Any]) -> str | None:
    """Return the token bound to *scope*, or ``None`` outside the filter."""
    token = scope.get(_TOKEN_SCOPE_KEY)
    return token if isinstance(token, str) else None


def csrf_token(request: Any) -> str | None:
    """Return the CSRF token bound to *request*, or ``None`` if the filter did not run."""
    return token_from_scope(request.scope)

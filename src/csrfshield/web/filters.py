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
"""Request filter contract and a path-aware base class.

Filters are framework-agnostic: they see the request through attribute
access (``request.method``, ``request.url.path``, ...) and return whatever
response object ``call_next`` produced, or their own.
"""

from __future__ import annotations

import abc
from collections.abc import Callable, Coroutine, Iterable
from fnmatch import fnmatch
from typing import Any, Protocol, runtime_checkable

# Next step in the chain: Callable[[Request], Coroutine[Any, Any, Response]]
CallNext = Callable[..., Coroutine[Any, Any, Any]]


@runtime_checkable
class WebFilter(Protocol):
    """Anything that can sit in a :class:`WebFilterChainMiddleware`."""

    async def do_filter(self, request: Any, call_next: CallNext) -> Any: ...

    def should_not_filter(self, request: Any) -> bool: ...


class OncePerRequestFilter(abc.ABC):
    """Base class for filters that apply to a subset of request paths.

    Args:
        url_patterns: Glob patterns the filter applies to. Empty means every path.
        exclude_patterns: Glob patterns skipped even when ``url_patterns`` match.
    """

    def __init__(
        self,
        url_patterns: Iterable[str] = (),
        exclude_patterns: Iterable[str] = (),
    ) -> None:
        self.url_patterns: tuple[str, ...] = tuple(url_patterns)
        self.exclude_patterns: tuple[str, ...] = tuple(exclude_patterns)

    def should_not_filter(self, request: Any) -> bool:
        """Return ``True`` if the request path is outside this filter's scope."""
        path: str = request.url.path
        if self.url_patterns and not any(fnmatch(path, p) for p in self.url_patterns):
            return True
        return any(fnmatch(path, p) for p in self.exclude_patterns)

    @abc.abstractmethod
    async def do_filter(self, request: Any, call_next: CallNext) -> Any:
        """Handle *request*; call ``await call_next(request)`` to continue the chain."""
        ...

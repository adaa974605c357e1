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
"""Tests for the request-scoped token binding."""

from __future__ import annotations

from types import SimpleNamespace

from csrfshield.context import bind_token, csrf_token, token_from_scope


class TestTokenBinding:
    def test_unbound_scope_returns_none(self):
        assert token_from_scope({}) is None

    def test_bound_token_is_returned(self):
        scope: dict = {}
        bind_token(scope, "abc123")
        assert token_from_scope(scope) == "abc123"

    def test_binding_is_per_scope(self):
        first: dict = {}
        second: dict = {}
        bind_token(first, "first-token")
        assert token_from_scope(second) is None

    def test_key_does_not_collide_with_plain_names(self):
        scope: dict = {"csrf_token": "application-value", "state": {"csrf_token": "other"}}
        assert token_from_scope(scope) is None

    def test_non_string_value_is_ignored(self):
        scope: dict = {}
        bind_token(scope, "abc")
        scope["csrfshield.token"] = 42
        assert token_from_scope(scope) is None

    def test_csrf_token_reads_request_scope(self):
        request = SimpleNamespace(scope={})
        assert csrf_token(request) is None
        bind_token(request.scope, "tok")
        assert csrf_token(request) == "tok"

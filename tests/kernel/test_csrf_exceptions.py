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
"""Tests for the csrfshield exception hierarchy."""

from __future__ import annotations

import pytest

from csrfshield.kernel.exceptions import (
    BadTokenException,
    ConfigurationException,
    CsrfShieldException,
    CsrfViolation,
    ForbiddenException,
    InfrastructureException,
    InvalidOriginException,
    MissingTokenException,
    SecurityException,
    TokenGenerationException,
)


class TestCsrfShieldException:
    def test_basic_creation(self):
        exc = CsrfShieldException("something went wrong")
        assert str(exc) == "something went wrong"
        assert exc.message == "something went wrong"
        assert exc.code is None
        assert exc.context == {}

    def test_with_code_and_context(self):
        exc = CsrfShieldException("bad", code="X_001", context={"key": "value"})
        assert exc.code == "X_001"
        assert exc.context["key"] == "value"

    def test_context_not_shared_between_instances(self):
        exc = CsrfShieldException("a")
        exc.context["key"] = "value"
        assert CsrfShieldException("b").context == {}


class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        ("child", "parent"),
        [
            (ConfigurationException, CsrfShieldException),
            (InfrastructureException, CsrfShieldException),
            (TokenGenerationException, InfrastructureException),
            (SecurityException, CsrfShieldException),
            (ForbiddenException, SecurityException),
            (CsrfViolation, ForbiddenException),
            (InvalidOriginException, CsrfViolation),
            (MissingTokenException, CsrfViolation),
            (BadTokenException, CsrfViolation),
        ],
    )
    def test_subclass(self, child, parent):
        assert issubclass(child, parent)


class TestCsrfViolations:
    @pytest.mark.parametrize(
        ("exc_cls", "message", "code"),
        [
            (InvalidOriginException, "invalid origin", "CSRF_INVALID_ORIGIN"),
            (MissingTokenException, "missing CSRF token", "CSRF_MISSING_TOKEN"),
            (BadTokenException, "bad CSRF token", "CSRF_BAD_TOKEN"),
        ],
    )
    def test_defaults(self, exc_cls, message, code):
        exc = exc_cls()
        assert exc.message == message
        assert exc.code == code
        assert exc.status_code == 403

    def test_context_is_kept(self):
        exc = InvalidOriginException(context={"reason": "origin mismatch"})
        assert exc.context == {"reason": "origin mismatch"}

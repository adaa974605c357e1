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
"""Unified exception hierarchy for csrfshield.

All library exceptions inherit from CsrfShieldException, so callers can
catch the base class or a specific category.

Categories:
- ConfigurationException: invalid protector configuration
- InfrastructureException: the runtime environment failed (e.g. randomness)
- SecurityException: a request violated the CSRF policy
"""

from __future__ import annotations


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------


class CsrfShieldException(Exception):
    """Base exception for all csrfshield errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CSRF_BAD_TOKEN").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.context: dict = context if context is not None else {}


class ConfigurationException(CsrfShieldException):
    """A configuration value is invalid or cannot be coerced."""


# ---------------------------------------------------------------------------
# Infrastructure
# ---------------------------------------------------------------------------


class InfrastructureException(CsrfShieldException):
    """The runtime environment failed to provide something the filter needs."""


class TokenGenerationException(InfrastructureException):
    """The cryptographic random source failed while generating a token."""


# ---------------------------------------------------------------------------
# Security
# ---------------------------------------------------------------------------


class SecurityException(CsrfShieldException):
    """Request rejected by a security policy."""


class ForbiddenException(SecurityException):
    """The request is not allowed to proceed."""

    status_code: int = 403


class CsrfViolation(ForbiddenException):
    """A state-changing request failed CSRF validation.

    Subclasses fix the message and code that are sent back to the caller.
    """

    default_message: str = "CSRF validation failed"
    default_code: str = "CSRF_VIOLATION"

    def __init__(self, message: str | None = None, context: dict | None = None) -> None:
        super().__init__(message or self.default_message, code=self.default_code, context=context)


class InvalidOriginException(CsrfViolation):
    """Origin/Referer missing or not matching the allowed host."""

    default_message = "invalid origin"
    default_code = "CSRF_INVALID_ORIGIN"


class MissingTokenException(CsrfViolation):
    """No token was presented in the header or form field."""

    default_message = "missing CSRF token"
    default_code = "CSRF_MISSING_TOKEN"


class BadTokenException(CsrfViolation):
    """The presented token does not match the cookie token."""

    default_message = "bad CSRF token"
    default_code = "CSRF_BAD_TOKEN"

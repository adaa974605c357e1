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
"""csrfshield: double-submit cookie CSRF protection for ASGI applications."""

from csrfshield.config import CsrfProperties, SameSite
from csrfshield.context import csrf_token
from csrfshield.core.config import Config
from csrfshield.kernel.exceptions import (
    BadTokenException,
    CsrfShieldException,
    CsrfViolation,
    InvalidOriginException,
    MissingTokenException,
    TokenGenerationException,
)
from csrfshield.logging import configure_logging
from csrfshield.protector import Protector
from csrfshield.web.adapters.starlette.filters.csrf_filter import CsrfFilter
from csrfshield.web.adapters.starlette.token_endpoint import token_endpoint

__version__ = "0.1.0"

__all__ = [
    "BadTokenException",
    "Config",
    "CsrfFilter",
    "CsrfProperties",
    "CsrfShieldException",
    "CsrfViolation",
    "InvalidOriginException",
    "MissingTokenException",
    "Protector",
    "SameSite",
    "TokenGenerationException",
    "configure_logging",
    "csrf_token",
    "token_endpoint",
]

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
"""csrfshield security: token and origin helpers."""

from csrfshield.security.origin import same_host, validate_origin_or_referer
from csrfshield.security.tokens import (
    MIN_TOKEN_LENGTH,
    UNSAFE_METHODS,
    generate_token,
    is_usable_cookie_token,
    tokens_match,
)

__all__ = [
    "MIN_TOKEN_LENGTH",
    "UNSAFE_METHODS",
    "generate_token",
    "is_usable_cookie_token",
    "same_host",
    "tokens_match",
    "validate_origin_or_referer",
]

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
"""Client-token extraction for Starlette requests.

The header wins; otherwise the token is looked up in the submitted form
(``application/x-www-form-urlencoded`` or ``multipart/form-data``) and then
in the query string. A missing, empty or unparseable body simply means no
token was found.
"""

from __future__ import annotations

from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import ClientDisconnect, Request


async def extract_client_token(request: Request, header_name: str, form_field: str) -> str | None:
    """Return the token the client presented, or ``None`` if there is none."""
    header_value = request.headers.get(header_name)
    if header_value:
        return header_value

    try:
        async with request.form() as form:
            form_value = form.get(form_field)
    except (MultiPartException, HTTPException, ClientDisconnect, ValueError):
        # python-multipart parse errors derive from ValueError
        form_value = None

    if form_value and not isinstance(form_value, UploadFile):
        return str(form_value)

    return request.query_params.get(form_field) or None

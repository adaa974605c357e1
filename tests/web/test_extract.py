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
"""Tests for client-token extraction from headers, forms and query strings."""

from __future__ import annotations

from urllib.parse import urlencode

import pytest
from starlette.requests import Request

from csrfshield.web.adapters.starlette.extract import extract_client_token

HEADER = "X-CSRF-Token"
FIELD = "csrf_token"


def _make_request(
    body: bytes = b"",
    content_type: str | None = None,
    headers: dict[str, str] | None = None,
    query: str = "",
) -> Request:
    raw_headers = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    if content_type is not None:
        raw_headers.append((b"content-type", content_type.encode()))
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/submit",
        "query_string": query.encode(),
        "headers": raw_headers,
    }

    async def receive() -> dict:
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, receive)


def _multipart(fields: dict[str, str], boundary: str = "csrfshieldboundary") -> tuple[bytes, str]:
    lines: list[str] = []
    for name, value in fields.items():
        lines += [f"--{boundary}", f'Content-Disposition: form-data; name="{name}"', "", value]
    lines += [f"--{boundary}--", ""]
    return "\r\n".join(lines).encode(), f"multipart/form-data; boundary={boundary}"


class TestHeader:
    @pytest.mark.asyncio
    async def test_header_value_returned(self) -> None:
        request = _make_request(headers={HEADER: "header-token"})
        assert await extract_client_token(request, HEADER, FIELD) == "header-token"

    @pytest.mark.asyncio
    async def test_header_lookup_is_case_insensitive(self) -> None:
        request = _make_request(headers={"x-csrf-token": "header-token"})
        assert await extract_client_token(request, HEADER, FIELD) == "header-token"

    @pytest.mark.asyncio
    async def test_header_wins_over_form(self) -> None:
        request = _make_request(
            body=urlencode({FIELD: "form-token"}).encode(),
            content_type="application/x-www-form-urlencoded",
            headers={HEADER: "header-token"},
        )
        assert await extract_client_token(request, HEADER, FIELD) == "header-token"

    @pytest.mark.asyncio
    async def test_empty_header_falls_back_to_form(self) -> None:
        request = _make_request(
            body=urlencode({FIELD: "form-token"}).encode(),
            content_type="application/x-www-form-urlencoded",
            headers={HEADER: ""},
        )
        assert await extract_client_token(request, HEADER, FIELD) == "form-token"


class TestForm:
    @pytest.mark.asyncio
    async def test_urlencoded_field(self) -> None:
        request = _make_request(
            body=urlencode({"title": "hello", FIELD: "form-token"}).encode(),
            content_type="application/x-www-form-urlencoded",
        )
        assert await extract_client_token(request, HEADER, FIELD) == "form-token"

    @pytest.mark.asyncio
    async def test_multipart_field(self) -> None:
        body, content_type = _multipart({"title": "hello", FIELD: "multipart-token"})
        request = _make_request(body=body, content_type=content_type)
        assert await extract_client_token(request, HEADER, FIELD) == "multipart-token"

    @pytest.mark.asyncio
    async def test_custom_field_name(self) -> None:
        request = _make_request(
            body=urlencode({"_token": "form-token"}).encode(),
            content_type="application/x-www-form-urlencoded",
        )
        assert await extract_client_token(request, HEADER, "_token") == "form-token"

    @pytest.mark.asyncio
    async def test_empty_field_is_not_found(self) -> None:
        request = _make_request(
            body=urlencode({FIELD: ""}).encode(),
            content_type="application/x-www-form-urlencoded",
        )
        assert await extract_client_token(request, HEADER, FIELD) is None


class TestQueryString:
    @pytest.mark.asyncio
    async def test_query_parameter_fallback(self) -> None:
        request = _make_request(query=urlencode({FIELD: "query-token"}))
        assert await extract_client_token(request, HEADER, FIELD) == "query-token"

    @pytest.mark.asyncio
    async def test_form_wins_over_query(self) -> None:
        request = _make_request(
            body=urlencode({FIELD: "form-token"}).encode(),
            content_type="application/x-www-form-urlencoded",
            query=urlencode({FIELD: "query-token"}),
        )
        assert await extract_client_token(request, HEADER, FIELD) == "form-token"


class TestNotFound:
    @pytest.mark.asyncio
    async def test_no_body(self) -> None:
        assert await extract_client_token(_make_request(), HEADER, FIELD) is None

    @pytest.mark.asyncio
    async def test_json_body_is_not_a_form(self) -> None:
        request = _make_request(body=b'{"csrf_token": "json-token"}', content_type="application/json")
        assert await extract_client_token(request, HEADER, FIELD) is None

    @pytest.mark.asyncio
    async def test_multipart_without_boundary(self) -> None:
        request = _make_request(body=b"garbage", content_type="multipart/form-data")
        assert await extract_client_token(request, HEADER, FIELD) is None

    @pytest.mark.asyncio
    async def test_malformed_multipart_body(self) -> None:
        request = _make_request(
            body=b"\x00\x01 definitely not multipart",
            content_type="multipart/form-data; boundary=csrfshieldboundary",
        )
        assert await extract_client_token(request, HEADER, FIELD) is None

"""Tests for the two-step export client against a local aiohttp server."""

import asyncio
import time

import pytest
from aiohttp import web
from aiohttp import test_utils

from poeditor_sync.downloader import (
    ExportFailure,
    ExportRequest,
    ExportSuccess,
    HTTPClient,
    RemoteExportClient,
)
from poeditor_sync.exceptions import RemoteAPIError, TransportError

EXPORTS = {
    "en": '"greeting" = "Hello %s";',
    "zh-CN": '"greeting" = "你好 %s";\n',
}


def make_app(calls, export_body=None):
    async def export(request):
        form = dict(await request.post())
        calls.append(form)

        if isinstance(export_body, bytes):
            return web.Response(body=export_body, content_type="application/json")
        if export_body is not None:
            return web.Response(text=export_body, content_type="application/json")

        if form["api_token"] != "token":
            return web.json_response(
                {"response": {"status": "fail", "code": "4001", "message": "invalid api token"}}
            )

        url = str(request.url.with_path(f"/download/{form['language']}").with_query(None))
        return web.json_response(
            {
                "response": {"status": "success", "code": "200", "message": "OK"},
                "result": {"url": url},
            }
        )

    async def download(request):
        language = request.match_info["language"]
        if language not in EXPORTS:
            raise web.HTTPNotFound()
        return web.Response(text=EXPORTS[language])

    app = web.Application()
    app.router.add_post("/v2/projects/export", export)
    app.router.add_get("/download/{language}", download)
    return app


def run_against_server(action, export_body=None):
    """Run ``action(client)`` with a client pointed at a local server."""
    calls = []

    async def main():
        async with test_utils.TestServer(make_app(calls, export_body)) as server:
            async with HTTPClient(timeout=5) as http:
                client = RemoteExportClient(http, base_url=str(server.make_url("/v2/")))
                return await action(client)

    return asyncio.run(main()), calls


def request_for(language="en", **overrides):
    values = {
        "api_key": "token",
        "project_id": "12345",
        "language": language,
        "type": "apple_strings",
    }
    values.update(overrides)
    return ExportRequest(**values)


def test_form_body_fields():
    request = request_for(filters=("translated", "fuzzy"), tags=("ios",))

    assert request.to_form() == {
        "api_token": "token",
        "id": "12345",
        "language": "en",
        "type": "apple_strings",
        "filters": "translated,fuzzy",
        "tags": "ios",
    }


def test_empty_filters_and_tags_are_empty_strings():
    form = request_for().to_form()

    assert form["filters"] == ""
    assert form["tags"] == ""


def test_export_url_joins_base_url():
    client = RemoteExportClient(HTTPClient(), base_url="https://example.test/v2")

    assert client.export_url == "https://example.test/v2/projects/export"


def test_default_endpoint():
    client = RemoteExportClient(HTTPClient())

    assert client.export_url == "https://api.poeditor.com/v2/projects/export"


def test_successful_export_returns_raw_content():
    result, calls = run_against_server(lambda client: client.request_export(request_for("en")))

    assert isinstance(result, ExportSuccess)
    assert result.ok
    # No placeholder rewrite or newline at this layer
    assert result.content == EXPORTS["en"]
    assert calls == [
        {
            "api_token": "token",
            "id": "12345",
            "language": "en",
            "type": "apple_strings",
            "filters": "",
            "tags": "",
        }
    ]


def test_unicode_content():
    content, _ = run_against_server(lambda client: client.export(request_for("zh-CN")))

    assert content == EXPORTS["zh-CN"]


def test_failure_status_returns_failure():
    result, calls = run_against_server(
        lambda client: client.request_export(request_for(api_key="wrong"))
    )

    assert isinstance(result, ExportFailure)
    assert not result.ok
    assert result.code == "4001"
    assert result.message == "invalid api token"
    assert len(calls) == 1


def test_export_raises_remote_api_error():
    with pytest.raises(RemoteAPIError) as excinfo:
        run_against_server(lambda client: client.export(request_for(api_key="wrong")))

    assert excinfo.value.code == "4001"
    assert excinfo.value.message == "invalid api token"
    assert str(excinfo.value) == "invalid api token (4001)"


def test_malformed_response_is_transport_error():
    with pytest.raises(TransportError, match="Unexpected export response"):
        run_against_server(
            lambda client: client.export(request_for()), export_body="<html>oops</html>"
        )


def test_success_without_url_is_transport_error():
    body = '{"response": {"status": "success", "code": "200", "message": "OK"}}'

    with pytest.raises(TransportError, match="no download URL"):
        run_against_server(lambda client: client.export(request_for()), export_body=body)


def test_download_error_is_transport_error():
    with pytest.raises(TransportError, match="Download failed") as excinfo:
        run_against_server(lambda client: client.export(request_for("xx")))

    assert excinfo.value.url.endswith("/download/xx")


def test_unreachable_host_is_transport_error():
    async def main():
        async with HTTPClient(timeout=5) as http:
            client = RemoteExportClient(http, base_url="http://127.0.0.1:1/v2/")
            return await client.export(request_for())

    with pytest.raises(TransportError, match="Request failed"):
        asyncio.run(main())


def test_non_utf8_api_response_is_transport_error():
    with pytest.raises(TransportError, match="not valid UTF-8"):
        run_against_server(
            lambda client: client.export(request_for()), export_body=b'{"response": "\xff\xfe"}'
        )


def test_rate_limit_spaces_out_requests():
    async def main():
        # 600 requests per minute: one every 0.1s
        async with HTTPClient(timeout=5, requests_per_minute=600) as http:
            started = time.monotonic()
            for _ in range(3):
                await http._apply_rate_limit()
            return time.monotonic() - started

    assert asyncio.run(main()) >= 0.19


def test_no_rate_limit_by_default():
    async def main():
        async with HTTPClient(timeout=5) as http:
            started = time.monotonic()
            for _ in range(20):
                await http._apply_rate_limit()
            return time.monotonic() - started

    assert asyncio.run(main()) < 0.1


def test_rate_limited_export_still_succeeds():
    async def action(client):
        client.client._min_interval = 0.05
        return [await client.export(request_for(language)) for language in ("en", "zh-CN")]

    contents, calls = run_against_server(action)

    assert contents == [EXPORTS["en"], EXPORTS["zh-CN"]]
    assert [call["language"] for call in calls] == ["en", "zh-CN"]
